"""
JSON File Storage Implementation

Each key is stored as `<data_dir>/<key>.json`. This is the desktop
equivalent of browser local storage: small, local, human-readable.

Writes go to a temporary file in the same directory and are then
renamed over the target, so a crash mid-write never leaves a half
written record behind.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from money_manager.config import get_settings
from money_manager.services.storage.interface import (
    CorruptRecordError,
    StorageError,
    StoragePort,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileStorage(StoragePort):
    """File-per-key storage in a local directory."""

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir or get_settings().storage.data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise CorruptRecordError(key, f"not valid UTF-8: {e.reason}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def save(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._data_dir,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
