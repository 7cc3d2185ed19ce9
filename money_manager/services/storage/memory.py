"""In-memory storage, used by tests and throwaway sessions."""

from typing import Optional

from money_manager.services.storage.interface import StoragePort


class InMemoryStorage(StoragePort):
    """Dict-backed storage port. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._records: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def load(self, key: str) -> Optional[str]:
        return self._records.get(key)

    def save(self, key: str, value: str) -> None:
        self._records[key] = value
        self.write_count += 1

    def keys(self) -> list[str]:
        return sorted(self._records)
