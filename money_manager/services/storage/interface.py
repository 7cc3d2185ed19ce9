"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a small key-value port.
This allows us to:
1. Swap the JSON file backend for an embedded database later
2. Use in-memory storage for testing
3. Keep the Store decoupled from where bytes end up

The port deals in serialized strings only. Encoding records is the
Store's job.
"""

from abc import ABC, abstractmethod
from typing import Optional


TRANSACTIONS_KEY = "transactions"
CATEGORIES_KEY = "categories"


class StoragePort(ABC):
    """
    Abstract interface for local key-value persistence.

    Any storage implementation (JSON files, in-memory, SQLite, etc.)
    must implement these methods.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read the serialized record stored under a key.

        Args:
            key: Record name (e.g. "transactions")

        Returns:
            The stored string, or None if nothing was ever saved

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """
        Replace the record stored under a key.

        Args:
            key: Record name
            value: Serialized record

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptRecordError(StorageError):
    """A stored record exists but cannot be decoded."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored record '{key}' is corrupt: {reason}")
