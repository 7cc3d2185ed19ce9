"""Services package."""

from money_manager.services.storage import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    CorruptRecordError,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
    StoragePort,
)

__all__ = [
    "CATEGORIES_KEY",
    "TRANSACTIONS_KEY",
    "CorruptRecordError",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
    "StoragePort",
]
