"""
Storage Services Package

Provides the abstract key-value port and concrete implementations.
JSON files are the default backend; in-memory storage backs tests.
"""

from money_manager.services.storage.interface import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    CorruptRecordError,
    StorageError,
    StoragePort,
)
from money_manager.services.storage.json_file import JsonFileStorage
from money_manager.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "StoragePort",
    "CATEGORIES_KEY",
    "TRANSACTIONS_KEY",
    # Exceptions
    "CorruptRecordError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
