"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
JSON files are the default backend; the in-memory store is used for tests
and when the data directory is unavailable.
"""

from src.services.storage.interface import (
    KEY_PATTERN,
    KeyValueStoreInterface,
    StorageError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
    validate_key,
)
from src.services.storage.json_file import JsonFileStore
from src.services.storage.memory import InMemoryStore
from src.services.storage.persistent import PersistentValue

__all__ = [
    # Interface
    "KEY_PATTERN",
    "KeyValueStoreInterface",
    "validate_key",
    # Exceptions
    "StorageError",
    "StorageQuotaExceededError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
    "PersistentValue",
]
