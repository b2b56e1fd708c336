"""Services package."""

from src.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStoreInterface,
    PersistentValue,
    StorageError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Storage services
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStoreInterface",
    "PersistentValue",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageReadError",
    "StorageWriteError",
]
