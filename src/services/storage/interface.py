"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key-value interface for persistence.
This allows us to:
1. Keep data in local JSON files for the real app
2. Use in-memory storage for testing
3. Swap the medium later without touching budget logic

The contract is deliberately tiny: load a value by key (falling back to a
default when the stored value is missing or unusable) and save a whole
value by key. Backends only implement raw reads and writes of JSON text;
parsing and shape validation happen here, once, for every backend.
"""

import re
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Optional, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError


T = TypeVar("T")

KEY_PATTERN = re.compile(r"[A-Za-z0-9._-]+")

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def validate_key(key: str) -> str:
    """
    Raises:
        ValueError: If the key is empty or uses characters outside [A-Za-z0-9._-]
    """
    if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Any storage implementation (JSON files, in-memory, etc.)
    must implement the raw read/write/delete methods.
    """

    def __init__(self):
        # Called with (key, reason) whenever load() falls back to a default.
        self.on_load_recovered = None

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """
        Read the raw JSON text stored under key.

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageReadError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def _write(self, key: str, payload: str) -> None:
        """
        Durably store payload under key, replacing any previous value.

        Raises:
            StorageWriteError: If the write did not happen
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass

    def load(self, key: str, default: T, type_: Any = None) -> T:
        """
        Load the value stored under key.

        Args:
            key: Storage key
            default: Returned when nothing usable is stored
            type_: Expected type; defaults to type(default)

        Returns:
            The stored value parsed into type_, or default. Never raises
            for missing, unreadable or malformed data.
        """
        validate_key(key)
        expected = type_ if type_ is not None else type(default)

        try:
            raw = self._read(key)
        except StorageReadError as e:
            self._recovered(key, f"read failed: {e}")
            return default

        if raw is None:
            return default

        try:
            return _adapter(expected).validate_json(raw)
        except ValidationError as e:
            self._recovered(key, f"malformed value: {e.error_count()} error(s)")
            return default

    def save(self, key: str, value: Any, type_: Any = None) -> None:
        """
        Serialize the full value and write it under key.

        Raises:
            StorageWriteError: If the value could not be persisted
        """
        validate_key(key)
        adapter = _adapter(type_ if type_ is not None else type(value))
        payload = adapter.dump_json(value, by_alias=True).decode("utf-8")
        self._write(key, payload)
        logger.debug("storage_saved", key=key, size=len(payload))

    def _recovered(self, key: str, reason: str) -> None:
        logger.warning("storage_load_recovered", key=key, reason=reason)
        if self.on_load_recovered is not None:
            self.on_load_recovered(key, reason)


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The storage medium could not be read."""
    pass


class StorageWriteError(StorageError):
    """A value could not be persisted."""
    pass


class StorageQuotaExceededError(StorageWriteError):
    """The value is larger than the storage allows."""
    pass
