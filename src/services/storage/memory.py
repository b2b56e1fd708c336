"""
In-Memory Storage Implementation

Used by tests and as a fallback when the configured data directory cannot
be used. Values are kept as serialized JSON text, so they go through the
same encode/validate path as the file backend.
"""

from typing import Optional

from src.services.storage.interface import (
    KeyValueStoreInterface,
    StorageQuotaExceededError,
    validate_key,
)


class InMemoryStore(KeyValueStoreInterface):
    """
    Dict-backed store that lives as long as the process.

    max_bytes caps the size of any single value, mimicking the quota a
    browser puts on local storage.
    """

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        max_bytes: Optional[int] = None,
    ):
        super().__init__()
        self._data: dict[str, str] = {}
        self._max_bytes = max_bytes
        for key, payload in (initial or {}).items():
            self._data[validate_key(key)] = payload

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, payload: str) -> None:
        size = len(payload.encode("utf-8"))
        if self._max_bytes is not None and size > self._max_bytes:
            raise StorageQuotaExceededError(
                f"Value for '{key}' is {size} bytes; limit is {self._max_bytes}"
            )
        self._data[key] = payload

    def delete(self, key: str) -> None:
        self._data.pop(validate_key(key), None)

    def keys(self) -> list[str]:
        return list(self._data)

    def raw(self, key: str) -> Optional[str]:
        """Stored JSON text for key, for inspection."""
        return self._data.get(key)
