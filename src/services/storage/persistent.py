"""
Typed Persistent Values

A PersistentValue is the in-memory mirror of one storage key: it loads
once when created and writes the whole value back on every change.
Reads never touch storage.
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from src.services.storage.interface import KeyValueStoreInterface


T = TypeVar("T")


class PersistentValue(Generic[T]):
    """
    Load-on-init, write-on-change wrapper around a single key.

    If a write fails, the mirror still holds the new value: the user keeps
    seeing what they just did, it just will not survive a reload.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        key: str,
        default: T,
        type_: Any = None,
    ):
        self._store = store
        self._key = key
        self._type = type_ if type_ is not None else type(default)
        self._value: T = store.load(key, default, self._type)

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> T:
        """
        Replace the value and persist it.

        Raises:
            StorageWriteError: If persisting failed (the mirror is still updated)
        """
        self._value = value
        self._store.save(self._key, value, self._type)
        return value

    def update(self, fn: Callable[[T], T]) -> T:
        """Apply fn to the current value and persist the result."""
        return self.set(fn(self._value))

    def reload(self, default: Optional[T] = None) -> T:
        """Re-read the key from storage, discarding the mirror."""
        fallback = default if default is not None else self._value
        self._value = self._store.load(self._key, fallback, self._type)
        return self._value
