"""
JSON File Storage Implementation

DESIGN DECISION: Each key is one JSON document in a data directory.
This is the desktop equivalent of browser local storage:
1. Survives restarts on the same machine and user profile
2. Users can read their data with any text editor
3. One corrupt key never takes the others down with it

TRADEOFFS:
- No transactions (a write replaces one file atomically, nothing more)
- No cross-process coordination (single user, single session)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.services.storage.interface import (
    KeyValueStoreInterface,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
    validate_key,
)


SUFFIX = ".json"

logger = structlog.get_logger(__name__)


class JsonFileStore(KeyValueStoreInterface):
    """
    Key-value store keeping one UTF-8 JSON file per key.

    Writes go to a temporary file in the same directory and are then
    renamed over the target, so a crash mid-write leaves the previous
    value intact.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        max_bytes: Optional[int] = None,
    ):
        super().__init__()
        self._data_dir = Path(data_dir).expanduser()
        self._max_bytes = max_bytes
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(
                f"Cannot create data directory {self._data_dir}: {e}"
            ) from e

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{validate_key(key)}{SUFFIX}"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Cannot read {path}: {e}") from e

    def _write(self, key: str, payload: str) -> None:
        data = payload.encode("utf-8")
        if self._max_bytes is not None and len(data) > self._max_bytes:
            raise StorageQuotaExceededError(
                f"Value for '{key}' is {len(data)} bytes; limit is {self._max_bytes}"
            )
        try:
            self._replace(self.path_for(key), data)
        except OSError as e:
            logger.error("storage_write_failed", key=key, error=str(e))
            raise StorageWriteError(f"Cannot write '{key}': {e}") from e

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        reraise=True,
    )
    def _replace(self, target: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir, prefix=f".{target.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, target)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def delete(self, key: str) -> None:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            pass

    def keys(self) -> list[str]:
        return sorted(
            path.stem
            for path in self._data_dir.glob(f"*{SUFFIX}")
            if not path.name.startswith(".")
        )
