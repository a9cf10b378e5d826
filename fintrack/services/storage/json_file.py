"""
JSON File Storage Implementation

The whole key-value store is one JSON object on disk:

    {"currentUser": "ana", "budget-ana": "5000", "transactions-ana": "[...]"}

TRADEOFFS:
- Every write rewrites the file (fine for one person's ledger)
- Last writer wins if two processes share a file; there is no merging

Writes go to a temporary file next to the target, are flushed and
fsynced, then atomically renamed over it, so readers see either the old
file or the new one.
"""

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from fintrack.logs import get_logger
from fintrack.services.storage.interface import (
    KeyValueStorage,
    StorageReadError,
    StorageWriteError,
)


logger = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """File-backed key-value storage."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """
        Load the whole store.

        A missing file is an empty store. A file that is not a UTF-8 JSON
        object of strings is also treated as empty (and logged); the next
        write replaces it.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as e:
            logger.warning("storage_file_malformed", path=str(self._path), error=str(e))
            return {}
        except OSError as e:
            raise StorageReadError(f"Could not read {self._path}: {e}") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning("storage_file_malformed", path=str(self._path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning(
                "storage_file_malformed",
                path=str(self._path),
                error=f"expected object, got {type(data).__name__}",
            )
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    @contextmanager
    def _atomic_write(self) -> Iterator:
        """
        Yield a text handle to a temp file that replaces the store on success.

        The temp file is removed on every failure path.
        """
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=directory,
            )
        except OSError as e:
            raise StorageWriteError(f"Could not write {self._path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                yield handle
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise StorageWriteError(f"Could not write {self._path}: {e}") from e
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _write_all(self, data: dict[str, str]) -> None:
        with self._atomic_write() as handle:
            json.dump(data, handle, ensure_ascii=False, indent=2, sort_keys=True)

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            raise StorageWriteError(str(e)) from e
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        try:
            data = self._read_all()
        except StorageReadError as e:
            raise StorageWriteError(str(e)) from e
        if key not in data:
            return
        del data[key]
        self._write_all(data)
