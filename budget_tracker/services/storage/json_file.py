"""
JSON File Storage Implementation

The whole store is one JSON object mapping keys to string values.
Every write rewrites the file through a uniquely named temporary
sibling and ``os.replace``, so a failed write leaves the previous file
in place.

Writes are read-modify-write of the whole file and are serialized by
a lock held per store instance. Transient ``OSError``s on write are
retried with tenacity.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from budget_tracker.config import get_settings
from budget_tracker.services.storage.interface import (
    KeyValueStore,
    StorageCorruptError,
    StorageReadError,
    StorageWriteError,
)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted to a single JSON file."""

    def __init__(
        self,
        path: Optional[Path] = None,
        write_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path) if path else settings.store_path
        self._write_attempts = write_attempts or settings.write_attempts
        self._write_lock = asyncio.Lock()
        self._logger = structlog.get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._update, key, value)

    async def delete(self, key: str) -> bool:
        async with self._write_lock:
            return await asyncio.to_thread(self._update, key, None)

    def _read_all(self) -> dict[str, str]:
        """
        Read the whole store.

        Raises:
            StorageReadError: If the file exists but cannot be read
            StorageCorruptError: If the file was read but is not a
                JSON object of strings
        """
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageCorruptError(f"Store {self._path} is not valid UTF-8: {e}")
        except OSError as e:
            raise StorageReadError(f"Failed to read store {self._path}: {e}")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageCorruptError(f"Store {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise StorageCorruptError(f"Store {self._path} is not a JSON object")
        for key, value in data.items():
            if not isinstance(value, str):
                raise StorageCorruptError(f"Value for {key!r} is not a string")
        return data

    def _update(self, key: str, value: Optional[str]) -> bool:
        try:
            data = self._read_all()
        except StorageCorruptError as e:
            # An undecodable store is replaced by the new contents
            self._logger.warning("store_unreadable_overwriting", path=str(self._path), error=str(e))
            data = {}
        except StorageReadError as e:
            # Other keys are unknown, so nothing is written
            raise StorageWriteError(f"Cannot update store {self._path}: {e}")

        existed = key in data
        if value is None:
            if not existed:
                return False
            del data[key]
        else:
            data[key] = value

        payload = json.dumps(data, indent=2, sort_keys=True)
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._write_attempts),
                wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            ):
                with attempt:
                    self._write_file(payload)
        except OSError as e:
            raise StorageWriteError(f"Failed to write store {self._path}: {e}")
        return existed

    def _write_file(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=f"{self._path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            tmp_path = handle.name
        try:
            os.replace(tmp_path, self._path)
        except OSError:
            os.unlink(tmp_path)
            raise
