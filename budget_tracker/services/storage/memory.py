"""In-memory key-value store."""

from typing import Optional

from budget_tracker.services.storage.interface import (
    KeyValueStore,
    StorageReadError,
    StorageWriteError,
)


class InMemoryKeyValueStore(KeyValueStore):
    """
    Dictionary-backed store.

    ``fail_reads`` and ``fail_writes`` make every call raise, which lets
    callers exercise their degraded paths.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.write_count = 0

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageReadError(f"Read of {key!r} failed")
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"Write of {key!r} failed")
        self._data[key] = value
        self.write_count += 1

    async def delete(self, key: str) -> bool:
        if self.fail_writes:
            raise StorageWriteError(f"Delete of {key!r} failed")
        return self._data.pop(key, None) is not None

    def snapshot(self) -> dict[str, str]:
        """Copy of the stored data."""
        return dict(self._data)
