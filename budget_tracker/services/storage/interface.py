"""
Abstract Storage Interface

The ledger and preferences are persisted through a minimal async
key-value store: string keys, string values, whole-value overwrite.
Implementations exist for in-memory use (tests, previews) and for a
single JSON file on disk.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for key-value storage.

    Implementations raise ``StorageError`` subclasses on failure and
    never return partially written values.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The key to read

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous value.

        Args:
            key: The key to write
            value: The full value

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written."""
    pass


class StorageCorruptError(StorageReadError):
    """Stored data was read but could not be decoded."""
    pass
