"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
"""

from budget_tracker.services.storage.interface import (
    KeyValueStore,
    StorageCorruptError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from budget_tracker.services.storage.memory import InMemoryKeyValueStore
from budget_tracker.services.storage.json_file import JsonFileKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "StorageCorruptError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
