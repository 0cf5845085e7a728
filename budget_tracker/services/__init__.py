"""Services package."""

from budget_tracker.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageCorruptError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from budget_tracker.services.preferences import PreferenceService

__all__ = [
    # Storage services
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageCorruptError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Preferences
    "PreferenceService",
]
