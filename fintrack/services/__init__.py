"""
Services Package

External resources FinanceTracker talks to. Today that is only the
local key-value storage.
"""

from fintrack.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
)

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
]
