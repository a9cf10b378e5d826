"""
Storage Services Package

Provides the key-value storage interface and its implementations.
The JSON file backend is the default; the in-memory one backs tests.
"""

from fintrack.services.storage.interface import (
    CURRENT_USER_KEY,
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
    budget_key,
    transactions_key,
)
from fintrack.services.storage.json_file import JsonFileStorage
from fintrack.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    "CURRENT_USER_KEY",
    "budget_key",
    "transactions_key",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
