"""
Abstract Key-Value Storage Interface

All persistence goes through a tiny string key-value contract, the same
shape as browser local storage. This allows us to:
1. Keep everything on the user's machine in one JSON file
2. Use in-memory storage for testing
3. Swap in another backend without touching the ledger code

Values are plain strings; callers own their encoding (JSON arrays for
transactions, a decimal string for the budget).
"""

from abc import ABC, abstractmethod
from typing import Optional


# Written by the session layer; absence means "logged out".
CURRENT_USER_KEY = "currentUser"


def transactions_key(user_id: str) -> str:
    """Key holding the JSON array of a user's transactions."""
    return f"transactions-{user_id}"


def budget_key(user_id: str) -> str:
    """Key holding a user's monthly budget as a decimal string."""
    return f"budget-{user_id}"


class KeyValueStorage(ABC):
    """
    Abstract interface for key-value storage.

    Implementations must never expose a half-written value: a `set`
    either fully replaces the previous value or leaves it untouched.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is a no-op.

        Raises:
            StorageWriteError: If the change could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The backend could not be read."""
    pass


class StorageWriteError(StorageError):
    """The backend could not be written."""
    pass
