"""
Session Management

Decides who the active user is. There are no real accounts: any
non-empty username/password pair logs in, and the username is kept
under the `currentUser` key until logout.
"""

from typing import Optional

from fintrack.logs import get_logger
from fintrack.services.storage import CURRENT_USER_KEY, KeyValueStorage, StorageError


logger = get_logger(__name__)


class SessionError(ValueError):
    """Login rejected (blank username or password)."""
    pass


class SessionManager:
    """Reads and writes the current user in storage."""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def current_user(self) -> Optional[str]:
        """The logged-in username, or None when logged out."""
        try:
            user = self._storage.get(CURRENT_USER_KEY)
        except StorageError as e:
            logger.warning("storage_read_failed", key=CURRENT_USER_KEY, error=str(e))
            return None
        return user or None

    def login(self, username: str, password: str) -> str:
        """
        Start a session.

        Credentials are not checked beyond being non-empty.

        Raises:
            SessionError: If username or password is blank
        """
        username = (username or "").strip()
        if not username or not password:
            raise SessionError("Please fill in all fields")

        try:
            self._storage.set(CURRENT_USER_KEY, username)
        except StorageError as e:
            # The session still starts; it just won't be remembered.
            logger.warning("storage_write_failed", key=CURRENT_USER_KEY, error=str(e))

        logger.info("user_logged_in", user_id=username)
        return username

    def logout(self) -> None:
        try:
            self._storage.delete(CURRENT_USER_KEY)
        except StorageError as e:
            logger.warning("storage_write_failed", key=CURRENT_USER_KEY, error=str(e))
        logger.info("user_logged_out")
