"""
Monthly budget for one user, stored as a decimal string under
`budget-{user}` and persisted independently of the transactions.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from fintrack.logs import get_logger
from fintrack.services.storage import KeyValueStorage, StorageError, budget_key


logger = get_logger(__name__)

DEFAULT_BUDGET = Decimal("5000")


class BudgetStore:
    """A user's monthly budget with best-effort persistence."""

    def __init__(
        self,
        storage: KeyValueStorage,
        user_id: str,
        default: Decimal = DEFAULT_BUDGET,
    ):
        self._storage = storage
        self._user_id = user_id
        self._default = Decimal(default)
        self._budget = self._default
        self.last_save_ok = True

    @property
    def budget(self) -> Decimal:
        return self._budget

    def load(self) -> Decimal:
        """Read the stored budget; absent or unreadable values give the default."""
        key = budget_key(self._user_id)
        try:
            raw = self._storage.get(key)
        except StorageError as e:
            logger.warning("storage_read_failed", key=key, error=str(e))
            raw = None

        self._budget = self._default
        if raw is not None:
            try:
                value = Decimal(raw.strip())
            except InvalidOperation:
                logger.warning("stored_data_malformed", key=key, value=raw)
            else:
                if value.is_finite() and value >= 0:
                    self._budget = value
                else:
                    logger.warning("stored_data_malformed", key=key, value=raw)
        return self._budget

    def set(self, value: Union[Decimal, int, str]) -> bool:
        """
        Change the budget and persist it.

        Raises:
            ValueError: For negative or non-numeric values

        Returns:
            True if the new value was written to storage
        """
        try:
            budget = Decimal(value)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValueError(f"Invalid budget: {value!r}") from e
        if not budget.is_finite() or budget < 0:
            raise ValueError(f"Budget must be zero or positive, got {value!r}")

        self._budget = budget
        key = budget_key(self._user_id)
        try:
            self._storage.set(key, str(budget))
        except StorageError as e:
            logger.warning("storage_write_failed", key=key, error=str(e))
            self.last_save_ok = False
            return False

        self.last_save_ok = True
        logger.info("budget_updated", user_id=self._user_id, budget=str(budget))
        return True
