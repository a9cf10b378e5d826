"""
Main Orchestrator for FinanceTracker

Ties the components together for one logged-in user:
- TransactionStore (the ledger)
- BudgetStore (the monthly budget)
- MonthNavigator (which month is on screen)

and derives everything the dashboard shows through the aggregator.
There are no module-level singletons: each DashboardFlow is one
session's context.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Union

from fintrack.config import Settings, get_settings
from fintrack.ledger import BudgetStore, TransactionStore
from fintrack.logs import configure_logging, get_logger
from fintrack.models import DashboardSnapshot, MonthKey, Transaction, TransactionDraft
from fintrack.navigation import MonthNavigator
from fintrack.queries import (
    category_breakdown,
    month_totals,
    monthly_series,
    newest_first,
    transactions_in_month,
)
from fintrack.services.storage import InMemoryStorage, JsonFileStorage, KeyValueStorage
from fintrack.session import SessionManager


logger = get_logger(__name__)


class DashboardFlow:
    """
    One user's dashboard session.

    Flow:
    1. Load ledger and budget for the user
    2. Mutate through add/remove/set_budget (each persists)
    3. snapshot() recomputes every figure from the current state
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        user_id: str,
        settings: Optional[Settings] = None,
        clock: Callable[[], date] = date.today,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._settings = settings or get_settings()
        self._user_id = user_id
        self.store = TransactionStore(storage, user_id, id_factory=id_factory)
        self.budget_store = BudgetStore(storage, user_id, default=self._settings.default_budget)
        self.navigator = MonthNavigator(clock=clock)

        self.store.load()
        self.budget_store.load()

    @property
    def user_id(self) -> str:
        return self._user_id

    # Mutations

    def add_transaction(self, draft: Union[TransactionDraft, dict]) -> list[Transaction]:
        return self.store.add(draft)

    def remove_transaction(self, transaction_id: str) -> bool:
        return self.store.remove(transaction_id)

    def set_budget(self, value: Union[Decimal, int, str]) -> bool:
        return self.budget_store.set(value)

    # Navigation

    def previous_month(self) -> MonthKey:
        return self.navigator.previous()

    def next_month(self) -> MonthKey:
        return self.navigator.next()

    # Derived view

    def snapshot(self) -> DashboardSnapshot:
        """Every dashboard figure for the selected month, freshly computed."""
        month = self.navigator.current()
        transactions = self.store.transactions
        budget = self.budget_store.budget

        return DashboardSnapshot(
            month=month,
            is_current_month=self.navigator.is_current_month(),
            budget=budget,
            totals=month_totals(transactions, month, budget),
            series=monthly_series(
                transactions,
                month,
                window_size=self._settings.series_window,
            ),
            categories=category_breakdown(
                transactions,
                month,
                top_n=self._settings.category_top_n,
            ),
            transactions=newest_first(transactions_in_month(transactions, month)),
        )


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the configured key-value backend."""
    if settings.storage_backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(settings.storage_path)


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[KeyValueStorage, SessionManager]:
    """
    Factory function to create the application-wide components.

    Configures logging, then builds storage and the session manager.
    DashboardFlow is created per user after login.

    Returns:
        (storage, session_manager)
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    storage = create_storage(settings)
    logger.info(
        "app_components_created",
        storage_backend=settings.storage_backend,
        storage_path=settings.storage_path if settings.storage_backend == "json" else None,
    )
    return storage, SessionManager(storage)
