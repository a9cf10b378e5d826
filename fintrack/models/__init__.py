"""
Data Models Package

All data flowing through FinanceTracker conforms to these pydantic schemas.
"""

from fintrack.models.calendar import MonthKey, add_months
from fintrack.models.summary import (
    CategoryTotal,
    DashboardSnapshot,
    MonthlySeriesPoint,
    MonthTotals,
)
from fintrack.models.transaction import (
    SUGGESTED_CATEGORIES,
    InstallmentInfo,
    Transaction,
    TransactionDraft,
    TransactionType,
    suggested_categories,
)

__all__ = [
    # Calendar
    "MonthKey",
    "add_months",
    # Transactions
    "SUGGESTED_CATEGORIES",
    "InstallmentInfo",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "suggested_categories",
    # Summaries
    "CategoryTotal",
    "DashboardSnapshot",
    "MonthlySeriesPoint",
    "MonthTotals",
]
