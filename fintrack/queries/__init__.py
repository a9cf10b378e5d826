"""Aggregation queries for the dashboard."""

from fintrack.queries.aggregator import (
    category_breakdown,
    month_totals,
    monthly_series,
    newest_first,
    transactions_in_month,
)

__all__ = [
    "category_breakdown",
    "month_totals",
    "monthly_series",
    "newest_first",
    "transactions_in_month",
]
