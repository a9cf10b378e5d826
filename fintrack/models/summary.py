"""
Derived dashboard figures.

These are computed on demand by fintrack.queries.aggregator and never
persisted.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from fintrack.models.calendar import MonthKey
from fintrack.models.transaction import Transaction


class MonthTotals(BaseModel):
    """Income, expense and budget usage for one calendar month."""

    month: MonthKey
    income: Decimal = Field(default=Decimal("0"))
    expense: Decimal = Field(default=Decimal("0"))
    remaining: Decimal = Field(
        default=Decimal("0"),
        description="income - expense; negative when overspent",
    )
    budget_used_pct: Decimal = Field(
        default=Decimal("0"),
        description="expense / budget * 100, or 0 when the budget is 0",
    )

    @property
    def over_budget(self) -> bool:
        return self.budget_used_pct > 100


class MonthlySeriesPoint(BaseModel):
    """One bar of the income/expense trend."""

    month: MonthKey
    label: str
    income: Decimal = Field(default=Decimal("0"))
    expense: Decimal = Field(default=Decimal("0"))


class CategoryTotal(BaseModel):
    """Summed expenses for one category."""

    category: str
    total: Decimal


class DashboardSnapshot(BaseModel):
    """Everything the dashboard shows for the selected month."""

    month: MonthKey
    is_current_month: bool
    budget: Decimal
    totals: MonthTotals
    series: list[MonthlySeriesPoint] = Field(default_factory=list)
    categories: list[CategoryTotal] = Field(default_factory=list)
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="The month's transactions, newest first",
    )
