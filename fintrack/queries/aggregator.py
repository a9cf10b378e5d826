"""
Dashboard Aggregates

Pure functions over a transaction collection. Nothing here keeps state
or touches storage: the dashboard calls them on every refresh with the
full ledger and the selected month.

GUARANTEES:
- Inputs are never mutated
- A month bucket matches on year and month, never on day
- Empty months give zeros (or an empty breakdown), never errors
"""

from collections.abc import Iterable
from decimal import Decimal

from fintrack.models.calendar import MIN_ORDINAL, MonthKey
from fintrack.models.summary import CategoryTotal, MonthlySeriesPoint, MonthTotals
from fintrack.models.transaction import Transaction, TransactionType


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def transactions_in_month(
    transactions: Iterable[Transaction],
    month: MonthKey,
) -> list[Transaction]:
    """Transactions whose date falls in `month`, in their original order."""
    return [t for t in transactions if month.contains(t.date)]


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort for the transaction list view: latest date first."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def _sum_by_type(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    income = ZERO
    expense = ZERO
    for transaction in transactions:
        if transaction.type == TransactionType.INCOME:
            income += transaction.amount
        elif transaction.type == TransactionType.EXPENSE:
            expense += transaction.amount
    return income, expense


def month_totals(
    transactions: Iterable[Transaction],
    month: MonthKey,
    budget: Decimal,
) -> MonthTotals:
    """
    Income, expense, remaining and budget usage for one month.

    budget_used_pct is expense / budget * 100, and 0 when the budget is
    not positive.
    """
    income, expense = _sum_by_type(transactions_in_month(transactions, month))
    budget = Decimal(budget)

    if budget > 0:
        budget_used_pct = expense / budget * HUNDRED
    else:
        budget_used_pct = ZERO

    return MonthTotals(
        month=month,
        income=income,
        expense=expense,
        remaining=income - expense,
        budget_used_pct=budget_used_pct,
    )


def monthly_series(
    transactions: Iterable[Transaction],
    reference: MonthKey,
    window_size: int = 6,
) -> list[MonthlySeriesPoint]:
    """
    Income/expense for `window_size` months ending at `reference`.

    Oldest month first. Exactly `window_size` points; months without
    transactions are zeros. The one exception is a window reaching back
    before 0001-01, which starts at 0001-01 instead since no date can
    fall earlier.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")

    # One pass, bucketed by month
    buckets: dict[MonthKey, list[Transaction]] = {}
    first = max(reference.ordinal - (window_size - 1), MIN_ORDINAL)
    months = [MonthKey.from_ordinal(i) for i in range(first, reference.ordinal + 1)]
    wanted = set(months)
    for transaction in transactions:
        key = MonthKey.from_date(transaction.date)
        if key in wanted:
            buckets.setdefault(key, []).append(transaction)

    series = []
    for month in months:
        income, expense = _sum_by_type(buckets.get(month, []))
        series.append(
            MonthlySeriesPoint(
                month=month,
                label=month.label,
                income=income,
                expense=expense,
            )
        )
    return series


def category_breakdown(
    transactions: Iterable[Transaction],
    month: MonthKey,
    top_n: int = 8,
) -> list[CategoryTotal]:
    """
    Expense totals per category for one month, largest first.

    Categories match on exact text. Equal totals keep the order in which
    their category first appears in `transactions`. An empty list means
    there is nothing to chart.
    """
    if top_n < 0:
        raise ValueError(f"top_n must not be negative, got {top_n}")

    groups: dict[str, Decimal] = {}
    for transaction in transactions_in_month(transactions, month):
        if transaction.type != TransactionType.EXPENSE:
            continue
        groups[transaction.category] = groups.get(transaction.category, ZERO) + transaction.amount

    # sorted() is stable, so ties stay in first-seen order
    ranked = sorted(groups.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(category=category, total=total)
        for category, total in ranked[:top_n]
    ]
