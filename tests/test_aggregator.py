"""
Tests for the dashboard aggregates.
"""

import pytest
from datetime import date
from decimal import Decimal
from itertools import count

from fintrack.ledger import TransactionStore
from fintrack.models import InstallmentInfo, MonthKey, Transaction, TransactionDraft
from fintrack.queries import (
    category_breakdown,
    month_totals,
    monthly_series,
    newest_first,
    transactions_in_month,
)
from fintrack.services.storage import InMemoryStorage


_ids = count(1)


def make(type_, amount, day, category="Other", description="Entry"):
    return Transaction(
        id=f"t{next(_ids)}",
        type=type_,
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        date=day,
    )


NOV = MonthKey(year=2024, month=11)


class TestTransactionsInMonth:
    """Tests for month filtering."""

    def test_matches_year_and_month_regardless_of_day(self):
        """Test first and last day are in, neighbours are out."""
        inside_first = make("income", 1, date(2024, 11, 1))
        inside_last = make("income", 1, date(2024, 11, 30))
        before = make("income", 1, date(2024, 10, 31))
        after = make("income", 1, date(2024, 12, 1))
        other_year = make("income", 1, date(2023, 11, 15))

        result = transactions_in_month(
            [before, inside_first, other_year, inside_last, after], NOV
        )
        assert result == [inside_first, inside_last]


class TestMonthTotals:
    """Tests for month_totals."""

    def test_income_expense_remaining(self):
        """Test the basic sums for one month."""
        transactions = [
            make("income", 1000, date(2024, 11, 1)),
            make("income", 500, date(2024, 11, 20)),
            make("expense", 300, date(2024, 11, 5)),
            make("expense", 200, date(2024, 11, 28)),
        ]
        totals = month_totals(transactions, NOV, Decimal("5000"))
        assert totals.income == Decimal("1500")
        assert totals.expense == Decimal("500")
        assert totals.remaining == Decimal("1000")
        assert totals.budget_used_pct == Decimal("10")
        assert totals.over_budget is False

    def test_other_months_excluded(self):
        """Test transactions outside the month do not count."""
        transactions = [
            make("income", 1000, date(2024, 11, 1)),
            make("expense", 999, date(2024, 12, 1)),
            make("expense", 999, date(2024, 10, 31)),
        ]
        totals = month_totals(transactions, NOV, Decimal("5000"))
        assert totals.expense == Decimal("0")
        assert totals.remaining == Decimal("1000")

    def test_remaining_can_be_negative(self):
        """Test overspending gives a negative remainder."""
        transactions = [
            make("income", 100, date(2024, 11, 1)),
            make("expense", 250, date(2024, 11, 2)),
        ]
        totals = month_totals(transactions, NOV, Decimal("200"))
        assert totals.remaining == Decimal("-150")
        assert totals.budget_used_pct == Decimal("125")
        assert totals.over_budget is True

    def test_zero_budget(self):
        """Test a zero budget gives 0% instead of dividing by zero."""
        transactions = [make("expense", 250, date(2024, 11, 2))]
        totals = month_totals(transactions, NOV, Decimal("0"))
        assert totals.budget_used_pct == Decimal("0")

    def test_exact_decimal_sums(self):
        """Test sums do not pick up float error."""
        transactions = [make("expense", "0.1", date(2024, 11, 1)) for _ in range(3)]
        totals = month_totals(transactions, NOV, Decimal("5000"))
        assert totals.expense == Decimal("0.3")

    def test_empty_month(self):
        """Test a month without transactions is all zeros."""
        totals = month_totals([], NOV, Decimal("5000"))
        assert totals.income == 0
        assert totals.expense == 0
        assert totals.remaining == 0
        assert totals.budget_used_pct == 0

    def test_does_not_mutate_input(self):
        """Test the input list is left untouched."""
        transactions = [make("expense", 1, date(2024, 11, 1))]
        snapshot = list(transactions)
        month_totals(transactions, NOV, Decimal("10"))
        assert transactions == snapshot

    def test_idempotent(self):
        """Test repeated calls give equal results."""
        transactions = [make("expense", 1, date(2024, 11, 1))]
        assert month_totals(transactions, NOV, Decimal("10")) == month_totals(
            transactions, NOV, Decimal("10")
        )


class TestMonthlySeries:
    """Tests for monthly_series."""

    def test_window_is_complete_and_chronological(self):
        """Test six months ending at the reference, oldest first."""
        series = monthly_series([], MonthKey(year=2025, month=2))
        assert [str(p.month) for p in series] == [
            "2024-09",
            "2024-10",
            "2024-11",
            "2024-12",
            "2025-01",
            "2025-02",
        ]
        assert all(p.income == 0 and p.expense == 0 for p in series)

    def test_sparse_data(self):
        """Test months without data are zero and others are summed."""
        transactions = [
            make("income", 2000, date(2024, 12, 5)),
            make("expense", 300, date(2024, 12, 6)),
            make("expense", 100, date(2025, 2, 1)),
            make("expense", 999, date(2024, 8, 31)),  # outside the window
        ]
        series = monthly_series(transactions, MonthKey(year=2025, month=2))
        by_month = {str(p.month): p for p in series}

        assert by_month["2024-12"].income == Decimal("2000")
        assert by_month["2024-12"].expense == Decimal("300")
        assert by_month["2025-01"].income == 0
        assert by_month["2025-02"].expense == Decimal("100")
        assert by_month["2024-09"].expense == 0

    def test_custom_window(self):
        """Test other window sizes."""
        assert len(monthly_series([], NOV, window_size=1)) == 1
        assert len(monthly_series([], NOV, window_size=12)) == 12
        assert monthly_series([], NOV, window_size=1)[0].month == NOV

    def test_window_starts_no_earlier_than_first_month(self):
        """Test a window reaching before 0001-01 is cut there instead of failing."""
        transactions = [make("expense", 40, date(1, 1, 15))]
        series = monthly_series(transactions, MonthKey(year=1, month=2))
        assert [str(p.month) for p in series] == ["0001-01", "0001-02"]
        assert series[0].expense == Decimal("40")

    def test_window_at_last_month(self):
        """Test the series ending at 9999-12 is complete."""
        series = monthly_series([], MonthKey(year=9999, month=12))
        assert len(series) == 6
        assert str(series[0].month) == "9999-07"

    def test_labels(self):
        """Test each point carries a short month label."""
        series = monthly_series([], NOV, window_size=2)
        assert [p.label for p in series] == ["Oct 2024", "Nov 2024"]

    def test_invalid_window(self):
        """Test window sizes below 1 are rejected."""
        with pytest.raises(ValueError):
            monthly_series([], NOV, window_size=0)

    def test_matches_month_totals(self):
        """Test each point agrees with month_totals for that month."""
        transactions = [
            make("income", 10, date(2024, 10, 1)),
            make("expense", 4, date(2024, 10, 2)),
            make("expense", 7, date(2024, 11, 2)),
        ]
        for point in monthly_series(transactions, NOV):
            totals = month_totals(transactions, point.month, Decimal("1"))
            assert (point.income, point.expense) == (totals.income, totals.expense)


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_groups_and_orders(self):
        """Test Food (100 + 50) ranks above Transport (75)."""
        transactions = [
            make("expense", 100, date(2024, 11, 1), category="Food"),
            make("expense", 75, date(2024, 11, 2), category="Transport"),
            make("expense", 50, date(2024, 11, 3), category="Food"),
        ]
        result = category_breakdown(transactions, NOV)
        assert [(c.category, c.total) for c in result] == [
            ("Food", Decimal("150")),
            ("Transport", Decimal("75")),
        ]

    def test_ignores_income_and_other_months(self):
        """Test only this month's expenses are grouped."""
        transactions = [
            make("income", 5000, date(2024, 11, 1), category="Salary"),
            make("expense", 20, date(2024, 10, 1), category="Food"),
            make("expense", 30, date(2024, 11, 1), category="Food"),
        ]
        result = category_breakdown(transactions, NOV)
        assert [(c.category, c.total) for c in result] == [("Food", Decimal("30"))]

    def test_exact_category_match(self):
        """Test categories differing in case are separate groups."""
        transactions = [
            make("expense", 10, date(2024, 11, 1), category="food"),
            make("expense", 10, date(2024, 11, 1), category="Food"),
        ]
        assert len(category_breakdown(transactions, NOV)) == 2

    def test_ties_keep_first_seen_order(self):
        """Test equal totals are ordered by first appearance."""
        transactions = [
            make("expense", 40, date(2024, 11, 1), category="Health"),
            make("expense", 50, date(2024, 11, 1), category="Food"),
            make("expense", 40, date(2024, 11, 1), category="Bills"),
        ]
        result = category_breakdown(transactions, NOV)
        assert [c.category for c in result] == ["Food", "Health", "Bills"]

    def test_top_n(self):
        """Test only the largest top_n categories are kept."""
        transactions = [
            make("expense", amount, date(2024, 11, 1), category=f"C{amount}")
            for amount in range(1, 11)
        ]
        result = category_breakdown(transactions, NOV)
        assert len(result) == 8
        assert result[0].category == "C10"
        assert result[-1].category == "C3"

        assert [c.category for c in category_breakdown(transactions, NOV, top_n=2)] == ["C10", "C9"]

    def test_empty(self):
        """Test no expenses gives an empty breakdown."""
        assert category_breakdown([], NOV) == []
        assert category_breakdown([make("income", 1, date(2024, 11, 1))], NOV) == []

    def test_negative_top_n(self):
        """Test a negative top_n is rejected."""
        with pytest.raises(ValueError):
            category_breakdown([], NOV, top_n=-1)


class TestNewestFirst:
    """Tests for list ordering."""

    def test_sorts_by_date_descending(self):
        """Test later dates come first."""
        a = make("expense", 1, date(2024, 11, 1))
        b = make("expense", 1, date(2024, 11, 20))
        c = make("expense", 1, date(2024, 11, 10))
        assert newest_first([a, b, c]) == [b, c, a]


class TestInstallmentAmounts:
    """Installment siblings each carry the full entered amount."""

    def test_each_month_counts_full_amount(self):
        """Test every installment month shows the entered amount as expense."""
        store = TransactionStore(InMemoryStorage(), "ana")
        store.add(
            TransactionDraft(
                type="expense",
                amount=Decimal("300"),
                description="Sofa",
                category="Housing",
                date=date(2024, 11, 15),
                is_installment=True,
                installment_info=InstallmentInfo(
                    current=1,
                    total=3,
                    original_amount=Decimal("300"),
                    original_date=date(2024, 11, 15),
                ),
            )
        )
        series = monthly_series(store.transactions, MonthKey(year=2025, month=1), window_size=3)
        assert [p.expense for p in series] == [Decimal("300")] * 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
