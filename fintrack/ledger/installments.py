"""
Installment Expansion

An installment purchase of N months becomes N sibling transactions, one
per consecutive calendar month starting at the purchase date, each with
its own id and an incrementing `current` index.

NOTE: every sibling keeps the amount that was entered, not amount / N.
Summing all installments of a purchase therefore counts it N times.
per_installment_amount() gives the divided figure for display only.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from fintrack.models.calendar import add_months
from fintrack.models.transaction import Transaction, TransactionDraft


CENT = Decimal("0.01")

# Installment counts offered when entering a purchase
INSTALLMENT_COUNTS = tuple(range(2, 13))
DEFAULT_INSTALLMENTS = 12


def expand_draft(
    draft: TransactionDraft,
    new_id: Callable[[], str],
) -> list[Transaction]:
    """
    Turn a draft into the transactions it stands for.

    Args:
        draft: Validated draft
        new_id: Returns a fresh id on every call

    Returns:
        One transaction for a plain draft, `installment_info.total`
        transactions for an installment draft (in month order)
    """
    fields = draft.model_dump(exclude={"id", "installment_info"})

    if not draft.is_installment:
        return [Transaction(id=new_id(), **fields)]

    info = draft.installment_info
    siblings = []
    for offset in range(info.total):
        siblings.append(
            Transaction(
                id=new_id(),
                **{**fields, "date": add_months(draft.date, offset)},
                installment_info=info.model_copy(update={"current": offset + 1}),
            )
        )
    return siblings


def per_installment_amount(amount: Decimal, total: int) -> Decimal:
    """Amount / installments, rounded to cents. Preview helper."""
    if total < 1:
        raise ValueError("Installment count must be at least 1")
    return (Decimal(amount) / total).quantize(CENT, rounding=ROUND_HALF_UP)
