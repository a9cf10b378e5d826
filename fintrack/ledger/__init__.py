"""Ledger package: the user's transactions and budget."""

from fintrack.ledger.budget import DEFAULT_BUDGET, BudgetStore
from fintrack.ledger.installments import (
    DEFAULT_INSTALLMENTS,
    INSTALLMENT_COUNTS,
    expand_draft,
    per_installment_amount,
)
from fintrack.ledger.store import (
    TransactionStore,
    decode_transactions,
    encode_transactions,
)

__all__ = [
    "DEFAULT_BUDGET",
    "DEFAULT_INSTALLMENTS",
    "INSTALLMENT_COUNTS",
    "BudgetStore",
    "TransactionStore",
    "decode_transactions",
    "encode_transactions",
    "expand_draft",
    "per_installment_amount",
]
