"""
Transaction Models for FinanceTracker

A Transaction is one ledger entry. An installment purchase is stored as
several sibling Transactions, one per month, each carrying an
InstallmentInfo that points back at the original purchase.

Field names serialize in camelCase (isInstallment, installmentInfo,
originalAmount, ...) so stored data stays compatible with the
`transactions-{user}` JSON layout.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from fintrack.models.calendar import MonthKey


class TransactionType(str, Enum):
    """Direction of money flow. The amount itself is never negative."""
    INCOME = "income"
    EXPENSE = "expense"


# Offered to the user when picking a category. Not enforced: any
# non-empty text is a valid category.
SUGGESTED_CATEGORIES: dict[TransactionType, tuple[str, ...]] = {
    TransactionType.INCOME: (
        "Salary",
        "Freelance",
        "Investment",
        "Bonus",
        "Other Income",
    ),
    TransactionType.EXPENSE: (
        "Food",
        "Transportation",
        "Housing",
        "Entertainment",
        "Healthcare",
        "Shopping",
        "Utilities",
        "Other",
    ),
}


def suggested_categories(transaction_type: TransactionType) -> list[str]:
    """Category suggestions for a transaction type."""
    return list(SUGGESTED_CATEGORIES[TransactionType(transaction_type)])


def _normalize_date(value: Any) -> Any:
    """Reduce full ISO timestamps and datetimes to their date part."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in ("T", " "):
        return value[:10]
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class InstallmentInfo(_CamelModel):
    """Position of one record within an installment purchase."""

    current: int = Field(
        ...,
        ge=1,
        description="1-based index of this installment",
    )
    total: int = Field(
        ...,
        ge=2,
        description="Number of monthly installments",
    )
    original_amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount entered for the purchase",
    )
    original_date: dt.date = Field(
        ...,
        description="Date of the purchase (first installment)",
    )

    @field_validator("original_date", mode="before")
    @classmethod
    def normalize_original_date(cls, v: Any) -> Any:
        return _normalize_date(v)

    @model_validator(mode="after")
    def validate_position(self) -> "InstallmentInfo":
        if self.current > self.total:
            raise ValueError(
                f"Installment {self.current} is past the last installment ({self.total})"
            )
        return self

    @field_serializer("original_amount", when_used="json")
    def serialize_original_amount(self, v: Decimal) -> float:
        return float(v)


class TransactionDraft(_CamelModel):
    """
    A transaction as entered by the user, before it has an id.

    Installment drafts are expanded into one Transaction per month when
    added to the store.
    """

    type: TransactionType
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in the user's currency",
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Free-text category (see SUGGESTED_CATEGORIES)",
    )
    date: dt.date = Field(
        ...,
        description="Effective date; decides the month bucket",
    )
    is_installment: bool = False
    installment_info: Optional[InstallmentInfo] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        return _normalize_date(v)

    @model_validator(mode="after")
    def validate_installment(self):
        if self.is_installment:
            if self.installment_info is None:
                raise ValueError("Installment transactions need installment_info")
            if self.type != TransactionType.EXPENSE:
                raise ValueError("Only expenses can be paid in installments")
        elif self.installment_info is not None:
            raise ValueError("installment_info is only allowed on installment transactions")
        return self

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)


class Transaction(TransactionDraft):
    """A stored ledger entry."""

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque identifier, unique within a user's store",
    )

    @property
    def month(self) -> MonthKey:
        return MonthKey.from_date(self.date)

    def to_storage_dict(self) -> dict:
        """JSON-ready dict in the stored camelCase layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
