"""
Calendar month arithmetic.

A MonthKey is the (year, month) bucket every monthly aggregate is
grouped by. Months are 1-based (January = 1).
"""

import calendar
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MonthKey(BaseModel):
    """A calendar month bucket."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        return cls(year=value.year, month=value.month)

    @classmethod
    def current(cls, today: Optional[date] = None) -> "MonthKey":
        """The month containing `today` (defaults to the system date)."""
        return cls.from_date(today or date.today())

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "MonthKey":
        """Inverse of `ordinal`."""
        year, month_index = divmod(ordinal, 12)
        return cls(year=year, month=month_index + 1)

    @property
    def ordinal(self) -> int:
        """Months since year 0; consecutive months differ by one."""
        return self.year * 12 + (self.month - 1)

    def shift(self, months: int) -> "MonthKey":
        """
        Move by a signed number of months, rolling over year boundaries.

        MonthKey(year=2024, month=11).shift(3) -> 2025-02
        MonthKey(year=2024, month=1).shift(-1) -> 2023-12

        Raises:
            ValueError: The result falls outside 0001-01..9999-12, the
                same range `datetime.date` covers
        """
        target = self.ordinal + months
        if not MIN_ORDINAL <= target <= MAX_ORDINAL:
            raise ValueError(f"{self} shifted by {months} months is outside 0001-01..9999-12")
        return MonthKey.from_ordinal(target)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def days(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def label(self) -> str:
        """Short display label, e.g. 'Nov 2024'."""
        return self.first_day.strftime("%b %Y")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# Ordinals of the first and last representable months
MIN_ORDINAL = MonthKey(year=1, month=1).ordinal
MAX_ORDINAL = MonthKey(year=9999, month=12).ordinal


def add_months(value: date, months: int) -> date:
    """
    Same day-of-month, `months` calendar months later.

    Days that do not exist in the target month are clamped to its last
    day (Jan 31 + 1 month -> Feb 28/29).
    """
    target = MonthKey.from_date(value).shift(months)
    return date(target.year, target.month, min(value.day, target.days))
