"""
Month Navigator

Tracks which calendar month the dashboard is showing. The selection is
session state only: a new session starts on the current month.
"""

from datetime import date
from enum import Enum
from typing import Callable, Optional

from fintrack.models.calendar import MonthKey


class Direction(str, Enum):
    PREV = "prev"
    NEXT = "next"


class MonthNavigator:
    """
    Currently viewed month with prev/next stepping.

    `clock` returns today's date; it is read on every is_current_month()
    call so a long-running session notices the month changing.
    """

    def __init__(
        self,
        start: Optional[MonthKey] = None,
        clock: Callable[[], date] = date.today,
    ):
        self._clock = clock
        self._month = start or MonthKey.current(clock())

    def current(self) -> MonthKey:
        return self._month

    def step(self, direction: Direction) -> MonthKey:
        """Move exactly one calendar month; no clamping."""
        direction = Direction(direction)
        self._month = self._month.shift(-1 if direction == Direction.PREV else 1)
        return self._month

    def previous(self) -> MonthKey:
        return self.step(Direction.PREV)

    def next(self) -> MonthKey:
        return self.step(Direction.NEXT)

    def go_to(self, month: MonthKey) -> MonthKey:
        self._month = month
        return self._month

    def reset(self) -> MonthKey:
        """Jump back to today's month."""
        self._month = MonthKey.current(self._clock())
        return self._month

    def is_current_month(self) -> bool:
        return self._month == MonthKey.current(self._clock())
