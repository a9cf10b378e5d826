"""Month navigation package."""

from fintrack.navigation.month import Direction, MonthNavigator

__all__ = ["Direction", "MonthNavigator"]
