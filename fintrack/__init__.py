"""
FinanceTracker - Source Package

A local-first personal finance tracker: log income and expenses
(including installment purchases), then review monthly totals,
a six-month trend and a category breakdown.

DESIGN PRINCIPLES:
1. All state lives in a local key-value store
2. Aggregates are derived, never stored
3. Storage trouble never takes the session down
4. The storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "FinanceTracker Team"
