"""Domain models and logic for moneytrack.

This package contains the functional core:
- No console, database or spreadsheet I/O
- Pure aggregation functions plus the in-memory ledger
- Easy to test
"""

from moneytrack.domain.ledger import AddOutcome, ExpenseLedger
from moneytrack.domain.models import CATEGORIES, CategoryName, Expense, Money, Month
from moneytrack.domain.statistics import MonthlyStatistics

__all__ = [
    "AddOutcome",
    "CATEGORIES",
    "CategoryName",
    "Expense",
    "ExpenseLedger",
    "Money",
    "Month",
    "MonthlyStatistics",
]
