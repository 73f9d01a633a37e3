"""In-memory expense ledger.

The ledger owns the ordered list of expenses for a session. It is seeded
from the store at startup and written back in full on exit; every other
component only sees read-only snapshots.
"""

from collections.abc import Iterable
from datetime import date
from enum import Enum

from moneytrack.domain.models import CategoryName, Expense, Money, Month, is_valid_category
from moneytrack.domain.statistics import MonthlyStatistics, compute_monthly_statistics, group_by_month
from moneytrack.logging_utils import get_logger

logger = get_logger(__name__)


class AddOutcome(str, Enum):
    """Result of ExpenseLedger.add."""

    ADDED = "added"
    CANCELLED = "cancelled"
    INVALID_CATEGORY = "invalid_category"


class ExpenseLedger:
    """Ordered, mutable collection of expenses.

    Duplicates are allowed and insertion order is preserved.
    """

    def __init__(self, expenses: Iterable[Expense] = ()) -> None:
        # Loaded records are trusted as-is, categories included
        self._expenses: list[Expense] = list(expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def add(self, amount: float, category: str, day: date) -> AddOutcome:
        """Append an expense.

        Args:
            amount: Expense amount. Zero means the user cancelled the entry.
            category: Category label, must be one of CATEGORIES.
            day: Date of the expense.

        Returns:
            ADDED on success, CANCELLED for a zero amount, INVALID_CATEGORY
            for an unknown label. Nothing is stored unless ADDED.
        """
        if amount == 0:
            return AddOutcome.CANCELLED

        if not is_valid_category(category):
            return AddOutcome.INVALID_CATEGORY

        expense = Expense(amount=Money(amount), category=CategoryName(category), date=day)
        self._expenses.append(expense)
        logger.debug("Added %s", expense)
        return AddOutcome.ADDED

    def statistics_for_month(self, month: Month) -> MonthlyStatistics | None:
        """Category statistics for a month, or None when nothing was spent."""
        return compute_monthly_statistics(self._expenses, month)

    def delete_month(self, month: Month) -> int:
        """Remove every expense of a month.

        Args:
            month: Month in YYYY-MM format.

        Returns:
            Number of removed expenses (0 if there were none).
        """
        kept = [expense for expense in self._expenses if expense.month != month]
        removed = len(self._expenses) - len(kept)
        self._expenses[:] = kept
        logger.debug("Deleted %d expenses for %s", removed, month)
        return removed

    def all_expenses(self) -> tuple[Expense, ...]:
        """Read-only snapshot of every expense in insertion order."""
        return tuple(self._expenses)

    def expenses_for_month(self, month: Month) -> tuple[Expense, ...]:
        return tuple(expense for expense in self._expenses if expense.month == month)

    def months(self) -> list[Month]:
        """Distinct months with at least one expense, oldest first."""
        return list(group_by_month(self._expenses))

    @staticmethod
    def is_valid_category(name: str) -> bool:
        return is_valid_category(name)
