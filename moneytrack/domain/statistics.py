"""Pure functions for monthly expense aggregation.

This module contains the functional core for statistics:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from moneytrack.domain.models import CATEGORIES, CategoryName, Expense, Money, Month


@dataclass(frozen=True)
class CategoryShare:
    """Immutable total and share of one category within a month."""

    category: CategoryName
    total: Money
    percentage: float


@dataclass(frozen=True)
class MonthlyStatistics:
    """Immutable statistics for a month with at least some spending."""

    month: Month
    total: Money
    category_totals: Mapping[CategoryName, Money]
    category_percentages: Mapping[CategoryName, float]

    @property
    def categories(self) -> list[CategoryShare]:
        """Per-category rows in report order."""
        return [
            CategoryShare(
                category=category,
                total=total,
                percentage=self.category_percentages[category],
            )
            for category, total in self.category_totals.items()
        ]


def filter_month(expenses: Iterable[Expense], month: Month) -> list[Expense]:
    """Select expenses falling in a month, keeping their order.

    Args:
        expenses: Expenses to filter.
        month: Month in YYYY-MM format. Only year and month are compared.

    Returns:
        Matching expenses in their original order.
    """
    return [expense for expense in expenses if expense.month == month]


def group_by_month(expenses: Iterable[Expense]) -> dict[Month, list[Expense]]:
    """Group expenses by month.

    Args:
        expenses: Expenses to group.

    Returns:
        Dictionary keyed by month in chronological order; each list keeps
        the original relative order of its expenses.
    """
    groups: dict[Month, list[Expense]] = {}
    for expense in expenses:
        groups.setdefault(expense.month, []).append(expense)
    return {month: groups[month] for month in sorted(groups)}


def calculate_category_totals(expenses: Iterable[Expense]) -> dict[CategoryName, Money]:
    """Sum expense amounts per category.

    Every fixed category is present, in CATEGORIES order, with 0 where
    nothing was spent. Categories outside the fixed set (possible only for
    records read from an external store) follow in first-seen order.

    Args:
        expenses: Expenses to aggregate.

    Returns:
        Dictionary of category totals.
    """
    totals: dict[CategoryName, Money] = {category: Money(0.0) for category in CATEGORIES}
    for expense in expenses:
        totals[expense.category] = Money(totals.get(expense.category, 0.0) + expense.amount)
    return totals


def calculate_percentages(
    totals: dict[CategoryName, Money],
    grand_total: Money,
) -> dict[CategoryName, float]:
    """Calculate each category's share of the grand total.

    Args:
        totals: Dictionary of category totals.
        grand_total: Sum of all totals. Must be non-zero.

    Returns:
        Dictionary of percentages (0-100 for non-negative amounts).
    """
    return {category: (total / grand_total) * 100 for category, total in totals.items()}


def compute_monthly_statistics(expenses: Iterable[Expense], month: Month) -> MonthlyStatistics | None:
    """Compute category statistics for a month.

    Args:
        expenses: All known expenses.
        month: Month in YYYY-MM format.

    Returns:
        MonthlyStatistics, or None when the month's total is zero
        (no data for that month).
    """
    selected = filter_month(expenses, month)
    total = Money(sum(expense.amount for expense in selected))

    if total == 0:
        return None

    totals = calculate_category_totals(selected)

    return MonthlyStatistics(
        month=month,
        total=total,
        category_totals=MappingProxyType(totals),
        category_percentages=MappingProxyType(calculate_percentages(totals, total)),
    )
