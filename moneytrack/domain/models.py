"""Domain types for moneytrack.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount of an expense (signed, in major currency units)
- Month: Month in YYYY-MM format
- CategoryName: One of the fixed expense categories
"""

from dataclasses import dataclass
from datetime import date
from typing import NewType

from moneytrack.errors import InvalidCategoryError

# Amounts are plain floats; zero is a valid stored value
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2024-03")
Month = NewType("Month", str)

# Category name, expected to be one of CATEGORIES
CategoryName = NewType("CategoryName", str)

# Fixed taxonomy. Order drives menu numbering and report order.
CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Entertainment"),
    CategoryName("Health"),
    CategoryName("Education"),
    CategoryName("Utilities"),
    CategoryName("Shopping"),
    CategoryName("Travel"),
    CategoryName("Rent"),
    CategoryName("Other"),
)


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    amount: Money
    category: CategoryName
    date: date

    @property
    def month(self) -> Month:
        """Month the expense belongs to."""
        return month_of(self.date)


def month_of(day: date) -> Month:
    """Return the YYYY-MM period containing a date."""
    return Month(f"{day.year:04d}-{day.month:02d}")


def is_valid_category(name: str) -> bool:
    """Check whether a label belongs to the fixed category set (exact match)."""
    return name in CATEGORIES


def resolve_category(choice: str) -> CategoryName:
    """Resolve a category given by label or 1-based menu index.

    Args:
        choice: Category label (exact) or its position in CATEGORIES, starting at 1.

    Returns:
        The matching category label.

    Raises:
        InvalidCategoryError: If the choice matches neither a label nor an index.
    """
    choice = choice.strip()
    if is_valid_category(choice):
        return CategoryName(choice)

    if choice.isdigit():
        index = int(choice)
        if 1 <= index <= len(CATEGORIES):
            return CATEGORIES[index - 1]

    raise InvalidCategoryError(f"Unknown category: {choice!r}")
