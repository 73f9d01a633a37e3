"""Date utilities for moneytrack.

Parsing of user-entered dates and month periods, plus month labels.
"""

from datetime import date, datetime

import pandas as pd

from moneytrack.domain.models import Month, month_of
from moneytrack.errors import MalformedDateError

DATE_FORMAT = "%d.%m.%Y"
MONTH_FORMATS = ("%m.%Y", "%Y-%m")


def parse_date(text: str) -> date:
    """Parse a date entered as DD.MM.YYYY.

    Args:
        text: Date text, e.g. "05.03.2024".

    Returns:
        Parsed date.

    Raises:
        MalformedDateError: If the text is malformed or names a non-existent day.
    """
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise MalformedDateError(f"Invalid date {text!r}, expected DD.MM.YYYY") from e


def normalize_date(text: str) -> date:
    """Parse a date in any common day-first format.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD.MM.YYYY, DD-MM-YYYY and similar.
    ISO dates are always year-month-day; anything else is read day first.

    Raises:
        MalformedDateError: If pandas cannot make sense of the text.
    """
    cleaned = text.strip()
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass

    try:
        parsed = pd.to_datetime(cleaned, dayfirst=True)
    except (ValueError, OverflowError, pd.errors.ParserError) as e:
        raise MalformedDateError(f"Invalid date {text!r}") from e

    if pd.isna(parsed):
        raise MalformedDateError(f"Invalid date {text!r}")

    return parsed.date()


def parse_month(text: str) -> Month:
    """Parse a month period entered as MM.YYYY or YYYY-MM.

    Args:
        text: Period text, e.g. "03.2024" or "2024-03".

    Returns:
        Month in YYYY-MM format.

    Raises:
        MalformedDateError: If the text matches neither format.
    """
    cleaned = text.strip()
    for fmt in MONTH_FORMATS:
        try:
            return month_of(datetime.strptime(cleaned, fmt).date())
        except ValueError:
            continue
    raise MalformedDateError(f"Invalid month {text!r}, expected MM.YYYY")


def current_month() -> Month:
    """Month containing today's date."""
    return month_of(date.today())


def format_month_display(month: Month) -> str:
    """Human-readable month label (e.g., "March 2024")."""
    return datetime.strptime(month, "%Y-%m").strftime("%B %Y")
