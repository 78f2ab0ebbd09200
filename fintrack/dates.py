"""Date utilities for fintrack.

Pure functions for turning user input into ledger month indexes and back.
"""

import calendar
from datetime import date, datetime

from fintrack.domain.models import MonthIndex
from fintrack.domain.money import validate_month
from fintrack.errors import InvalidMonth


def month_label(month: MonthIndex) -> str:
    """Human-readable month name (e.g. "January")."""
    return calendar.month_name[validate_month(month)]


def parse_month(value: str) -> MonthIndex:
    """Parse a month given as a number, a name or YYYY-MM.

    Args:
        value: "3", "mar", "March" or "2025-03".

    Returns:
        Month index 1-12.

    Raises:
        InvalidMonth: If the value cannot be read as a month.
    """
    text = value.strip()

    if text.isdigit():
        return validate_month(int(text))

    lowered = text.lower()
    for index in range(1, 13):
        if lowered in (calendar.month_name[index].lower(), calendar.month_abbr[index].lower()):
            return MonthIndex(index)

    try:
        return MonthIndex(datetime.strptime(text, "%Y-%m").month)
    except ValueError:
        raise InvalidMonth(value) from None


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD date.

    Raises:
        ValueError: If the value is not a valid date.
    """
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def date_in_month(month: MonthIndex, today: date | None = None) -> date:
    """Pick a date inside the given month of the current year.

    Uses today's day when it exists in that month, otherwise the month's last day.
    """
    today = today or date.today()
    last_day = calendar.monthrange(today.year, month)[1]
    return date(today.year, month, min(today.day, last_day))
