"""Date parsing utilities.

Ledger dates are kept as ISO strings so that a cell which fails to parse on
import survives untouched. These helpers turn them into calendar dates when
arithmetic is needed.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser

# Distance reported for a pair of dates that cannot both be parsed.
UNPARSEABLE_DISTANCE = 999

# Defaults sharing no year, month or day.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "March 5, 2024", ...) and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_calendar_date(value) -> Optional[date]:
    """Parse a stored ledger date, returning None unless it is a complete date.

    Stricter than parse_date: relative words and partial dates such as
    "March" or "5" are rejected instead of being completed from today.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        first, second = (date_parser.parse(value, default=d).date() for d in _FILL_DEFAULTS)
    except (ValueError, TypeError, OverflowError):
        return None
    # Any field dateutil filled from the default differs between the two parses.
    if first != second:
        return None
    return first


def days_between(first, second) -> int:
    """Whole calendar days between two dates, ignoring direction.

    Returns UNPARSEABLE_DISTANCE if either side is not a valid date.
    """
    d1 = parse_calendar_date(first)
    d2 = parse_calendar_date(second)
    if d1 is None or d2 is None:
        return UNPARSEABLE_DISTANCE
    return abs((d1 - d2).days)


def today_iso() -> str:
    return date.today().isoformat()
