"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts "today", "yesterday" and any absolute format python-dateutil
    understands ("2024-01-15", "January 15, 2024", ...).

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
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    return parse_datetime(date_str).date()


def parse_datetime(value: str) -> datetime:
    """Parse a timestamp such as "2019-06-01" or "2019-06-01 14:30".

    Timezone information is dropped; the store keeps naive timestamps.

    Raises:
        ValueError: If the string cannot be parsed
    """
    try:
        return date_parser.parse(value.strip()).replace(tzinfo=None)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")
