"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser

from expensetrack.domain.errors import ValidationError


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including a few relative dates:
    - Absolute dates: "2026-02-11", "February 11, 2026", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValidationError: If date string cannot be parsed
    """
    normalized = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if normalized in relative_dates:
        return relative_dates[normalized]

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(normalized)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")
