"""Date and time parsing utilities."""

import re
from datetime import date, time, timedelta
from typing import Optional

from dateutil import parser as date_parser

from otjlog.domain.errors import ValidationError, invalid_time

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2026-01-15", "15 Jan 2026", etc.
    - Relative dates: "today", "yesterday", "last monday", "this week"

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "week":
            return today - timedelta(days=today.weekday() + 7)
        if period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str == "this week":
        return today - timedelta(days=today.weekday())

    # Day-first: the journal is kept by UK apprentices
    try:
        if re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
            return date.fromisoformat(date_str)
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_time(time_str: str) -> time:
    """Parse an ``HH:MM`` wall-clock time.

    Raises:
        ValidationError: If the value is not a valid time of day
    """
    match = _TIME_PATTERN.match((time_str or "").strip())
    if match is None:
        raise ValidationError(invalid_time(time_str))

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(invalid_time(time_str))
    return time(hour, minute)


def format_time(value: Optional[time]) -> Optional[str]:
    """Format a time as ``HH:MM`` (None stays None)."""
    if value is None:
        return None
    return value.strftime("%H:%M")


def parse_weekday(name: str) -> int:
    """Return the ``date.weekday()`` index for a weekday name."""
    name = name.strip().lower()
    if name not in WEEKDAYS:
        raise ValueError(f"Unknown weekday '{name}'. Supported: {', '.join(WEEKDAYS)}")
    return WEEKDAYS.index(name)
