"""Entry duration calculation."""

from datetime import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from otjlog.utils.date_parser import parse_time

ONE_DECIMAL = Decimal("0.1")


def minutes_since_midnight(value: str | time) -> int:
    """Convert an ``HH:MM`` string or time to minutes since midnight."""
    if not isinstance(value, time):
        value = parse_time(value)
    return value.hour * 60 + value.minute


def calculate_duration(
    start: Optional[str | time], end: Optional[str | time]
) -> Decimal:
    """Calculate elapsed hours between two times on the same day.

    An end time before or equal to the start time gives zero hours; there is
    no wraparound past midnight. The result is rounded half-up to one
    decimal place, so 45 minutes is 0.8 and 195 minutes is 3.3.

    Args:
        start: Start time (``HH:MM`` or time), or None
        end: End time (``HH:MM`` or time), or None

    Returns:
        Hours as a Decimal with one decimal place

    Raises:
        ValidationError: If a time string is not ``HH:MM``
    """
    if not start or not end:
        return Decimal("0")

    duration_minutes = minutes_since_midnight(end) - minutes_since_midnight(start)
    if duration_minutes <= 0:
        return Decimal("0")

    hours = Decimal(duration_minutes) / Decimal(60)
    return hours.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
