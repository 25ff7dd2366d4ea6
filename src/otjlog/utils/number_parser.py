"""Numeric input parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any


def parse_int(value: Any, default: int) -> int:
    """Parse user input as an integer, falling back to ``default``.

    Accepts ints, floats (truncated) and strings with a leading integer
    such as "12" or "12 days". Empty or unreadable input yields ``default``.

    Args:
        value: Raw input value
        default: Value returned for empty or unreadable input

    Returns:
        Parsed integer
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    text = str(value or "").strip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in "+-"):
            digits += char
        else:
            break

    try:
        return int(digits)
    except ValueError:
        return default


def parse_hours(value: Any) -> Decimal:
    """Parse a target hours value into a Decimal.

    Raises:
        ValueError: If the value is not a number
    """
    try:
        hours = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError) as e:
        raise ValueError(f"Could not parse hours '{value}': {e}")
    if not hours.is_finite():
        raise ValueError(f"Could not parse hours '{value}'")
    return hours
