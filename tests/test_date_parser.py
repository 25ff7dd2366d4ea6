"""Tests for date and time parsing."""

import pytest
from datetime import date, time

from otjlog.domain.errors import ValidationError
from otjlog.utils.date_parser import format_time, parse_date, parse_time, parse_weekday

# Wednesday
TODAY = date(2026, 1, 14)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2026-01-15") == date(2026, 1, 15)


def test_parse_day_first_date():
    """Test that ambiguous dates are read day first."""
    assert parse_date("03/02/2026") == date(2026, 2, 3)
    assert parse_date("15 Jan 2026") == date(2026, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("Today", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    """Test parsing 'yesterday' and 'tomorrow'."""
    assert parse_date("yesterday", today=TODAY) == date(2026, 1, 13)
    assert parse_date("tomorrow", today=TODAY) == date(2026, 1, 15)


def test_parse_last_weekday():
    """Test parsing 'last <weekday>'."""
    assert parse_date("last monday", today=TODAY) == date(2026, 1, 12)
    # The same weekday means a week ago
    assert parse_date("last wednesday", today=TODAY) == date(2026, 1, 7)


def test_parse_week_references():
    """Test parsing 'this week' and 'last week'."""
    assert parse_date("this week", today=TODAY) == date(2026, 1, 12)
    assert parse_date("last week", today=TODAY) == date(2026, 1, 5)


def test_parse_invalid_date():
    """Test parsing an invalid date."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_time():
    """Test parsing wall-clock times."""
    assert parse_time("09:30") == time(9, 30)
    assert parse_time("9:05") == time(9, 5)
    assert parse_time("23:59:59") == time(23, 59)


@pytest.mark.parametrize("value", ["", "9", "930", "25:00", "12:60", "noon"])
def test_parse_invalid_time(value):
    """Test that malformed times are rejected."""
    with pytest.raises(ValidationError):
        parse_time(value)


def test_format_time():
    """Test formatting times."""
    assert format_time(time(9, 5)) == "09:05"
    assert format_time(None) is None


def test_parse_weekday():
    """Test weekday name lookup."""
    assert parse_weekday("Sunday") == 6
    assert parse_weekday(" monday ") == 0
    with pytest.raises(ValueError):
        parse_weekday("funday")
