"""Configuration values read from the environment."""

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from otjlog.domain.entities import DEFAULT_HOLIDAY_ALLOWANCE
from otjlog.domain.errors import ValidationError
from otjlog.domain.progress import SUNDAY, WEEKS_PER_YEAR
from otjlog.utils.date_parser import parse_weekday
from otjlog.utils.number_parser import parse_hours

DEFAULT_WEEKLY_TARGET = Decimal("6")
DEFAULT_APPRENTICE_ID = 1


@dataclass(frozen=True)
class Settings:
    """Targets and store location for the journal."""

    weekly_target_hours: Decimal = DEFAULT_WEEKLY_TARGET
    annual_target_hours: Decimal = DEFAULT_WEEKLY_TARGET * WEEKS_PER_YEAR
    default_holiday_allowance: int = DEFAULT_HOLIDAY_ALLOWANCE
    apprentice_id: int = DEFAULT_APPRENTICE_ID
    week_start: int = SUNDAY
    db_path: Optional[str] = None
    api_url: Optional[str] = None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from ``OTJLOG_*`` environment variables.

    The annual target defaults to 52 weekly targets.

    Raises:
        ValidationError: If a numeric value is invalid
    """
    env = os.environ if environ is None else environ

    try:
        weekly = parse_hours(env.get("OTJLOG_WEEKLY_TARGET", DEFAULT_WEEKLY_TARGET))
        annual_raw = env.get("OTJLOG_ANNUAL_TARGET")
        annual = parse_hours(annual_raw) if annual_raw else weekly * WEEKS_PER_YEAR
        allowance = int(env.get("OTJLOG_HOLIDAY_ALLOWANCE", DEFAULT_HOLIDAY_ALLOWANCE))
        apprentice_id = int(env.get("OTJLOG_APPRENTICE_ID", DEFAULT_APPRENTICE_ID))
        week_start = parse_weekday(env.get("OTJLOG_WEEK_START", "sunday"))
    except ValueError as e:
        raise ValidationError(f"Invalid configuration: {e}") from e

    if weekly < 0 or annual <= 0:
        raise ValidationError("Invalid configuration: targets must be positive")

    return Settings(
        weekly_target_hours=weekly,
        annual_target_hours=annual,
        default_holiday_allowance=max(1, allowance),
        apprentice_id=apprentice_id,
        week_start=week_start,
        db_path=env.get("OTJLOG_DB_PATH"),
        api_url=env.get("OTJLOG_API_URL") or None,
    )
