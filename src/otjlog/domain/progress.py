"""Progress aggregation against weekly and annual OTJ targets."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Callable, Iterable, Optional

from otjlog.domain.entities import JournalEntry, ProgressSnapshot

Clock = Callable[[], datetime]

# date.weekday() index of the first day of the week
SUNDAY = 6
WEEKS_PER_YEAR = 52


def start_of_week(now: datetime, week_start: int = SUNDAY) -> datetime:
    """Return midnight of the most recent ``week_start`` day on or before ``now``."""
    days_back = (now.weekday() - week_start) % 7
    first_day = now.date() - timedelta(days=days_back)
    return datetime.combine(first_day, time.min, tzinfo=now.tzinfo)


def is_in_current_week(entry_date: date, now: datetime, week_start: int = SUNDAY) -> bool:
    """Check whether ``entry_date`` falls in [start of week, now)."""
    entry_start = datetime.combine(entry_date, time.min, tzinfo=now.tzinfo)
    return start_of_week(now, week_start) <= entry_start < now


def compute_progress(
    entries: Iterable[JournalEntry],
    weekly_target: Decimal,
    annual_target: Decimal,
    holiday_mode: bool,
    now: Optional[datetime] = None,
    week_start: int = SUNDAY,
) -> ProgressSnapshot:
    """Compute OTJ progress statistics.

    Only off-the-job entries count. The variance compares total OTJ hours
    with the weekly target and is zero while holiday mode is on. The
    percentage of the annual target is capped at 100.

    Args:
        entries: Journal entries (not modified)
        weekly_target: Weekly OTJ target hours
        annual_target: Annual OTJ target hours
        holiday_mode: Whether holiday mode suspends the weekly target
        now: Current time (defaults to ``datetime.now()``)
        week_start: ``date.weekday()`` index of the first day of the week

    Returns:
        ProgressSnapshot with the computed statistics
    """
    now = now or datetime.now()
    weekly_target = Decimal(str(weekly_target))
    annual_target = Decimal(str(annual_target))

    otj_entries = [entry for entry in entries if entry.is_off_the_job]
    total = sum((entry.total_hours for entry in otj_entries), Decimal("0"))
    week_total = sum(
        (
            entry.total_hours
            for entry in otj_entries
            if is_in_current_week(entry.date, now, week_start)
        ),
        Decimal("0"),
    )

    variance = Decimal("0") if holiday_mode else total - weekly_target

    if annual_target > 0:
        percentage = min(100.0, float(total / annual_target * 100))
    else:
        percentage = 0.0

    return ProgressSnapshot(
        total_otj_hours=total,
        current_week_otj_hours=week_total,
        variance=variance,
        percentage_complete=percentage,
        otj_entry_count=len(otj_entries),
        holiday_mode=holiday_mode,
    )


class ProgressAggregator:
    """Holds the targets and clock used to compute progress snapshots."""

    def __init__(
        self,
        weekly_target: Decimal = Decimal("6"),
        annual_target: Optional[Decimal] = None,
        clock: Clock = datetime.now,
        week_start: int = SUNDAY,
    ):
        """Initialize the aggregator.

        Args:
            weekly_target: Weekly OTJ target hours
            annual_target: Annual target hours (defaults to 52 weekly targets)
            clock: Callable returning the current time
            week_start: ``date.weekday()`` index of the first day of the week
        """
        self.weekly_target = Decimal(str(weekly_target))
        if annual_target is None:
            annual_target = self.weekly_target * WEEKS_PER_YEAR
        self.annual_target = Decimal(str(annual_target))
        self.clock = clock
        self.week_start = week_start

    def compute(self, entries: Iterable[JournalEntry], holiday_mode: bool = False) -> ProgressSnapshot:
        return compute_progress(
            entries,
            weekly_target=self.weekly_target,
            annual_target=self.annual_target,
            holiday_mode=holiday_mode,
            now=self.clock(),
            week_start=self.week_start,
        )
