"""Tests for progress aggregation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from otjlog.domain.entities import ProgressStatus
from otjlog.domain.progress import (
    ProgressAggregator,
    compute_progress,
    is_in_current_week,
    start_of_week,
)

from conftest import FIXED_NOW, make_entry


@pytest.fixture
def sample_entries():
    return [
        make_entry(1, date(2026, 1, 12), hours="2.0"),
        make_entry(2, date(2026, 1, 5), hours="3.0"),
        make_entry(3, date(2026, 1, 13), hours="5.0", is_off_the_job=False),
    ]


def test_totals_only_count_off_the_job(sample_entries):
    snapshot = compute_progress(
        sample_entries, Decimal("6"), Decimal("312"), holiday_mode=False, now=FIXED_NOW
    )

    assert snapshot.total_otj_hours == Decimal("5.0")
    assert snapshot.variance == Decimal("-1.0")
    assert snapshot.percentage_complete == pytest.approx(1.6, abs=0.01)
    assert snapshot.otj_entry_count == 2


def test_holiday_mode_zeroes_variance(sample_entries):
    snapshot = compute_progress(
        sample_entries, Decimal("6"), Decimal("312"), holiday_mode=True, now=FIXED_NOW
    )

    assert snapshot.variance == 0
    assert snapshot.total_otj_hours == Decimal("5.0")
    assert snapshot.status == ProgressStatus.ON_HOLIDAY


def test_holiday_mode_zeroes_positive_variance_too():
    entries = [make_entry(1, date(2026, 1, 12), hours="20.0")]
    snapshot = compute_progress(entries, 6, 312, holiday_mode=True, now=FIXED_NOW)
    assert snapshot.variance == 0


def test_current_week_hours(sample_entries):
    snapshot = compute_progress(sample_entries, 6, 312, holiday_mode=False, now=FIXED_NOW)
    # Only the 2026-01-12 OTJ entry is in the week starting Sunday 2026-01-11
    assert snapshot.current_week_otj_hours == Decimal("2.0")


def test_current_week_excludes_future_entries():
    entries = [
        make_entry(1, date(2026, 1, 14), hours="1.0"),
        make_entry(2, date(2026, 1, 15), hours="4.0"),
    ]
    snapshot = compute_progress(entries, 6, 312, holiday_mode=False, now=FIXED_NOW)
    assert snapshot.current_week_otj_hours == Decimal("1.0")


def test_percentage_is_capped_at_100():
    entries = [make_entry(1, date(2026, 1, 12), hours="400.0")]
    snapshot = compute_progress(entries, 6, 312, holiday_mode=False, now=FIXED_NOW)
    assert snapshot.percentage_complete == 100.0


def test_exact_target_is_100_percent():
    entries = [make_entry(1, date(2026, 1, 12), hours="312.0")]
    snapshot = compute_progress(entries, 6, 312, holiday_mode=False, now=FIXED_NOW)
    assert snapshot.percentage_complete == 100.0


def test_zero_annual_target_gives_zero_percent():
    entries = [make_entry(1, date(2026, 1, 12), hours="3.0")]
    snapshot = compute_progress(entries, 6, 0, holiday_mode=False, now=FIXED_NOW)
    assert snapshot.percentage_complete == 0.0


def test_no_entries():
    snapshot = compute_progress([], 6, 312, holiday_mode=False, now=FIXED_NOW)
    assert snapshot.total_otj_hours == 0
    assert snapshot.current_week_otj_hours == 0
    assert snapshot.variance == Decimal("-6")
    assert snapshot.percentage_complete == 0.0
    assert snapshot.status == ProgressStatus.BEHIND


def test_status_labels():
    ahead = compute_progress(
        [make_entry(1, date(2026, 1, 12), hours="8.0")], 6, 312, False, now=FIXED_NOW
    )
    on_target = compute_progress(
        [make_entry(1, date(2026, 1, 12), hours="6.0")], 6, 312, False, now=FIXED_NOW
    )
    assert ahead.status == ProgressStatus.AHEAD
    assert on_target.status == ProgressStatus.ON_TARGET


def test_inputs_are_not_modified(sample_entries):
    before = list(sample_entries)
    compute_progress(sample_entries, 6, 312, holiday_mode=False, now=FIXED_NOW)
    assert sample_entries == before


def test_start_of_week_defaults_to_sunday():
    assert start_of_week(FIXED_NOW) == datetime(2026, 1, 11)
    # On a Sunday the week starts that same midnight
    assert start_of_week(datetime(2026, 1, 11, 18, 0)) == datetime(2026, 1, 11)


def test_start_of_week_monday():
    assert start_of_week(FIXED_NOW, week_start=0) == datetime(2026, 1, 12)


def test_is_in_current_week_boundaries():
    assert is_in_current_week(date(2026, 1, 11), FIXED_NOW)
    assert not is_in_current_week(date(2026, 1, 10), FIXED_NOW)
    assert is_in_current_week(date(2026, 1, 14), FIXED_NOW)
    assert not is_in_current_week(date(2026, 1, 14), datetime(2026, 1, 14))


class TestProgressAggregator:
    """Tests for the aggregator wrapper."""

    def test_uses_injected_clock(self, sample_entries):
        aggregator = ProgressAggregator(
            weekly_target=Decimal("6"), clock=lambda: datetime(2026, 1, 7, 9, 0)
        )
        snapshot = aggregator.compute(sample_entries)
        # Week of Sunday 2026-01-04 contains the 2026-01-05 entry only
        assert snapshot.current_week_otj_hours == Decimal("3.0")

    def test_annual_target_defaults_to_52_weeks(self):
        aggregator = ProgressAggregator(weekly_target=Decimal("6"))
        assert aggregator.annual_target == Decimal("312")

    def test_holiday_mode_is_passed_through(self, aggregator, sample_entries):
        assert aggregator.compute(sample_entries, holiday_mode=True).variance == 0
        assert aggregator.compute(sample_entries, holiday_mode=False).variance == Decimal("-1.0")
