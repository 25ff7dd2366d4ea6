"""Tests for domain entities."""

from dataclasses import FrozenInstanceError, fields
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from otjlog.domain.entities import EntryForm, JournalEntry, KSBType, ProgressSnapshot

from conftest import make_entry, make_payload


def test_journal_entry_is_immutable():
    """Test that stored entries cannot be modified in place."""
    entry = make_entry(1, date(2026, 1, 12))
    with pytest.raises(FrozenInstanceError):
        entry.title = "Changed"


def test_from_payload_and_back():
    """Test building an entry from a payload and recovering the payload."""
    payload = make_payload(date(2026, 1, 12), hours="2.5", is_off_the_job=False)
    entry = JournalEntry.from_payload(5, payload, datetime(2026, 1, 13, 15, 43))

    assert entry.id == 5
    assert entry.created_at == datetime(2026, 1, 13, 15, 43)
    assert entry.total_hours == Decimal("2.5")
    assert entry.is_off_the_job is False
    assert entry.to_payload() == payload


def test_form_from_entry():
    """Test prefilling a form from an entry."""
    entry = make_entry(1, date(2026, 1, 12), title="Seminar")
    form = EntryForm.from_entry(entry)

    assert form.title == "Seminar"
    assert form.start_time == time(9, 0)
    assert form.total_hours == Decimal("1.0")
    assert isinstance(form.ksbs, list)


def test_form_defaults():
    """Test the defaults of a new form."""
    form = EntryForm()
    assert form.start_time == "09:00"
    assert form.end_time == "10:00"
    assert form.is_off_the_job is True
    assert form.date == date.today()
    assert form.ksbs == []
    assert form.documents == []


def test_ksb_type_values():
    """Test KSB type labels."""
    assert [t.value for t in KSBType] == ["Knowledge", "Skill", "Behaviour"]


def test_snapshot_defaults():
    """Test snapshot optional fields."""
    snapshot = ProgressSnapshot(
        total_otj_hours=Decimal("0"),
        current_week_otj_hours=Decimal("0"),
        variance=Decimal("0"),
        percentage_complete=0.0,
    )
    assert snapshot.otj_entry_count == 0
    assert snapshot.holiday_mode is False


def test_form_field_types():
    """Test that the form's date field is annotated with the date type."""
    field_types = {f.name: f.type for f in fields(EntryForm)}
    assert field_types["date"] is date
    assert EntryForm.__annotations__["date"] is date
