"""Shared pytest fixtures for otjlog tests."""

import tempfile
import os
from dataclasses import replace
from datetime import datetime, date, time
from decimal import Decimal
from typing import Optional

import pytest

from otjlog.database.base import Repository
from otjlog.database.factories import create_sqlite_repository
from otjlog.domain.entities import (
    EntryForm,
    EntryPayload,
    HolidayRecord,
    JournalEntry,
    KSBTag,
)
from otjlog.domain.errors import NotFoundError, TransportError
from otjlog.domain.journal import JournalService
from otjlog.domain.materializer import EntryMaterializer
from otjlog.domain.progress import ProgressAggregator

# Wednesday; the week (starting Sunday) began on 2026-01-11
FIXED_NOW = datetime(2026, 1, 14, 12, 0)

CATEGORY = "Research and self-study"


class FakeRepository(Repository):
    """In-memory repository with failure injection.

    ``fail`` maps a method name to the number of successful calls allowed
    before that method starts raising TransportError.
    """

    def __init__(self):
        self.entries: dict[int, JournalEntry] = {}
        self.holidays: dict[int, HolidayRecord] = {}
        self.ksbs: list[KSBTag] = []
        self.calls: list[tuple] = []
        self.fail: dict[str, int] = {}
        self._next_id = 1

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.fail:
            if self.fail[name] <= 0:
                raise TransportError(f"{name} failed", status_code=500)
            self.fail[name] -= 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def list_entries(self) -> list[JournalEntry]:
        self._record("list_entries")
        return list(self.entries.values())

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        self._record("get_entry", entry_id)
        return self.entries.get(entry_id)

    def create_entry(self, payload: EntryPayload) -> JournalEntry:
        self._record("create_entry", payload)
        entry = JournalEntry.from_payload(self._new_id(), payload, datetime(2026, 1, 13, 15, 43))
        self.entries[entry.id] = entry
        return entry

    def update_entry(self, entry_id: int, payload: EntryPayload) -> JournalEntry:
        self._record("update_entry", entry_id, payload)
        if entry_id not in self.entries:
            raise NotFoundError(f"Entry {entry_id} not found", status_code=404)
        # Fresh creation time; callers must keep the one they already hold
        entry = JournalEntry.from_payload(entry_id, payload, datetime(2030, 1, 1))
        self.entries[entry_id] = entry
        return entry

    def delete_entry(self, entry_id: int) -> None:
        self._record("delete_entry", entry_id)
        if entry_id not in self.entries:
            raise NotFoundError(f"Entry {entry_id} not found", status_code=404)
        del self.entries[entry_id]

    def list_holidays(self) -> list[HolidayRecord]:
        self._record("list_holidays")
        return list(self.holidays.values())

    def create_holiday(self, record: HolidayRecord) -> HolidayRecord:
        self._record("create_holiday", record)
        stored = replace(record, id=self._new_id())
        self.holidays[stored.id] = stored
        return stored

    def update_holiday(self, holiday_id: int, record: HolidayRecord) -> HolidayRecord:
        self._record("update_holiday", holiday_id, record)
        stored = replace(record, id=holiday_id)
        self.holidays[holiday_id] = stored
        return stored

    def list_ksbs(self) -> list[KSBTag]:
        self._record("list_ksbs")
        return list(self.ksbs)

    def create_ksb(self, ksb: KSBTag) -> KSBTag:
        self._record("create_ksb", ksb)
        self.ksbs.append(ksb)
        return ksb

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_payload(
    entry_date: date,
    hours: str = "1.0",
    is_off_the_job: bool = True,
    title: str = "Workshop",
) -> EntryPayload:
    """Build an entry payload without going through a form."""
    return EntryPayload(
        title=title,
        category=CATEGORY,
        description="Notes",
        date=entry_date,
        start_time=time(9, 0),
        end_time=time(10, 0),
        total_hours=Decimal(hours),
        is_off_the_job=is_off_the_job,
    )


def make_entry(
    entry_id: int,
    entry_date: date,
    hours: str = "1.0",
    is_off_the_job: bool = True,
    title: str = "Workshop",
) -> JournalEntry:
    """Build a stored-looking journal entry."""
    return JournalEntry.from_payload(
        entry_id,
        make_payload(entry_date, hours, is_off_the_job, title),
        datetime(2026, 1, 1, 8, 30),
    )


@pytest.fixture
def temp_repository():
    """Create a temporary SQLite repository for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    repository = create_sqlite_repository(database_path=db_path)
    # Store the path for tests that need it
    repository.database_path = db_path
    repository.connect()
    repository.initialize_schema()

    yield repository

    repository.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fake_repository():
    """Create an in-memory repository."""
    return FakeRepository()


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def aggregator(fixed_clock):
    """Progress aggregator with a 6h weekly target and fixed clock."""
    return ProgressAggregator(weekly_target=Decimal("6"), annual_target=Decimal("312"), clock=fixed_clock)


@pytest.fixture
def journal(fake_repository, aggregator):
    """Create a loaded JournalService over the in-memory repository."""
    service = JournalService(fake_repository, EntryMaterializer(), aggregator)
    service.load()
    return service


@pytest.fixture
def entry_form():
    """A valid entry form: 09:00 to 10:30 on 2026-01-12."""
    return EntryForm(
        title="Weekly Tech Workshop",
        category=CATEGORY,
        description="Learned about testing",
        date=date(2026, 1, 12),
        start_time="09:00",
        end_time="10:30",
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
