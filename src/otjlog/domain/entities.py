"""Domain model entities for otjlog.

These are pure data classes representing journal concepts, independent of
how a store persists them. Stores convert to and from these types so the
business logic stays stable when the storage backend changes.
"""

import datetime as dt
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional

DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_HOLIDAY_ALLOWANCE = 28
LOW_HOLIDAY_THRESHOLD = 5


class KSBType(str, Enum):
    """Competency kind a KSB tag evidences."""

    KNOWLEDGE = "Knowledge"
    SKILL = "Skill"
    BEHAVIOUR = "Behaviour"


@dataclass(frozen=True)
class KSBTag:
    """Knowledge, skill or behaviour reference tag."""

    id: str
    type: KSBType
    description: str


@dataclass(frozen=True)
class Document:
    """Evidence file metadata. The file content lives elsewhere."""

    id: str
    name: str
    size: int
    type: str


@dataclass(frozen=True)
class EntryPayload:
    """Persistable fields of a journal entry (no id, no creation time)."""

    title: str
    category: str
    description: str
    date: date
    start_time: Optional[time]
    end_time: Optional[time]
    total_hours: Decimal
    is_off_the_job: bool = True
    ksbs: tuple[KSBTag, ...] = ()
    documents: tuple[Document, ...] = ()


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry domain entity."""

    id: int
    title: str
    category: str
    description: str
    date: date
    start_time: Optional[time]
    end_time: Optional[time]
    total_hours: Decimal
    is_off_the_job: bool
    ksbs: tuple[KSBTag, ...]
    documents: tuple[Document, ...]
    created_at: datetime

    @classmethod
    def from_payload(
        cls, entry_id: int, payload: EntryPayload, created_at: datetime
    ) -> "JournalEntry":
        """Build an entry from a payload plus store-assigned identity."""
        return cls(
            id=entry_id,
            title=payload.title,
            category=payload.category,
            description=payload.description,
            date=payload.date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            total_hours=payload.total_hours,
            is_off_the_job=payload.is_off_the_job,
            ksbs=tuple(payload.ksbs),
            documents=tuple(payload.documents),
            created_at=created_at,
        )

    def to_payload(self) -> EntryPayload:
        """Return the editable fields of this entry."""
        return EntryPayload(
            title=self.title,
            category=self.category,
            description=self.description,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            total_hours=self.total_hours,
            is_off_the_job=self.is_off_the_job,
            ksbs=self.ksbs,
            documents=self.documents,
        )


@dataclass(frozen=True)
class HolidayRecord:
    """Holiday settings for one apprentice.

    Out-of-range values are clamped on construction so that
    ``1 <= allowance`` and ``0 <= days_used <= allowance`` always hold.
    """

    id: Optional[int]
    apprentice_id: int
    holiday_mode_enabled: bool = False
    days_used: int = 0
    allowance: int = DEFAULT_HOLIDAY_ALLOWANCE

    def __post_init__(self) -> None:
        allowance = max(1, int(self.allowance))
        days_used = max(0, min(allowance, int(self.days_used)))
        object.__setattr__(self, "allowance", allowance)
        object.__setattr__(self, "days_used", days_used)

    @property
    def remaining_days(self) -> int:
        return self.allowance - self.days_used

    @property
    def percentage_used(self) -> float:
        """Share of the allowance used, in percent. Not clamped."""
        return self.days_used / self.allowance * 100

    @property
    def is_running_low(self) -> bool:
        return self.remaining_days < LOW_HOLIDAY_THRESHOLD


class ProgressStatus(str, Enum):
    """Label describing the weekly variance."""

    ON_HOLIDAY = "On holiday"
    ON_TARGET = "On target!"
    AHEAD = "Ahead of target!"
    BEHIND = "Behind target"


@dataclass(frozen=True)
class ProgressSnapshot:
    """Aggregated OTJ statistics. Derived, never persisted."""

    total_otj_hours: Decimal
    current_week_otj_hours: Decimal
    variance: Decimal
    percentage_complete: float
    otj_entry_count: int = 0
    holiday_mode: bool = False

    @property
    def status(self) -> ProgressStatus:
        if self.holiday_mode:
            return ProgressStatus.ON_HOLIDAY
        if self.variance == 0:
            return ProgressStatus.ON_TARGET
        if self.variance > 0:
            return ProgressStatus.AHEAD
        return ProgressStatus.BEHIND


@dataclass
class EntryForm:
    """Mutable form state for an entry submission.

    Times may be ``HH:MM`` strings or ``time`` objects; the duration is
    recomputed from the current values every time it is read.
    """

    title: str = ""
    category: str = ""
    description: str = ""
    date: dt.date = field(default_factory=dt.date.today)
    start_time: Optional[str | time] = "09:00"
    end_time: Optional[str | time] = "10:00"
    is_off_the_job: bool = True
    ksbs: list[KSBTag] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)

    @property
    def total_hours(self) -> Decimal:
        from otjlog.domain.duration import calculate_duration

        return calculate_duration(self.start_time, self.end_time)

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "EntryForm":
        """Prefill a form from an existing entry for editing."""
        return cls(
            title=entry.title,
            category=entry.category,
            description=entry.description,
            date=entry.date,
            start_time=entry.start_time,
            end_time=entry.end_time,
            is_off_the_job=entry.is_off_the_job,
            ksbs=list(entry.ksbs),
            documents=list(entry.documents),
        )
