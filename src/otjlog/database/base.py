"""Abstract store interface for journal entries and holiday settings."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from otjlog.domain.entities import (
    EntryPayload,
    HolidayRecord,
    JournalEntry,
    KSBTag,
)


class Repository(ABC):
    """Abstract store for otjlog.

    Every operation either succeeds or raises ``TransportError`` (or its
    ``NotFoundError`` subclass). Implementations never fail silently.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Prepare the store for use (create tables where applicable)."""
        pass

    # Entry operations
    @abstractmethod
    def list_entries(self) -> list[JournalEntry]:
        """List all entries in store order."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get entry by ID, or None if it does not exist."""
        pass

    @abstractmethod
    def create_entry(self, payload: EntryPayload) -> JournalEntry:
        """Create an entry. The store assigns the ID and creation time."""
        pass

    @abstractmethod
    def update_entry(self, entry_id: int, payload: EntryPayload) -> JournalEntry:
        """Replace the editable fields of an entry."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry."""
        pass

    # Holiday operations
    @abstractmethod
    def list_holidays(self) -> list[HolidayRecord]:
        """List all holiday records."""
        pass

    @abstractmethod
    def create_holiday(self, record: HolidayRecord) -> HolidayRecord:
        """Create a holiday record. The store assigns the ID."""
        pass

    @abstractmethod
    def update_holiday(self, holiday_id: int, record: HolidayRecord) -> HolidayRecord:
        """Replace every field of a holiday record."""
        pass

    # KSB operations
    @abstractmethod
    def list_ksbs(self) -> list[KSBTag]:
        """List KSB reference tags."""
        pass

    @abstractmethod
    def create_ksb(self, ksb: KSBTag) -> KSBTag:
        """Add a KSB reference tag."""
        pass
