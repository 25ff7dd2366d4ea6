"""Generic SQLAlchemy store implementation."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from otjlog.database.base import Repository
from otjlog.database.models import (
    Entry,
    Holiday,
    KSB,
    create_session_factory,
)
from otjlog.database.mappers import (
    apply_payload,
    entry_to_domain,
    holiday_to_domain,
    ksb_to_domain,
)
from otjlog.domain.entities import (
    EntryPayload,
    HolidayRecord,
    JournalEntry as DomainEntry,
    KSBTag,
)
from otjlog.domain.errors import (
    NotFoundError,
    TransportError,
    entry_not_found,
    holiday_not_found,
)

logger = logging.getLogger(__name__)


class SQLAlchemyRepository(Repository):
    """SQLAlchemy-based implementation of the Repository interface.

    Every database failure is rolled back and raised as TransportError.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        """Yield the session, translating database failures into TransportError."""
        session = self._get_session()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Failed to %s: %s", action, e)
            raise TransportError(f"Failed to {action}: {e}") from e

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Entry operations
    def list_entries(self) -> list[DomainEntry]:
        """List all entries in insertion order."""
        with self._transaction("load entries") as session:
            rows = session.query(Entry).order_by(Entry.id).all()
            return [entry_to_domain(row) for row in rows]

    def get_entry(self, entry_id: int) -> Optional[DomainEntry]:
        """Get entry by ID."""
        with self._transaction("load entry") as session:
            row = session.query(Entry).filter(Entry.id == entry_id).first()
            return entry_to_domain(row) if row else None

    def create_entry(self, payload: EntryPayload) -> DomainEntry:
        """Create an entry. Returns the stored entry."""
        with self._transaction("create entry") as session:
            row = apply_payload(Entry(), payload)
            session.add(row)
            session.commit()
            logger.debug("Created entry %s for %s", row.id, row.date)
            return entry_to_domain(row)

    def update_entry(self, entry_id: int, payload: EntryPayload) -> DomainEntry:
        """Replace the editable fields of an entry."""
        with self._transaction("update entry") as session:
            row = session.query(Entry).filter(Entry.id == entry_id).first()
            if row is None:
                raise NotFoundError(entry_not_found(entry_id), status_code=404)
            apply_payload(row, payload)
            session.commit()
            return entry_to_domain(row)

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry."""
        with self._transaction("delete entry") as session:
            row = session.query(Entry).filter(Entry.id == entry_id).first()
            if row is None:
                raise NotFoundError(entry_not_found(entry_id), status_code=404)
            session.delete(row)
            session.commit()

    # Holiday operations
    def list_holidays(self) -> list[HolidayRecord]:
        """List all holiday records."""
        with self._transaction("load holiday settings") as session:
            rows = session.query(Holiday).order_by(Holiday.id).all()
            return [holiday_to_domain(row) for row in rows]

    def create_holiday(self, record: HolidayRecord) -> HolidayRecord:
        """Create a holiday record."""
        with self._transaction("create holiday record") as session:
            row = Holiday(
                apprentice_id=record.apprentice_id,
                holiday_mode=record.holiday_mode_enabled,
                days_used=record.days_used,
                allowance=record.allowance,
            )
            session.add(row)
            session.commit()
            return holiday_to_domain(row)

    def update_holiday(self, holiday_id: int, record: HolidayRecord) -> HolidayRecord:
        """Replace every field of a holiday record."""
        with self._transaction("update holiday record") as session:
            row = session.query(Holiday).filter(Holiday.id == holiday_id).first()
            if row is None:
                raise NotFoundError(holiday_not_found(holiday_id), status_code=404)
            row.apprentice_id = record.apprentice_id
            row.holiday_mode = record.holiday_mode_enabled
            row.days_used = record.days_used
            row.allowance = record.allowance
            session.commit()
            return holiday_to_domain(row)

    # KSB operations
    def list_ksbs(self) -> list[KSBTag]:
        """List KSB reference tags ordered by ID."""
        with self._transaction("load KSBs") as session:
            return [ksb_to_domain(row) for row in session.query(KSB).order_by(KSB.id).all()]

    def create_ksb(self, ksb: KSBTag) -> KSBTag:
        """Add a KSB reference tag."""
        with self._transaction("create KSB") as session:
            row = KSB(id=ksb.id, type=ksb.type.value, description=ksb.description)
            session.add(row)
            session.commit()
            return ksb_to_domain(row)
