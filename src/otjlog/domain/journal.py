"""Journal entry domain service."""

import logging
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional

from otjlog.database.base import Repository
from otjlog.domain.entities import EntryForm, EntryPayload, JournalEntry, ProgressSnapshot
from otjlog.domain.errors import (
    NotFoundError,
    OperationError,
    TransportError,
    entry_not_found,
)
from otjlog.domain.materializer import EntryMaterializer
from otjlog.domain.progress import ProgressAggregator

logger = logging.getLogger(__name__)

Confirm = Callable[[], bool]


class JournalState(str, Enum):
    """Lifecycle state of the entry collection."""

    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"


def sort_entries(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Sort entries by date, most recent first, keeping ties in input order."""
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


class JournalService:
    """Service for managing the journal entry collection.

    Keeps the entries sorted and the progress snapshot current after every
    successful change. Store failures leave the collection as it was and are
    raised as ``OperationError`` with a message for the user.
    """

    def __init__(
        self,
        repository: Repository,
        materializer: Optional[EntryMaterializer] = None,
        aggregator: Optional[ProgressAggregator] = None,
        holiday_mode: bool = False,
    ):
        """Initialize journal service.

        Args:
            repository: Store holding the entries
            materializer: Builds payloads from forms
            aggregator: Computes progress snapshots
            holiday_mode: Initial holiday mode used for progress
        """
        self.repository = repository
        self.materializer = materializer or EntryMaterializer()
        self.aggregator = aggregator or ProgressAggregator()
        self.holiday_mode = holiday_mode

        self.state = JournalState.LOADING
        self.entries: list[JournalEntry] = []
        self.last_error: Optional[str] = None
        self.form_open = False
        self.editing_id: Optional[int] = None
        self.progress: ProgressSnapshot = self.aggregator.compute([], holiday_mode)

    # Loading and progress
    def load(self) -> list[JournalEntry]:
        """Fetch all entries from the store.

        A failed fetch leaves the journal ready with no entries and a
        message in ``last_error``; nothing is raised.
        """
        self.state = JournalState.LOADING
        try:
            entries = self.repository.list_entries()
        except TransportError as e:
            logger.warning("Failed to load entries: %s", e)
            self.entries = []
            self.last_error = "Failed to load entries. Please try again later."
        else:
            self.entries = sort_entries(entries)
            self.last_error = None
        self.state = JournalState.READY
        self.refresh_progress()
        return self.entries

    def refresh_progress(self) -> ProgressSnapshot:
        self.progress = self.aggregator.compute(self.entries, self.holiday_mode)
        return self.progress

    def set_holiday_mode(self, enabled: bool) -> ProgressSnapshot:
        """Apply a holiday mode change and recompute progress."""
        self.holiday_mode = enabled
        return self.refresh_progress()

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    # Form state
    def open_form(self) -> None:
        self.form_open = True
        self.editing_id = None

    def begin_edit(self, entry_id: int) -> EntryForm:
        """Start editing an entry and return a form prefilled from it.

        Raises:
            NotFoundError: If the entry is not in the collection
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        self.form_open = True
        self.editing_id = entry_id
        return EntryForm.from_entry(entry)

    def cancel_form(self) -> None:
        self.form_open = False
        self.editing_id = None

    # Mutations
    def create(self, form: EntryForm) -> JournalEntry:
        """Create a single entry dated ``form.date``.

        Raises:
            ValidationError: If the form is invalid
            OperationError: If the store rejects the entry
        """
        payload = self.materializer.materialize(form)[0]
        return self._create_all([payload])[0]

    def create_many(self, form: EntryForm, dates: Iterable[date]) -> list[JournalEntry]:
        """Create one entry per selected date.

        Every entry must be stored before any of them joins the collection.
        If one fails, the ones already stored are deleted again and nothing
        is merged.

        Raises:
            ValidationError: If the form is invalid or no date is selected
            OperationError: If the store rejects any of the entries
        """
        payloads = self.materializer.materialize(form, selected_dates=dates)
        return self._create_all(payloads)

    def update(self, entry_id: int, form: EntryForm) -> JournalEntry:
        """Replace the editable fields of an entry.

        The entry keeps its ID and creation time.

        Raises:
            ValidationError: If the form is invalid
            OperationError: If the store rejects the update
        """
        payload = self.materializer.materialize(form, editing=True)[0]
        existing = self.get_entry(entry_id)

        self.state = JournalState.SUBMITTING
        try:
            stored = self.repository.update_entry(entry_id, payload)
        except TransportError as e:
            self._fail("Failed to update entry", e)
        finally:
            self.state = JournalState.READY

        created_at = existing.created_at if existing else stored.created_at
        updated = JournalEntry.from_payload(entry_id, payload, created_at)
        if existing is None:
            self.entries = sort_entries([*self.entries, updated])
        else:
            self.entries = sort_entries(
                updated if entry.id == entry_id else entry for entry in self.entries
            )
        self.cancel_form()
        self._succeeded()
        logger.info("Updated entry %s", entry_id)
        return updated

    def delete(self, entry_id: int, confirm: Confirm) -> bool:
        """Delete an entry after the user confirms.

        Args:
            entry_id: Entry to delete
            confirm: Asks the user; a falsy answer aborts without any store call

        Returns:
            True if the entry was deleted, False if the user declined

        Raises:
            OperationError: If the store rejects the delete
        """
        if not confirm():
            return False

        self.state = JournalState.SUBMITTING
        try:
            self.repository.delete_entry(entry_id)
        except TransportError as e:
            self._fail("Failed to delete entry. Please try again.", e)
        finally:
            self.state = JournalState.READY

        self.entries = [entry for entry in self.entries if entry.id != entry_id]
        if self.editing_id == entry_id:
            self.cancel_form()
        self._succeeded()
        logger.info("Deleted entry %s", entry_id)
        return True

    def _create_all(self, payloads: list[EntryPayload]) -> list[JournalEntry]:
        created: list[JournalEntry] = []
        self.state = JournalState.SUBMITTING
        try:
            for payload in payloads:
                created.append(self.repository.create_entry(payload))
        except TransportError as e:
            self._discard(created)
            self._fail("Failed to save entry. Please try again.", e)
        finally:
            self.state = JournalState.READY

        self.entries = sort_entries([*self.entries, *created])
        self.cancel_form()
        self._succeeded()
        logger.info("Created %d entr%s", len(created), "y" if len(created) == 1 else "ies")
        return created

    def _discard(self, created: list[JournalEntry]) -> None:
        """Delete entries stored by a multi-date create that did not complete."""
        for entry in created:
            try:
                self.repository.delete_entry(entry.id)
            except TransportError as e:
                logger.warning("Could not remove partially created entry %s: %s", entry.id, e)

    def _succeeded(self) -> None:
        self.last_error = None
        self.refresh_progress()

    def _fail(self, message: str, error: TransportError) -> None:
        logger.warning("%s: %s", message, error)
        self.last_error = message
        raise OperationError(message) from error
