"""Build persistable entry payloads from form submissions."""

from datetime import date, time
from typing import Iterable, Optional

from otjlog.domain.entities import DEFAULT_DESCRIPTION, EntryForm, EntryPayload
from otjlog.domain.errors import (
    ValidationError,
    duplicate_ksb,
    multi_date_edit,
    no_dates_selected,
    required_fields_missing,
    unknown_category,
)
from otjlog.domain.duration import calculate_duration
from otjlog.domain.reference import ReferenceData
from otjlog.utils.date_parser import parse_time


class DateSelection:
    """Set of distinct dates kept in ascending order."""

    def __init__(self, dates: Iterable[date] = ()):
        self._dates: set[date] = set(dates)

    def add(self, value: date) -> None:
        self._dates.add(value)

    def remove(self, value: date) -> None:
        self._dates.discard(value)

    def clear(self) -> None:
        self._dates.clear()

    @property
    def dates(self) -> list[date]:
        return sorted(self._dates)

    def __iter__(self):
        return iter(self.dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, value: object) -> bool:
        return value in self._dates


class EntryMaterializer:
    """Turns entry form state into one or more entry payloads.

    This is a pure transform: nothing is persisted here.
    """

    def __init__(self, reference: Optional[ReferenceData] = None):
        """Initialize the materializer.

        Args:
            reference: Category and KSB tables used for validation
        """
        self.reference = reference or ReferenceData()

    def validate(self, form: EntryForm) -> None:
        """Validate a form.

        Raises:
            ValidationError: If a required field is blank, the category is
                unknown or a KSB is selected twice
        """
        if not form.title.strip() or not form.category.strip():
            raise ValidationError(required_fields_missing())
        if not self.reference.has_category(form.category):
            raise ValidationError(unknown_category(form.category))

        seen: set[str] = set()
        for ksb in form.ksbs:
            if ksb.id in seen:
                raise ValidationError(duplicate_ksb(ksb.id))
            seen.add(ksb.id)

    def materialize(
        self,
        form: EntryForm,
        selected_dates: Optional[Iterable[date]] = None,
        editing: bool = False,
    ) -> list[EntryPayload]:
        """Build payloads for a submission.

        Without ``selected_dates`` one payload is built for ``form.date``.
        With them, one payload is built per distinct date in ascending order.

        Args:
            form: Submitted form state
            selected_dates: Dates for a multi-date submission, or None
            editing: True when the form edits an existing entry

        Returns:
            List of payloads ready for the store

        Raises:
            ValidationError: If the form is invalid, the date selection is
                empty, or multiple dates are used while editing
        """
        self.validate(form)

        if selected_dates is None:
            return [self.build_payload(form, form.date)]

        if editing:
            raise ValidationError(multi_date_edit())

        if not isinstance(selected_dates, DateSelection):
            selected_dates = DateSelection(selected_dates)
        if len(selected_dates) == 0:
            raise ValidationError(no_dates_selected())

        return [self.build_payload(form, day) for day in selected_dates]

    def build_payload(self, form: EntryForm, entry_date: date) -> EntryPayload:
        """Build one payload for ``entry_date`` from validated form state."""
        start_time = _as_time(form.start_time)
        end_time = _as_time(form.end_time)
        return EntryPayload(
            title=form.title.strip(),
            category=form.category,
            description=form.description.strip() or DEFAULT_DESCRIPTION,
            date=entry_date,
            start_time=start_time,
            end_time=end_time,
            total_hours=calculate_duration(start_time, end_time),
            is_off_the_job=form.is_off_the_job,
            ksbs=tuple(form.ksbs),
            documents=tuple(form.documents),
        )


def _as_time(value: Optional[str | time]) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    if not value.strip():
        return None
    return parse_time(value)
