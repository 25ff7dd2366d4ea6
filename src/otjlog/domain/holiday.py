"""Holiday settings domain service."""

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from otjlog.database.base import Repository
from otjlog.domain.entities import DEFAULT_HOLIDAY_ALLOWANCE, HolidayRecord
from otjlog.domain.errors import (
    DomainError,
    OperationError,
    TransportError,
    holiday_not_loaded,
)
from otjlog.utils.number_parser import parse_int

logger = logging.getLogger(__name__)

ModeListener = Callable[[bool], None]


class HolidayService:
    """Service for holiday mode and the day-off allowance.

    Holds the apprentice's record in memory. A mutation only replaces the
    in-memory record once the store has accepted the full updated record.
    """

    def __init__(
        self,
        repository: Repository,
        apprentice_id: int = 1,
        default_allowance: int = DEFAULT_HOLIDAY_ALLOWANCE,
        on_mode_change: Optional[ModeListener] = None,
    ):
        """Initialize holiday service.

        Args:
            repository: Store holding holiday records
            apprentice_id: Apprentice whose record is managed
            default_allowance: Allowance for a newly created record
            on_mode_change: Called with the new value after holiday mode changes
        """
        self.repository = repository
        self.apprentice_id = apprentice_id
        self.default_allowance = default_allowance
        self.on_mode_change = on_mode_change
        self.record: Optional[HolidayRecord] = None
        self.last_error: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.record is not None and self.record.holiday_mode_enabled

    def load(self) -> HolidayRecord:
        """Fetch the apprentice's record, creating a default one if missing.

        Raises:
            OperationError: If the store cannot be read or written
        """
        try:
            for record in self.repository.list_holidays():
                if record.apprentice_id == self.apprentice_id:
                    self.record = record
                    break
            else:
                self.record = self.repository.create_holiday(
                    HolidayRecord(
                        id=None,
                        apprentice_id=self.apprentice_id,
                        holiday_mode_enabled=False,
                        days_used=0,
                        allowance=self.default_allowance,
                    )
                )
                logger.info("Created holiday record for apprentice %s", self.apprentice_id)
        except TransportError as e:
            self._fail("Failed to load holiday settings", e)

        self.last_error = None
        return self.record

    def set_enabled(self, enabled: bool) -> HolidayRecord:
        """Turn holiday mode on or off and notify the mode listener."""
        record = self._require_record()
        updated = self._save(
            replace(record, holiday_mode_enabled=bool(enabled)),
            "Failed to update holiday mode",
        )
        if self.on_mode_change is not None:
            self.on_mode_change(updated.holiday_mode_enabled)
        return updated

    def toggle(self) -> HolidayRecord:
        return self.set_enabled(not self._require_record().holiday_mode_enabled)

    def set_days_used(self, days: Any) -> HolidayRecord:
        """Set days used, clamped to [0, allowance].

        Unreadable input counts as 0.
        """
        record = self._require_record()
        days_used = max(0, min(record.allowance, parse_int(days, 0)))
        return self._save(replace(record, days_used=days_used), "Failed to update holiday days")

    def set_allowance(self, allowance: Any) -> HolidayRecord:
        """Set the allowance, clamped to at least 1.

        Days used are lowered to the new allowance in the same update.
        Unreadable input falls back to the default allowance.
        """
        record = self._require_record()
        new_allowance = max(1, parse_int(allowance, self.default_allowance))
        days_used = min(record.days_used, new_allowance)
        return self._save(
            replace(record, allowance=new_allowance, days_used=days_used),
            "Failed to update holiday allowance",
        )

    def _require_record(self) -> HolidayRecord:
        if self.record is None:
            raise DomainError(holiday_not_loaded())
        return self.record

    def _save(self, record: HolidayRecord, failure_message: str) -> HolidayRecord:
        try:
            updated = self.repository.update_holiday(record.id, record)
        except TransportError as e:
            self._fail(failure_message, e)
        self.record = updated
        self.last_error = None
        return updated

    def _fail(self, message: str, error: TransportError) -> None:
        logger.warning("%s: %s", message, error)
        self.last_error = message
        raise OperationError(message) from error
