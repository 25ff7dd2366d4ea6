"""KSB reference data domain service."""

import logging

from otjlog.database.base import Repository
from otjlog.domain.entities import KSBTag
from otjlog.domain.errors import OperationError, TransportError
from otjlog.domain.reference import DEFAULT_KSBS, ReferenceData

logger = logging.getLogger(__name__)


class KSBService:
    """Service for the KSB reference table."""

    def __init__(self, repository: Repository):
        """Initialize KSB service.

        Args:
            repository: Store holding KSB tags
        """
        self.repository = repository

    def list_ksbs(self) -> list[KSBTag]:
        """List stored KSBs, or the built-in table when none are stored."""
        ksbs = self.repository.list_ksbs()
        return ksbs or list(DEFAULT_KSBS)

    def load_reference_data(self) -> ReferenceData:
        """Build reference data from the stored KSB table."""
        return ReferenceData(ksbs=tuple(self.list_ksbs()))

    def seed_defaults(self) -> int:
        """Store every built-in KSB that is not stored yet.

        Returns:
            Number of KSBs added

        Raises:
            OperationError: If the store rejects a KSB
        """
        existing = {ksb.id for ksb in self.repository.list_ksbs()}
        added = 0
        for ksb in DEFAULT_KSBS:
            if ksb.id in existing:
                continue
            try:
                self.repository.create_ksb(ksb)
            except TransportError as e:
                logger.warning("Failed to add KSB %s: %s", ksb.id, e)
                raise OperationError(f"Failed to add KSB {ksb.id}") from e
            added += 1
        return added
