"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    Raised before any call reaches a store.
    """


class TransportError(DomainError):
    """A store could not be reached or answered with a failure status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """Requested record does not exist in the store."""


class OperationError(DomainError):
    """Recoverable failure of a journal or holiday operation.

    The message is meant to be shown to the user, who may retry.
    """


def required_fields_missing() -> str:
    """Return message for an incomplete entry form."""
    return "Please fill in all required fields"


def unknown_category(category: str) -> str:
    """Return message for a category missing from the category table."""
    return f"Unknown category '{category}'"


def duplicate_ksb(ksb_id: str) -> str:
    """Return message for a KSB selected more than once."""
    return f"KSB '{ksb_id}' is selected more than once"


def no_dates_selected() -> str:
    """Return message for an empty multi-date selection."""
    return "Select at least one date"


def multi_date_edit() -> str:
    """Return message for multi-date submission while editing."""
    return "Multiple dates cannot be used when editing an entry"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Entry {entry_id} not found"


def holiday_not_found(holiday_id: int) -> str:
    """Return message for missing holiday record."""
    return f"Holiday record {holiday_id} not found"


def holiday_not_loaded() -> str:
    """Return message when holiday settings are used before loading."""
    return "Holiday settings have not been loaded"


def invalid_time(value: str) -> str:
    """Return message for a time of day that is not HH:MM."""
    return f"Invalid time '{value}': expected HH:MM"
