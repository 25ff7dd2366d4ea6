"""Mapper functions to convert between domain models and stored forms.

The JSON helpers are shared by the SQLAlchemy store (JSON columns) and the
HTTP store (request and response bodies).
"""

from decimal import Decimal
from typing import Any

from otjlog.domain import entities as domain
from otjlog.database.models import (
    Entry as ORMEntry,
    Holiday as ORMHoliday,
    KSB as ORMKSB,
)


def ksb_to_json(ksb: domain.KSBTag) -> dict[str, Any]:
    return {"id": ksb.id, "type": ksb.type.value, "description": ksb.description}


def ksb_from_json(data: dict[str, Any]) -> domain.KSBTag:
    return domain.KSBTag(
        id=str(data["id"]),
        type=domain.KSBType(data["type"]),
        description=data.get("description", ""),
    )


def document_to_json(document: domain.Document) -> dict[str, Any]:
    return {
        "id": document.id,
        "name": document.name,
        "size": document.size,
        "type": document.type,
    }


def document_from_json(data: dict[str, Any]) -> domain.Document:
    return domain.Document(
        id=str(data["id"]),
        name=data["name"],
        size=int(data.get("size", 0)),
        type=data.get("type", ""),
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy Entry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        title=orm_entry.title,
        category=orm_entry.category,
        description=orm_entry.description,
        date=orm_entry.date,
        start_time=orm_entry.start_time,
        end_time=orm_entry.end_time,
        total_hours=Decimal(str(orm_entry.total_hours)),
        is_off_the_job=orm_entry.is_off_the_job,
        ksbs=tuple(ksb_from_json(item) for item in orm_entry.ksbs or []),
        documents=tuple(document_from_json(item) for item in orm_entry.documents or []),
        created_at=orm_entry.created_at,
    )


def apply_payload(orm_entry: ORMEntry, payload: domain.EntryPayload) -> ORMEntry:
    """Copy every editable field of ``payload`` onto ``orm_entry``."""
    orm_entry.title = payload.title
    orm_entry.category = payload.category
    orm_entry.description = payload.description
    orm_entry.date = payload.date
    orm_entry.start_time = payload.start_time
    orm_entry.end_time = payload.end_time
    orm_entry.total_hours = payload.total_hours
    orm_entry.is_off_the_job = payload.is_off_the_job
    orm_entry.ksbs = [ksb_to_json(ksb) for ksb in payload.ksbs]
    orm_entry.documents = [document_to_json(doc) for doc in payload.documents]
    return orm_entry


def holiday_to_domain(orm_holiday: ORMHoliday) -> domain.HolidayRecord:
    """Convert SQLAlchemy Holiday model to domain HolidayRecord entity."""
    return domain.HolidayRecord(
        id=orm_holiday.id,
        apprentice_id=orm_holiday.apprentice_id,
        holiday_mode_enabled=orm_holiday.holiday_mode,
        days_used=orm_holiday.days_used,
        allowance=orm_holiday.allowance,
    )


def ksb_to_domain(orm_ksb: ORMKSB) -> domain.KSBTag:
    """Convert SQLAlchemy KSB model to domain KSBTag entity."""
    return domain.KSBTag(
        id=orm_ksb.id,
        type=domain.KSBType(orm_ksb.type),
        description=orm_ksb.description,
    )
