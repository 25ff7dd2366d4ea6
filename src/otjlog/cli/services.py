"""CLI helpers wiring the domain services to the active store."""

from __future__ import annotations

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.config import Settings
from otjlog.domain.errors import DomainError
from otjlog.domain.holiday import HolidayService
from otjlog.domain.journal import JournalService
from otjlog.domain.ksb import KSBService
from otjlog.domain.materializer import EntryMaterializer
from otjlog.domain.progress import ProgressAggregator
from otjlog.domain.reference import ReferenceData


def get_settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def load_reference_or_exit(ctx: click.Context) -> ReferenceData:
    """Load the category and KSB tables, or exit with a CLI error."""
    try:
        return KSBService(ctx.obj["repository"]).load_reference_data()
    except DomainError as e:
        handle_domain_error(ctx, e)


def build_holiday_service(ctx: click.Context, journal: JournalService | None = None) -> HolidayService:
    """Create a holiday service that keeps ``journal`` progress in sync."""
    settings = get_settings(ctx)
    return HolidayService(
        ctx.obj["repository"],
        apprentice_id=settings.apprentice_id,
        default_allowance=settings.default_holiday_allowance,
        on_mode_change=journal.set_holiday_mode if journal is not None else None,
    )


def load_journal_or_exit(ctx: click.Context) -> JournalService:
    """Create a journal service and load its entries.

    A failed load is reported and ends the command, since the journal
    would otherwise be shown as empty.
    """
    settings = get_settings(ctx)
    reference = load_reference_or_exit(ctx)
    journal = JournalService(
        ctx.obj["repository"],
        materializer=EntryMaterializer(reference),
        aggregator=ProgressAggregator(
            weekly_target=settings.weekly_target_hours,
            annual_target=settings.annual_target_hours,
            week_start=settings.week_start,
        ),
    )
    journal.load()
    if journal.last_error:
        click.echo(f"Error: {journal.last_error}", err=True)
        ctx.exit(1)
    return journal
