"""Progress dashboard command."""

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.cli.rendering import print_progress
from otjlog.cli.services import build_holiday_service, get_settings, load_journal_or_exit
from otjlog.domain.errors import DomainError


@click.command("progress")
@click.pass_context
def show_progress(ctx):
    """Show OTJ hours against the weekly and annual targets."""
    settings = get_settings(ctx)
    journal = load_journal_or_exit(ctx)
    holiday = build_holiday_service(ctx, journal)

    try:
        record = holiday.load()
    except DomainError as e:
        handle_domain_error(ctx, e)
    journal.set_holiday_mode(record.holiday_mode_enabled)

    print_progress(
        journal.progress,
        weekly_target=settings.weekly_target_hours,
        annual_target=settings.annual_target_hours,
        entry_count=len(journal.entries),
    )


def register_commands(cli):
    """Register progress command with main CLI."""
    cli.add_command(show_progress)
