"""Holiday mode commands."""

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.cli.rendering import print_holiday
from otjlog.cli.services import build_holiday_service
from otjlog.domain.errors import DomainError
from otjlog.domain.holiday import HolidayService


def load_holiday_or_exit(ctx: click.Context) -> HolidayService:
    service = build_holiday_service(ctx)
    try:
        service.load()
    except DomainError as e:
        handle_domain_error(ctx, e)
    return service


@click.group(invoke_without_command=True)
@click.pass_context
def holiday_group(ctx):
    """Manage holiday mode and the holiday allowance.

    Without a subcommand, shows the current settings.
    """
    if ctx.invoked_subcommand is None:
        print_holiday(load_holiday_or_exit(ctx).record)


@holiday_group.command("show")
@click.pass_context
def show_holiday(ctx):
    """Show holiday settings."""
    print_holiday(load_holiday_or_exit(ctx).record)


@holiday_group.command("on")
@click.pass_context
def enable_holiday(ctx):
    """Turn holiday mode on (pauses the weekly OTJ target)."""
    service = load_holiday_or_exit(ctx)
    try:
        service.set_enabled(True)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_holiday(service.record)


@holiday_group.command("off")
@click.pass_context
def disable_holiday(ctx):
    """Turn holiday mode off."""
    service = load_holiday_or_exit(ctx)
    try:
        service.set_enabled(False)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_holiday(service.record)


@holiday_group.command("days")
@click.argument("days")
@click.pass_context
def set_days(ctx, days: str):
    """Set the number of holiday days used.

    Values outside 0..allowance are clamped. Use '--' before negative
    numbers, e.g. 'otjlog holiday days -- -1'.
    """
    service = load_holiday_or_exit(ctx)
    try:
        service.set_days_used(days)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_holiday(service.record)


@holiday_group.command("allowance")
@click.argument("allowance")
@click.pass_context
def set_allowance(ctx, allowance: str):
    """Set the yearly holiday allowance in days (at least 1)."""
    service = load_holiday_or_exit(ctx)
    try:
        service.set_allowance(allowance)
    except DomainError as e:
        handle_domain_error(ctx, e)
    print_holiday(service.record)


def register_commands(cli):
    """Register holiday commands with main CLI."""
    cli.add_command(holiday_group, name="holiday")
