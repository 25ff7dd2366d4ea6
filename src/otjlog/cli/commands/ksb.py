"""KSB reference commands."""

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.domain.entities import KSBType
from otjlog.domain.errors import DomainError
from otjlog.domain.ksb import KSBService
from otjlog.domain.reference import ALL_TYPES, filter_ksbs


@click.group()
def ksb_group():
    """Browse Knowledge, Skills & Behaviours."""
    pass


@ksb_group.command("list")
@click.option(
    "--type",
    "ksb_type",
    type=click.Choice([ALL_TYPES] + [t.value for t in KSBType], case_sensitive=False),
    default=ALL_TYPES,
    help="Only show one kind of KSB",
)
@click.option("--search", default="", help="Search ids and descriptions")
@click.pass_context
def list_ksbs(ctx, ksb_type: str, search: str):
    """List KSBs, optionally filtered."""
    service = KSBService(ctx.obj["repository"])
    try:
        ksbs = service.list_ksbs()
    except DomainError as e:
        handle_domain_error(ctx, e)

    # click.Choice returns the original casing of the choice
    matches = filter_ksbs(ksbs, search=search, ksb_type=ksb_type)
    if not matches:
        click.echo("No KSBs found")
        return

    for ksb in matches:
        click.echo(f"{ksb.id:<4} {ksb.type.value:<10} {ksb.description}")


@ksb_group.command("init")
@click.pass_context
def init_ksbs(ctx):
    """Store the default KSB table."""
    service = KSBService(ctx.obj["repository"])
    try:
        added = service.seed_defaults()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added {added} KSB{'s' if added != 1 else ''}")


def register_commands(cli):
    """Register KSB commands with main CLI."""
    cli.add_command(ksb_group, name="ksb")
