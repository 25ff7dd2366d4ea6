"""Journal entry commands."""

from __future__ import annotations

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.cli.rendering import format_hours, print_entry, print_entry_table
from otjlog.cli.services import load_journal_or_exit, load_reference_or_exit
from otjlog.domain.documents import DocumentCatalog, document_from_path
from otjlog.domain.entities import EntryForm
from otjlog.domain.errors import DomainError
from otjlog.domain.materializer import DateSelection
from otjlog.domain.reference import ReferenceData
from otjlog.utils.date_parser import parse_date


def parse_date_or_exit(ctx: click.Context, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def resolve_ksbs_or_exit(ctx: click.Context, reference: ReferenceData, ksb_ids: tuple[str, ...]) -> list:
    """Look up KSB ids, keeping the first occurrence of each."""
    ksbs = []
    for ksb_id in ksb_ids:
        ksb = reference.get_ksb(ksb_id)
        if ksb is None:
            click.echo(f"Error: KSB '{ksb_id}' not found", err=True)
            ctx.exit(1)
        if ksb not in ksbs:
            ksbs.append(ksb)
    return ksbs


def collect_documents(paths: tuple[str, ...]) -> list:
    """Build document metadata for the given files, skipping unsupported types."""
    catalog = DocumentCatalog()
    documents = []
    for path in paths:
        document = document_from_path(path, catalog)
        if document is None:
            click.echo(f"Skipping {path}: unsupported file type", err=True)
            continue
        documents.append(document)
    return documents


@click.group()
def entry_group():
    """Manage journal entries."""
    pass


@entry_group.command("add")
@click.option("--title", required=True, help="Entry title")
@click.option("--category", required=True, help="Category name or number (see 'otjlog categories')")
@click.option("--date", "entry_date", default="today", help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--dates", "extra_dates", multiple=True, help="Log the entry on each of these dates instead of --date (repeatable)")
@click.option("--start", "start_time", default="09:00", help="Start time (HH:MM)")
@click.option("--end", "end_time", default="10:00", help="End time (HH:MM)")
@click.option("--description", default="", help="What you did and what you learned")
@click.option("--ksb", "ksb_ids", multiple=True, help="KSB id such as K1 (repeatable)")
@click.option("--document", "document_paths", multiple=True, type=click.Path(exists=True, dir_okay=False), help="Supporting document (repeatable)")
@click.option("--not-otj", is_flag=True, help="Do not count this entry towards OTJ hours")
@click.pass_context
def add_entry(
    ctx,
    title: str,
    category: str,
    entry_date: str,
    extra_dates: tuple[str, ...],
    start_time: str,
    end_time: str,
    description: str,
    ksb_ids: tuple[str, ...],
    document_paths: tuple[str, ...],
    not_otj: bool,
):
    """Add a journal entry.

    Examples:
        otjlog entry add --title "Weekly Tech Workshop" --category 5 --start 14:00 --end 17:00
        otjlog entry add --title "Study" --category "Research and self-study" --dates 2026-01-10 --dates 2026-01-12
    """
    journal = load_journal_or_exit(ctx)
    reference = journal.materializer.reference

    form = EntryForm(
        title=title,
        category=reference.resolve_category(category),
        description=description,
        date=parse_date_or_exit(ctx, entry_date),
        start_time=start_time,
        end_time=end_time,
        is_off_the_job=not not_otj,
        ksbs=resolve_ksbs_or_exit(ctx, reference, ksb_ids),
        documents=collect_documents(document_paths),
    )

    try:
        if extra_dates:
            selection = DateSelection(parse_date_or_exit(ctx, value) for value in extra_dates)
            created = journal.create_many(form, selection)
        else:
            created = [journal.create(form)]
    except DomainError as e:
        handle_domain_error(ctx, e)

    for item in created:
        click.echo(
            f"Created entry {item.id}: {item.title} on {item.date} ({format_hours(item.total_hours)})"
        )


@entry_group.command("list")
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each entry")
@click.pass_context
def list_entries(ctx, verbose: bool):
    """List journal entries, most recent first."""
    journal = load_journal_or_exit(ctx)

    if not journal.entries:
        click.echo("No entries yet. Add your first entry with 'otjlog entry add'.")
        return

    if verbose:
        for item in journal.entries:
            print_entry(item)
    else:
        print_entry_table(journal.entries)


@entry_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx, entry_id: int):
    """Show one journal entry."""
    journal = load_journal_or_exit(ctx)
    item = journal.get_entry(entry_id)
    if item is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)
    print_entry(item)


@entry_group.command("edit")
@click.argument("entry_id", type=int)
@click.option("--title", help="Entry title")
@click.option("--category", help="Category name or number")
@click.option("--date", "entry_date", help="Entry date")
@click.option("--start", "start_time", help="Start time (HH:MM), empty string to clear")
@click.option("--end", "end_time", help="End time (HH:MM), empty string to clear")
@click.option("--description", help="Description")
@click.option("--ksb", "ksb_ids", multiple=True, help="Replace KSBs with these ids (repeatable)")
@click.option("--otj/--not-otj", default=None, help="Whether the entry counts towards OTJ hours")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: int,
    title: str | None,
    category: str | None,
    entry_date: str | None,
    start_time: str | None,
    end_time: str | None,
    description: str | None,
    ksb_ids: tuple[str, ...],
    otj: bool | None,
):
    """Edit a journal entry.

    Fields that are not given keep their current values; the entry keeps
    its ID and creation time.

    Examples:
        otjlog entry edit 3 --end 12:15
        otjlog entry edit 3 --not-otj
    """
    journal = load_journal_or_exit(ctx)
    reference = journal.materializer.reference

    try:
        form = journal.begin_edit(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if title is not None:
        form.title = title
    if category is not None:
        form.category = reference.resolve_category(category)
    if entry_date is not None:
        form.date = parse_date_or_exit(ctx, entry_date)
    if start_time is not None:
        form.start_time = start_time or None
    if end_time is not None:
        form.end_time = end_time or None
    if description is not None:
        form.description = description
    if ksb_ids:
        form.ksbs = resolve_ksbs_or_exit(ctx, reference, ksb_ids)
    if otj is not None:
        form.is_off_the_job = otj

    try:
        updated = journal.update(entry_id, form)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated entry {updated.id}: {updated.title} ({format_hours(updated.total_hours)})")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool):
    """Delete a journal entry.

    Examples:
        otjlog entry delete 3
        otjlog entry delete 3 --yes
    """
    journal = load_journal_or_exit(ctx)
    item = journal.get_entry(entry_id)
    if item is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)

    def confirm() -> bool:
        return yes or click.confirm(f"Delete entry {entry_id} '{item.title}'?", default=False)

    try:
        deleted = journal.delete(entry_id, confirm)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if deleted:
        click.echo(f"Deleted entry {entry_id}")
    else:
        click.echo("Cancelled")


@click.command("categories")
@click.pass_context
def list_categories(ctx):
    """List learning activity categories."""
    reference = load_reference_or_exit(ctx)
    click.echo("\nCategories:")
    for number, (name, hint) in enumerate(reference.categories.items(), start=1):
        click.echo(f"  {number}. {name} - {hint}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
    cli.add_command(list_categories)
