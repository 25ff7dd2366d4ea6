"""Text rendering for entries, progress and holiday settings."""

from decimal import Decimal

import click

from otjlog.domain.documents import format_file_size
from otjlog.domain.entities import HolidayRecord, JournalEntry, ProgressSnapshot
from otjlog.utils.date_parser import format_time


def format_hours(hours: Decimal) -> str:
    return f"{hours:.1f}h"


def format_variance(snapshot: ProgressSnapshot) -> str:
    """Signed variance such as ``+1.5h``, or a dash while on holiday."""
    if snapshot.holiday_mode:
        return "—"
    sign = "+" if snapshot.variance >= 0 else ""
    return f"{sign}{snapshot.variance:.1f}h"


def format_time_range(entry: JournalEntry) -> str:
    if entry.start_time and entry.end_time:
        return f"{format_time(entry.start_time)} - {format_time(entry.end_time)}"
    return ""


def print_entry_table(entries: list[JournalEntry]) -> None:
    """Print entries as a compact table."""
    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Hours':<7} {'OTJ':<4} {'Category':<40} {'Title':<30}")
    click.echo("-" * 100)
    for entry in entries:
        otj = "yes" if entry.is_off_the_job else "no"
        click.echo(
            f"{entry.id:<6} {entry.date.strftime('%d %b %Y'):<12} "
            f"{format_hours(entry.total_hours):<7} {otj:<4} "
            f"{entry.category[:40]:<40} {entry.title[:30]:<30}"
        )


def print_entry(entry: JournalEntry) -> None:
    """Print every field of an entry."""
    click.echo(f"\nEntry ID: {entry.id}")
    click.echo(f"  Title: {entry.title}")
    click.echo(f"  Date: {entry.date.strftime('%d %b %Y')}")
    time_range = format_time_range(entry)
    if time_range:
        click.echo(f"  Time: {time_range}")
    click.echo(f"  Hours: {format_hours(entry.total_hours)}")
    click.echo(f"  Category: {entry.category}")
    click.echo(f"  Off-the-job: {'yes' if entry.is_off_the_job else 'no'}")
    if entry.description:
        click.echo(f"  Description: {entry.description}")
    if entry.ksbs:
        click.echo(f"  KSBs: {', '.join(ksb.id for ksb in entry.ksbs)}")
    for document in entry.documents:
        click.echo(f"  Document: {document.name} ({format_file_size(document.size)})")
    click.echo(
        f"  Created {entry.created_at.strftime('%d %b %Y')} at {entry.created_at.strftime('%H:%M')}"
    )


def print_progress(snapshot: ProgressSnapshot, weekly_target: Decimal, annual_target: Decimal, entry_count: int) -> None:
    """Print the OTJ progress dashboard."""
    click.echo("\nOTJ Progress")
    click.echo("-" * 50)
    click.echo(f"  Total OTJ hours:   {format_hours(snapshot.total_otj_hours)} of {annual_target:g}h target")
    click.echo(f"  This week:         {format_hours(snapshot.current_week_otj_hours)}")
    click.echo(f"  Weekly target:     {weekly_target:g}h")
    click.echo(f"  Variance:          {format_variance(snapshot)} ({snapshot.status.value})")
    click.echo(f"  Progress:          {snapshot.percentage_complete:.1f}%")
    click.echo(f"  Entries:           {entry_count} total, {snapshot.otj_entry_count} off-the-job")


def print_holiday(record: HolidayRecord) -> None:
    """Print holiday settings and allowance usage."""
    click.echo(f"\nHoliday mode: {'ON' if record.holiday_mode_enabled else 'OFF'}")
    click.echo("-" * 50)
    click.echo(f"  Days used:   {record.days_used} days")
    low = " (running low)" if record.is_running_low else ""
    click.echo(f"  Remaining:   {record.remaining_days} days{low}")
    click.echo(f"  Allowance:   {record.allowance} days/year")
    click.echo(f"  {record.percentage_used:.0f}% of allowance used")
    if record.holiday_mode_enabled:
        click.echo("  Weekly OTJ targets are paused while holiday mode is active")
