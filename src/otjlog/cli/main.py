"""Main CLI entry point."""

import logging

import click

from otjlog.cli.error_handling import handle_domain_error
from otjlog.config import load_settings
from otjlog.database.factories import create_repository
from otjlog.domain.errors import ValidationError

# Import and register all commands at module level
from otjlog.cli.commands import entry, progress, holiday, ksb


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides OTJLOG_DB_PATH environment variable)",
    envvar="OTJLOG_DB_PATH",
)
@click.option(
    "--api-url",
    help="Journal API base URL; when set, entries are stored through the API",
    envvar="OTJLOG_API_URL",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, api_url: str | None, verbose: bool):
    """otjlog - Off-the-job learning journal.

    Log learning activity, tag it with KSBs and track your OTJ hours
    against weekly and annual targets.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            settings = load_settings()
        except ValidationError as e:
            handle_domain_error(ctx, e)
        repository = create_repository(database_path=db_path, api_url=api_url)
        repository.connect()
        repository.initialize_schema()
        ctx.call_on_close(repository.disconnect)
        ctx.obj["repository"] = repository
        ctx.obj["settings"] = settings


# Register all commands
entry.register_commands(cli)
progress.register_commands(cli)
holiday.register_commands(cli)
ksb.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
