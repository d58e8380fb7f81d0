"""Main CLI entry point."""

import logging

import click
from ledgernotes.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgernotes.cli.commands import (
    alias,
    export,
    parse_line,
    refresh,
    settings,
)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send log records at ``level`` and above to stderr.

    Stdout stays reserved for command output such as exports.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERNOTES_DB_PATH environment variable)",
    envvar="LEDGERNOTES_DB_PATH",
)
@click.option(
    "--vault",
    type=click.Path(file_okay=False),
    help="Directory of markdown notes (overrides LEDGERNOTES_VAULT, defaults to the current directory)",
    envvar="LEDGERNOTES_VAULT",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Enable logging at this level",
)
@click.pass_context
def cli(ctx, db_path: str | None, vault: str | None, log_level: str | None):
    """ledgernotes - Beancount journal from ledger lines in markdown notes.

    List items such as "- 2024-01-15 Lunch 150 a:Cash > n:Food" are
    collected from the notes in a vault, parsed and exported as beancount.
    """
    ctx.ensure_object(dict)

    if log_level is not None:
        configure_logging(log_level)

    ctx.obj["vault_path"] = vault or "."

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
settings.register_commands(cli)
alias.register_commands(cli)
refresh.register_commands(cli)
export.register_commands(cli)
parse_line.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
