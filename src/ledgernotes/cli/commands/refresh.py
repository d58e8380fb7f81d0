"""Ledger refresh commands."""

import asyncio

import click
from ledgernotes.cli.ledger_setup import build_ledger_or_exit
from ledgernotes.domain.ledger import Ledger
from ledgernotes.domain.refresh import RefreshReport


def echo_report(report: RefreshReport) -> None:
    """Print a one-line refresh summary."""
    click.echo(
        f"Scanned {report.files} file{'s' if report.files != 1 else ''}: "
        f"{report.lines} ledger line{'s' if report.lines != 1 else ''}, "
        f"{report.entries} entr{'ies' if report.entries != 1 else 'y'}"
    )


def echo_entries(ledger: Ledger, verbose: bool) -> None:
    """Print journal entries, one line each, with postings if verbose."""
    for entry in ledger.entries:
        payee = f"{entry.payee} | " if entry.payee else ""
        click.echo(f"{entry.date} | {payee}{entry.narration}")
        if verbose:
            for posting in entry.postings:
                click.echo(f"    {posting.account:40s} {posting.amount:>12}")


@click.command("refresh")
@click.option("--verbose", "-v", is_flag=True, help="Show the postings of each entry")
@click.pass_context
def refresh_ledger(ctx, verbose: bool):
    """Rebuild the journal from the vault and list its entries."""
    ledger, refresh_service, settings_service = build_ledger_or_exit(ctx)
    folder = settings_service.get_settings().ledger_folder

    report = asyncio.run(refresh_service.refresh(ledger, folder))
    echo_report(report)
    echo_entries(ledger, verbose)


@click.command("watch")
@click.option("--cycles", type=int, help="Stop after this many refreshes")
@click.pass_context
def watch_ledger(ctx, cycles: int | None):
    """Refresh the journal periodically.

    The interval comes from 'settings set --refresh-interval'. Stop with
    Ctrl+C.
    """
    ledger, refresh_service, settings_service = build_ledger_or_exit(ctx)
    settings = settings_service.get_settings()

    click.echo(f"Refreshing every {settings.refresh_interval}s. Press Ctrl+C to stop.")
    try:
        asyncio.run(
            refresh_service.watch(
                ledger,
                settings.ledger_folder,
                settings.refresh_interval,
                on_refresh=echo_report,
                cycles=cycles,
            )
        )
    except KeyboardInterrupt:
        click.echo("Stopped.")
    finally:
        ledger.reset()


def register_commands(cli):
    """Register refresh commands with main CLI."""
    cli.add_command(refresh_ledger)
    cli.add_command(watch_ledger)
