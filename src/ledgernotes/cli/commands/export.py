"""Beancount export command."""

import asyncio

import click
from ledgernotes.cli.date_filters import period_options, resolve_cli_date_range
from ledgernotes.cli.error_handling import fail
from ledgernotes.cli.ledger_setup import build_ledger_or_exit
from ledgernotes.utils.date_parser import PERIODS, get_month_range


@click.command("export")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Append to this file instead of printing",
)
@click.pass_context
def export_ledger(ctx, start_date: str | None, end_date: str | None, output: str | None, **flags):
    """Refresh the journal and export entries as beancount.

    Both dates are inclusive. Without a start or end date the range is
    open on that side; without any date option the whole current month is
    exported.

    Examples:
        ledgernotes export --this-month
        ledgernotes export --start-date 2024-01-01 --end-date 2024-03-31 -o Finance/Q1.md
    """
    period_flags = {period: flags[period.replace("-", "_")] for period in PERIODS}
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_month_range(),
    )

    ledger, refresh_service, settings_service = build_ledger_or_exit(ctx)
    folder = settings_service.get_settings().ledger_folder
    asyncio.run(refresh_service.refresh(ledger, folder))

    entry_dates = [entry.date for entry in ledger.entries]
    if start is None:
        start = min(entry_dates, default=end)
    if end is None:
        end = max(entry_dates, default=start)
    if start is None or end is None:
        # Open range on an empty journal
        return

    if start > end:
        fail(ctx, f"Start date {start} is after end date {end}.")

    text = ledger.export(start, end)
    if output is None:
        click.echo(text, nl=False)
        return

    with open(output, "a", encoding="utf-8") as f:
        f.write(text)
    count = sum(1 for d in entry_dates if start <= d <= end)
    click.echo(f"Exported {count} entr{'ies' if count != 1 else 'y'} to {output}", err=True)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_ledger)
