"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgernotes.cli.error_handling import fail
from ledgernotes.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(command):
    """Add --this-month, --last-year, ... flags to a command."""
    for period in reversed(PERIODS):
        which, unit = period.split("-")
        command = click.option(
            f"--{period}",
            is_flag=True,
            help=f"Limit to the {'current' if which == 'this' else 'previous'} {unit}",
        )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        flags = ", ".join(f"--{p}" for p in PERIODS)
        fail(ctx, f"Only one period option ({flags}) can be specified at a time.")

    if selected and (start_date or end_date):
        fail(
            ctx,
            "Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
        )

    if selected:
        return get_date_range(selected[0])

    start = None
    end = None
    for label, value in (("start", start_date), ("end", end_date)):
        if not value:
            continue
        try:
            parsed = parse_date(value)
        except ValueError as e:
            fail(ctx, f"Invalid {label} date: {e}")
        if label == "start":
            start = parsed
        else:
            end = parsed

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
