"""Single line parsing command."""

import asyncio

import click
from ledgernotes.cli.error_handling import fail, handle_domain_error
from ledgernotes.cli.ledger_setup import get_parser
from ledgernotes.domain.aliases import apply_aliases
from ledgernotes.domain.errors import DomainError
from ledgernotes.domain.extractor import extract_candidate_lines
from ledgernotes.domain.settings import SettingsService
from ledgernotes.parsing.results import ErrorResult, GenericResult, TransactionResult


@click.command("parse", context_settings={"ignore_unknown_options": True})
@click.argument("words", metavar="LINE", nargs=-1, required=True)
@click.pass_context
def parse_line(ctx, words: tuple[str, ...]):
    """Show how a single ledger line is read.

    LINE may be a bare entry or a markdown list item. A leading "- " list
    marker is not taken for an option.

    Example:
        ledgernotes parse "- 2024-01-15 Lunch 150 a:Cash > n:Food"
    """
    try:
        config = SettingsService(ctx.obj["db"]).build_config()
    except DomainError as e:
        handle_domain_error(ctx, e)

    line = " ".join(words)
    candidates = extract_candidate_lines(line)
    original = candidates[0] if candidates else line.strip()
    text = apply_aliases(original, config.account)
    if not candidates:
        click.echo("Note: this is not a ledger list item and would be skipped in a vault.", err=True)
    if text != original:
        click.echo(f"Expanded: {text}")

    result = asyncio.run(get_parser(ctx).parse(text, config))
    if isinstance(result, TransactionResult):
        click.echo(result.output)
    elif isinstance(result, GenericResult):
        click.echo(result.output)
        click.echo("Note: not a transaction, it would not be added to the journal.", err=True)
    elif isinstance(result, ErrorResult):
        fail(ctx, result.message)


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_line)
