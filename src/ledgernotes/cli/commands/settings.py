"""Settings commands."""

import click
from ledgernotes.cli.error_handling import handle_domain_error
from ledgernotes.domain.errors import DomainError
from ledgernotes.domain.settings import (
    MAX_REFRESH_INTERVAL,
    MIN_REFRESH_INTERVAL,
    SettingsService,
)


@click.group()
def settings_group():
    """Show and change settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    service = SettingsService(ctx.obj["db"])
    settings = service.get_settings()

    click.echo(f"Ledger folder:    {settings.ledger_folder or '(whole vault)'}")
    click.echo(f"Refresh interval: {settings.refresh_interval}s")
    click.echo(f"Currency:         {settings.currency}")
    click.echo(f"Timezone:         {settings.timezone}")


@settings_group.command("set")
@click.option("--folder", help="Vault folder containing the ledgers ('' for the whole vault)")
@click.option(
    "--refresh-interval",
    type=int,
    help=f"Seconds between refreshes in watch mode ({MIN_REFRESH_INTERVAL}-{MAX_REFRESH_INTERVAL})",
)
@click.option("--currency", help="ISO 4217 currency code (PHP, USD, etc)")
@click.option("--timezone", help="IANA timezone (Asia/Manila, America/New_York, etc)")
@click.pass_context
def set_settings(
    ctx,
    folder: str | None,
    refresh_interval: int | None,
    currency: str | None,
    timezone: str | None,
):
    """Change one or more settings.

    Examples:
        ledgernotes settings set --folder Finance/
        ledgernotes settings set --currency USD --timezone America/New_York
    """
    if folder is None and refresh_interval is None and currency is None and timezone is None:
        click.echo("Nothing to change. See 'ledgernotes settings set --help'.")
        return

    service = SettingsService(ctx.obj["db"])
    try:
        service.update_settings(
            ledger_folder=folder,
            refresh_interval=refresh_interval,
            currency=currency,
            timezone=timezone,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Settings updated.")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
