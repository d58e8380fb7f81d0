"""CLI helpers that assemble a ledger from settings, aliases and the vault."""

from __future__ import annotations

import click

from ledgernotes.domain.errors import DomainError
from ledgernotes.domain.ledger import Ledger
from ledgernotes.domain.refresh import RefreshService
from ledgernotes.domain.settings import SettingsService
from ledgernotes.domain.vault import Vault
from ledgernotes.cli.error_handling import handle_domain_error
from ledgernotes.parsing import LineParser, ShorthandParser


def get_parser(ctx: click.Context) -> LineParser:
    """Return the line parser for this invocation.

    Tests may supply their own through ``obj={"parser": ...}``.
    """
    return ctx.obj.get("parser") or ShorthandParser()


def build_ledger_or_exit(ctx: click.Context) -> tuple[Ledger, RefreshService, SettingsService]:
    """Create an empty ledger and a refresh service, or exit with a CLI error."""
    settings_service = SettingsService(ctx.obj["db"])
    try:
        config = settings_service.build_config()
        vault = Vault(ctx.obj["vault_path"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    return Ledger(config, get_parser(ctx)), RefreshService(vault), settings_service
