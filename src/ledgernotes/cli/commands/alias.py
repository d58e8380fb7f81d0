"""Account alias commands."""

import click
from ledgernotes.cli.error_handling import handle_domain_error
from ledgernotes.domain.aliases import DEFAULT_ALIASES, AliasService, format_alias_text
from ledgernotes.domain.errors import DomainError


@click.group()
def alias_group():
    """Manage account aliases.

    An alias is shorthand for an account path: with "x = Expenses",
    "x:Food" in a note is read as "Expenses:Food". Aliases are case
    sensitive.
    """
    pass


@alias_group.command("list")
@click.option("--text", "as_text", is_flag=True, help="Print as 'alias = Account' lines")
@click.pass_context
def list_aliases(ctx, as_text: bool):
    """List all account aliases."""
    service = AliasService(ctx.obj["db"])
    aliases = service.list_aliases()
    if not aliases:
        click.echo("No aliases found.")
        return

    if as_text:
        click.echo(format_alias_text(service.get_mapping()))
        return

    click.echo("\nAliases:")
    click.echo("-" * 60)
    for a in aliases:
        click.echo(f"{a.alias:10s} -> {a.account}")


@alias_group.command("add")
@click.argument("alias")
@click.argument("account")
@click.pass_context
def add_alias(ctx, alias: str, account: str):
    """Add an alias.

    Examples:
        ledgernotes alias add x Expenses
        ledgernotes alias add food Expenses:Needs:Food
    """
    service = AliasService(ctx.obj["db"])
    try:
        service.create_alias(alias=alias, account=account)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added alias '{alias}' -> {account}")


@alias_group.command("update")
@click.argument("alias")
@click.argument("account")
@click.pass_context
def update_alias(ctx, alias: str, account: str):
    """Point an alias at a different account."""
    service = AliasService(ctx.obj["db"])
    try:
        service.update_alias(alias=alias, account=account)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Alias '{alias}' now points to {account}")


@alias_group.command("rename")
@click.argument("alias")
@click.argument("new_alias")
@click.pass_context
def rename_alias(ctx, alias: str, new_alias: str):
    """Rename an alias key."""
    service = AliasService(ctx.obj["db"])
    try:
        service.rename_alias(alias=alias, new_alias=new_alias)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed alias '{alias}' to '{new_alias}'")


@alias_group.command("remove")
@click.argument("alias")
@click.pass_context
def remove_alias(ctx, alias: str):
    """Remove an alias."""
    service = AliasService(ctx.obj["db"])
    try:
        service.delete_alias(alias)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed alias '{alias}'")


@alias_group.command("import")
@click.argument("alias_file", type=click.File("r", encoding="utf-8"))
@click.option("--replace", is_flag=True, help="Remove aliases that are not in the file")
@click.pass_context
def import_aliases(ctx, alias_file, replace: bool):
    """Import aliases from a file of 'alias = Account:Path' lines.

    Use '-' to read from standard input.
    """
    service = AliasService(ctx.obj["db"])
    try:
        changed = service.import_text(alias_file.read(), replace=replace)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Imported {changed} alias{'es' if changed != 1 else ''}.")


@alias_group.command("init")
@click.option("--force", is_flag=True, help="Replace existing aliases")
@click.pass_context
def init_aliases(ctx, force: bool):
    """Create the default aliases.

    Assets, Liabilities, Income and Expenses, plus Wants and Needs as
    two useful splits of Expenses.
    """
    service = AliasService(ctx.obj["db"])

    if service.list_aliases() and not force:
        click.echo("Aliases already exist. Use --force to overwrite.")
        return

    changed = service.import_text(format_alias_text(dict(DEFAULT_ALIASES)), replace=force)
    click.echo(f"Created {changed} default aliases.")


def register_commands(cli):
    """Register alias commands with main CLI."""
    cli.add_command(alias_group, name="alias")
