"""Turning failures into CLI exit codes."""

from typing import NoReturn

import click

from ledgernotes.domain.errors import DomainError


def fail(ctx: click.Context, message: str) -> NoReturn:
    """Print ``Error: message`` on stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError) -> NoReturn:
    """Report a domain error raised by a service call."""
    fail(ctx, str(error))
