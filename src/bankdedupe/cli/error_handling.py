"""CLI error handling helpers."""

import click

from bankdedupe.domain.errors import DomainError, StoreUnavailableError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_store_error(ctx: click.Context, error: StoreUnavailableError) -> None:
    """Render a store failure and exit; nothing was committed."""
    click.echo(f"Error: store unavailable: {error}", err=True)
    ctx.exit(2)
