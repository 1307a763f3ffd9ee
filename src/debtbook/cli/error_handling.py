"""CLI error handling helpers."""

import click

from debtbook.domain.errors import DomainError, StoreUnavailable


def handle_domain_error(ctx: click.Context, error: DomainError | StoreUnavailable | ValueError) -> None:
    """Render a domain or storage error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
