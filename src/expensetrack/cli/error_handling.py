"""CLI error handling helpers."""

import click

from expensetrack.domain.errors import DomainError


def format_domain_error(error: DomainError | ValueError) -> str:
    """Render an error as ``Error [<category>]: <message>``."""
    category = getattr(error, "category", "error")
    return f"Error [{category}]: {error}"


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(format_domain_error(error), err=True)
    ctx.exit(1)
