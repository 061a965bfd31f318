"""Database health check command."""

import click
from sqlalchemy.exc import SQLAlchemyError


@click.command("health")
@click.pass_context
def health(ctx) -> None:
    """Check that the database is reachable."""
    db = ctx.obj["db"]

    try:
        db.check_connection()
    except SQLAlchemyError as e:
        click.echo(f"Database: error ({e})", err=True)
        ctx.exit(1)

    click.echo("Database: ok")


def register_commands(cli):
    """Register health command with main CLI."""
    cli.add_command(health)
