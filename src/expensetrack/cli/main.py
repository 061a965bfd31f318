"""Main CLI entry point."""

import click
from expensetrack.cli.identity import DEFAULT_USER_ID, USER_ID_ENV_VAR
from expensetrack.database.factories import (
    DATABASE_URL_ENV_VAR,
    DB_PATH_ENV_VAR,
    create_database,
)
from expensetrack.logging_config import configure_logging

# Import and register all commands at module level
from expensetrack.cli.commands import (
    report,
    expense,
    attachment,
    health,
    user,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides EXPENSETRACK_DB_PATH environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (takes precedence over --db-path)",
    envvar=DATABASE_URL_ENV_VAR,
)
@click.option(
    "--user",
    "user_id",
    default=DEFAULT_USER_ID,
    show_default=True,
    help="User ID to act as",
    envvar=USER_ID_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
    envvar="EXPENSETRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, user_id: str, log_level: str):
    """Expensetrack - Expense report application.

    Create expense reports, add expenses to them, and move each report
    through the approval workflow.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)
    ctx.obj["user_id"] = user_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
report.register_commands(cli)
expense.register_commands(cli)
attachment.register_commands(cli)
health.register_commands(cli)
user.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
