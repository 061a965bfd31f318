"""User management commands."""

import click
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.domain.entities import UserRole
from expensetrack.domain.errors import DomainError
from expensetrack.domain.user import UserService

ROLE_CHOICE = click.Choice([r.value for r in UserRole], case_sensitive=False)


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email")
@click.argument("name")
@click.option("--role", type=ROLE_CHOICE, default=UserRole.EMPLOYEE.value, show_default=True, help="User role")
@click.option("--manager", "manager_id", help="ID of the user's manager")
@click.pass_context
def create_user(ctx, email: str, name: str, role: str, manager_id: str | None) -> None:
    """Create a new user.

    Examples:
        expensetrack user create jane@example.com "Jane Doe"
        expensetrack user create boss@example.com "The Boss" --role MANAGER
    """
    service = UserService(ctx.obj["db"])

    try:
        user = service.create_user(
            email=email, name=name, role=UserRole(role.upper()), manager_id=manager_id
        )
        click.echo(f"Created user '{user.name}' <{user.email}> (ID: {user.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx) -> None:
    """List all users."""
    service = UserService(ctx.obj["db"])
    users = service.list_users()

    if not users:
        click.echo("No users found. Run 'expensetrack user init' to add the default employee.")
        return

    click.echo(f"\n{'ID':<36} {'Role':<10} {'Email':<30} {'Name':<24}")
    click.echo("-" * 100)
    for user in users:
        click.echo(f"{user.id:<36} {user.role.value:<10} {user.email[:30]:<30} {user.name[:24]:<24}")


@user_group.command("show")
@click.argument("user_id")
@click.pass_context
def show_user(ctx, user_id: str) -> None:
    """Show a user."""
    service = UserService(ctx.obj["db"])

    try:
        user = service.get_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nUser {user.id}")
    click.echo(f"  Name: {user.name}")
    click.echo(f"  Email: {user.email}")
    click.echo(f"  Role: {user.role.value}")
    if user.manager_id:
        click.echo(f"  Manager: {user.manager_id}")
    click.echo(f"  Created: {user.created_at:%Y-%m-%d %H:%M:%S}")


@user_group.command("init")
@click.pass_context
def init_user(ctx) -> None:
    """Add the default employee that commands act as when --user is not given."""
    service = UserService(ctx.obj["db"])
    user, created = service.ensure_placeholder_user()

    if created:
        click.echo(f"Created default user '{user.name}' <{user.email}> (ID: {user.id})")
    else:
        click.echo(f"Default user already exists (ID: {user.id})")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
