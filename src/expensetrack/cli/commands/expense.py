"""Expense management commands."""

import click
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.identity import resolve_caller
from expensetrack.database.base import Database
from expensetrack.domain.entities import Expense, ExpenseCategory, ExpenseStatus
from expensetrack.domain.errors import DomainError, ValidationError
from expensetrack.domain.expense import ExpenseService
from expensetrack.domain.expense_report import ExpenseReportService
from expensetrack.utils.amount_parser import parse_amount
from expensetrack.utils.date_parser import parse_date

CATEGORY_CHOICE = click.Choice([c.value for c in ExpenseCategory], case_sensitive=False)
STATUS_CHOICE = click.Choice([s.value for s in ExpenseStatus], case_sensitive=False)


def build_expense_service(db: Database) -> ExpenseService:
    """Create an ExpenseService wired to its report service."""
    return ExpenseService(db, ExpenseReportService(db))


def _check_name(expense_name: str) -> str:
    if not expense_name.strip():
        raise ValidationError("Expense name cannot be empty")
    if len(expense_name) > 255:
        raise ValidationError("Expense name must be at most 255 characters")
    return expense_name


def print_expense(expense: Expense) -> None:
    """Print expense details."""
    click.echo(f"\nExpense {expense.id}")
    click.echo(f"  Name: {expense.expense_name}")
    click.echo(f"  Category: {expense.category.value}")
    click.echo(f"  Amount: {expense.amount:,.2f}")
    click.echo(f"  Date: {expense.expense_date}")
    click.echo(f"  Status: {expense.status.value}")
    if expense.description:
        click.echo(f"  Description: {expense.description}")
    if expense.report is not None:
        click.echo(f"  Report: {expense.report.purpose} (ID: {expense.report_id}, {expense.report.status.value})")
    for attachment in expense.attachments:
        click.echo(f"  Attachment: {attachment.file_name} ({attachment.mime_type}, {attachment.size} bytes)")


@click.group()
def expense_group():
    """Manage expenses within a report."""
    pass


@expense_group.command("add")
@click.argument("report_id")
@click.option("--category", type=CATEGORY_CHOICE, required=True, help="Expense category")
@click.option("--name", "expense_name", required=True, help="Expense name")
@click.option("--amount", required=True, help="Amount (e.g., 125.50)")
@click.option("--date", "expense_date", default="today", show_default=True, help="Expense date (YYYY-MM-DD or 'today')")
@click.option("--description", help="Optional description")
@click.pass_context
def add_expense(
    ctx,
    report_id: str,
    category: str,
    expense_name: str,
    amount: str,
    expense_date: str,
    description: str | None,
) -> None:
    """Add an expense to a report.

    Examples:
        expensetrack expense add <REPORT_ID> --category TRAVEL --name "Train ticket" --amount 125.50 --date 2026-02-11
    """
    service = build_expense_service(ctx.obj["db"])

    try:
        expense = service.create_expense(
            report_id=report_id,
            user_id=resolve_caller(ctx),
            category=ExpenseCategory(category.upper()),
            expense_name=_check_name(expense_name),
            amount=parse_amount(amount),
            expense_date=parse_date(expense_date),
            description=description,
        )
        click.echo(f"Created expense '{expense.expense_name}' (ID: {expense.id})")
        click.echo(f"Report total is now {expense.report.total_amount:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.argument("report_id")
@click.pass_context
def list_expenses(ctx, report_id: str) -> None:
    """List the expenses of a report."""
    service = build_expense_service(ctx.obj["db"])

    try:
        expenses = service.list_expenses(report_id, resolve_caller(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<36} {'Date':<12} {'Amount':>12} {'Category':<14} {'Status':<10} {'Files':>5}  {'Name':<20}"
    )
    click.echo("-" * 110)
    for expense in expenses:
        click.echo(
            f"{expense.id:<36} {str(expense.expense_date):<12} {expense.amount:>12,.2f} "
            f"{expense.category.value:<14} {expense.status.value:<10} {len(expense.attachments):>5}  "
            f"{expense.expense_name[:20]:<20}"
        )


@expense_group.command("show")
@click.argument("expense_id")
@click.pass_context
def show_expense(ctx, expense_id: str) -> None:
    """Show an expense with its attachments."""
    service = build_expense_service(ctx.obj["db"])

    try:
        expense = service.get_expense(expense_id, resolve_caller(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    print_expense(expense)


@expense_group.command("update")
@click.argument("expense_id")
@click.option("--category", type=CATEGORY_CHOICE, help="Expense category")
@click.option("--name", "expense_name", help="Expense name")
@click.option("--amount", help="Amount (e.g., 125.50)")
@click.option("--date", "expense_date", help="Expense date (YYYY-MM-DD)")
@click.option("--description", help="Description (use \"\" to clear it)")
@click.pass_context
def update_expense(
    ctx,
    expense_id: str,
    category: str | None,
    expense_name: str | None,
    amount: str | None,
    expense_date: str | None,
    description: str | None,
) -> None:
    """Update an expense.

    Updates only the fields that are provided. The report total is
    recalculated when --amount is given. Use --description "" to clear
    the description.

    Examples:
        expensetrack expense update <EXPENSE_ID> --amount 200.00
        expensetrack expense update <EXPENSE_ID> --description "Return trip"
        expensetrack expense update <EXPENSE_ID> --description ""  # Clear description
    """
    service = build_expense_service(ctx.obj["db"])

    if all(v is None for v in (category, expense_name, amount, expense_date, description)):
        click.echo("Nothing to update.", err=True)
        ctx.exit(1)

    try:
        expense = service.update_expense(
            expense_id,
            resolve_caller(ctx),
            category=ExpenseCategory(category.upper()) if category is not None else None,
            expense_name=_check_name(expense_name) if expense_name is not None else None,
            description=description or None,
            amount=parse_amount(amount) if amount is not None else None,
            expense_date=parse_date(expense_date) if expense_date is not None else None,
            clear_description=description == "",
        )
        click.echo(f"Updated expense {expense.id}")
        if amount is not None:
            click.echo(f"Report total is now {expense.report.total_amount:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("status")
@click.argument("expense_id")
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def update_expense_status(ctx, expense_id: str, status: str) -> None:
    """Move an expense to a new status."""
    service = build_expense_service(ctx.obj["db"])

    try:
        expense = service.update_status(expense_id, resolve_caller(ctx), ExpenseStatus(status.upper()))
        click.echo(f"Expense {expense.id} is now {expense.status.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("delete")
@click.argument("expense_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: str, yes: bool) -> None:
    """Delete an expense and its attachments."""
    service = build_expense_service(ctx.obj["db"])
    user_id = resolve_caller(ctx)

    try:
        expense = service.get_expense(expense_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(f"Delete expense '{expense.expense_name}' ({expense.amount:,.2f})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_expense(expense_id, user_id)
        click.echo(f"Deleted expense '{expense.expense_name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
