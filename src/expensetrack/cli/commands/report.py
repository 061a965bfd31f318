"""Expense report management commands."""

import click
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.identity import resolve_caller
from expensetrack.domain.entities import REPORT_SORT_FIELDS, ExpenseReport, ExpenseStatus
from expensetrack.domain.errors import DomainError, ValidationError
from expensetrack.domain.expense_report import DEFAULT_LIMIT, MAX_LIMIT, ExpenseReportService
from expensetrack.utils.date_parser import parse_date

STATUS_CHOICE = click.Choice([s.value for s in ExpenseStatus], case_sensitive=False)
MAX_PURPOSE_LENGTH = 500


def _check_purpose(purpose: str) -> str:
    if not purpose.strip():
        raise ValidationError("Purpose cannot be empty")
    if len(purpose) > MAX_PURPOSE_LENGTH:
        raise ValidationError(f"Purpose must be at most {MAX_PURPOSE_LENGTH} characters")
    return purpose


def print_report(report: ExpenseReport) -> None:
    """Print report details with its expenses."""
    click.echo(f"\nExpense report {report.id}")
    click.echo(f"  Purpose: {report.purpose}")
    click.echo(f"  Report date: {report.report_date}")
    click.echo(f"  Status: {report.status.value}")
    click.echo(f"  Total: {report.total_amount:,.2f}")
    if report.payment_date is not None:
        click.echo(f"  Paid: {report.payment_date:%Y-%m-%d %H:%M:%S}")

    if not report.expenses:
        click.echo("  No expenses.")
        return

    click.echo(f"\n  {len(report.expenses)} expense(s):")
    click.echo("  " + "-" * 96)
    click.echo(
        f"  {'ID':<36} {'Date':<12} {'Amount':>12} {'Category':<14} {'Status':<10} {'Name':<20}"
    )
    click.echo("  " + "-" * 96)
    for expense in report.expenses:
        click.echo(
            f"  {expense.id:<36} {str(expense.expense_date):<12} {expense.amount:>12,.2f} "
            f"{expense.category.value:<14} {expense.status.value:<10} {expense.expense_name[:20]:<20}"
        )


@click.group()
def report_group():
    """Manage expense reports."""
    pass


@report_group.command("create")
@click.argument("purpose")
@click.option("--date", "report_date", default="today", show_default=True, help="Report date (YYYY-MM-DD or 'today')")
@click.pass_context
def create_report(ctx, purpose: str, report_date: str) -> None:
    """Create a new expense report.

    Examples:
        expensetrack report create "Business trip" --date 2026-02-11
    """
    db = ctx.obj["db"]
    service = ExpenseReportService(db)

    try:
        report = service.create_report(
            user_id=resolve_caller(ctx),
            purpose=_check_purpose(purpose),
            report_date=parse_date(report_date),
        )
        click.echo(f"Created expense report '{report.purpose}' (ID: {report.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@report_group.command("list")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True, help="Page number")
@click.option("--limit", type=click.IntRange(1, MAX_LIMIT), default=DEFAULT_LIMIT, show_default=True, help="Reports per page")
@click.option("--status", type=STATUS_CHOICE, help="Only show reports in this status")
@click.option("--sort-by", type=click.Choice(REPORT_SORT_FIELDS), default="report_date", show_default=True, help="Field to sort by")
@click.option("--order", type=click.Choice(["ASC", "DESC"], case_sensitive=False), default="DESC", show_default=True, help="Sort order")
@click.pass_context
def list_reports(ctx, page: int, limit: int, status: str | None, sort_by: str, order: str) -> None:
    """List your expense reports."""
    db = ctx.obj["db"]
    service = ExpenseReportService(db)

    try:
        result = service.list_reports(
            user_id=resolve_caller(ctx),
            page=page,
            limit=limit,
            status=ExpenseStatus(status.upper()) if status else None,
            sort_by=sort_by,
            order=order,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not result.data:
        click.echo("No expense reports found.")
        return

    click.echo(f"\nExpense reports (page {result.page}, {len(result.data)} of {result.total}):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<36} {'Date':<12} {'Status':<10} {'Total':>12} {'Expenses':>8}  {'Purpose':<28}")
    click.echo("-" * 110)
    for report in result.data:
        click.echo(
            f"{report.id:<36} {str(report.report_date):<12} {report.status.value:<10} "
            f"{report.total_amount:>12,.2f} {len(report.expenses):>8}  {report.purpose[:28]:<28}"
        )


@report_group.command("show")
@click.argument("report_id")
@click.pass_context
def show_report(ctx, report_id: str) -> None:
    """Show a report with its expenses."""
    db = ctx.obj["db"]
    service = ExpenseReportService(db)

    try:
        report = service.get_report(report_id, resolve_caller(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    print_report(report)


@report_group.command("update")
@click.argument("report_id")
@click.option("--purpose", help="New purpose")
@click.option("--date", "report_date", help="New report date (YYYY-MM-DD)")
@click.pass_context
def update_report(ctx, report_id: str, purpose: str | None, report_date: str | None) -> None:
    """Update a report's purpose or date.

    Only reports in CREATED or SUBMITTED can be edited.
    """
    db = ctx.obj["db"]
    service = ExpenseReportService(db)

    if purpose is None and report_date is None:
        click.echo("Nothing to update. Use --purpose and/or --date.", err=True)
        ctx.exit(1)

    try:
        report = service.update_report(
            report_id,
            resolve_caller(ctx),
            purpose=_check_purpose(purpose) if purpose is not None else None,
            report_date=parse_date(report_date) if report_date is not None else None,
        )
        click.echo(f"Updated expense report {report.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@report_group.command("status")
@click.argument("report_id")
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def update_report_status(ctx, report_id: str, status: str) -> None:
    """Move a report to a new status.

    Workflow: CREATED -> SUBMITTED -> VALIDATED or REJECTED, VALIDATED -> PAID.

    Examples:
        expensetrack report status <REPORT_ID> SUBMITTED
    """
    db = ctx.obj["db"]
    service = ExpenseReportService(db)

    try:
        report = service.update_status(report_id, resolve_caller(ctx), ExpenseStatus(status.upper()))
        click.echo(f"Expense report {report.id} is now {report.status.value}")
        if report.payment_date is not None and report.status == ExpenseStatus.PAID:
            click.echo(f"Payment date set to {report.payment_date:%Y-%m-%d %H:%M:%S}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@report_group.command("delete")
@click.argument("report_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_report(ctx, report_id: str, yes: bool) -> None:
    """Delete a report and all of its expenses."""
    db = ctx.obj["db"]
    service = ExpenseReportService(db)
    user_id = resolve_caller(ctx)

    try:
        report = service.get_report(report_id, user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not yes and not click.confirm(
        f"Delete expense report '{report.purpose}' and its {len(report.expenses)} expense(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_report(report_id, user_id)
        click.echo(f"Deleted expense report '{report.purpose}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
