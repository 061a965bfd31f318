"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the services only ever see
immutable domain snapshots and never hold on to session-bound ORM rows.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from expensetrack.domain import entities as domain
from expensetrack.database.models import (
    ExpenseReport as ORMExpenseReport,
    Expense as ORMExpense,
    Attachment as ORMAttachment,
    User as ORMUser,
)

CENTS = Decimal("0.01")


def to_amount(value) -> Decimal:
    """Normalize a stored numeric value to a two-place Decimal."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps read back from stores that drop the offset."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        name=orm_user.name,
        role=domain.UserRole(orm_user.role),
        manager_id=orm_user.manager_id,
        created_at=as_utc(orm_user.created_at),
    )


def attachment_to_domain(orm_attachment: ORMAttachment) -> domain.Attachment:
    """Convert SQLAlchemy Attachment model to domain Attachment entity."""
    return domain.Attachment(
        id=orm_attachment.id,
        expense_id=orm_attachment.expense_id,
        file_name=orm_attachment.file_name,
        file_path=orm_attachment.file_path,
        mime_type=orm_attachment.mime_type,
        size=orm_attachment.size,
        created_at=as_utc(orm_attachment.created_at),
    )


def report_to_domain(
    orm_report: ORMExpenseReport, include_expenses: bool = True
) -> domain.ExpenseReport:
    """Convert SQLAlchemy ExpenseReport model to domain ExpenseReport entity.

    Args:
        orm_report: ORM row
        include_expenses: If False, the ``expenses`` tuple is left empty
    """
    expenses: tuple[domain.Expense, ...] = ()
    if include_expenses:
        expenses = tuple(expense_to_domain(e, include_report=False) for e in orm_report.expenses)
    return domain.ExpenseReport(
        id=orm_report.id,
        user_id=orm_report.user_id,
        purpose=orm_report.purpose,
        report_date=orm_report.report_date,
        total_amount=to_amount(orm_report.total_amount),
        status=domain.ExpenseStatus(orm_report.status),
        payment_date=as_utc(orm_report.payment_date),
        created_at=as_utc(orm_report.created_at),
        updated_at=as_utc(orm_report.updated_at),
        expenses=expenses,
    )


def expense_to_domain(orm_expense: ORMExpense, include_report: bool = True) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity.

    Args:
        orm_expense: ORM row
        include_report: If True, attach the parent report (without its children)
    """
    report = None
    if include_report and orm_expense.report is not None:
        report = report_to_domain(orm_expense.report, include_expenses=False)
    return domain.Expense(
        id=orm_expense.id,
        report_id=orm_expense.report_id,
        category=domain.ExpenseCategory(orm_expense.category),
        expense_name=orm_expense.expense_name,
        description=orm_expense.description,
        amount=to_amount(orm_expense.amount),
        expense_date=orm_expense.expense_date,
        status=domain.ExpenseStatus(orm_expense.status),
        created_at=as_utc(orm_expense.created_at),
        updated_at=as_utc(orm_expense.updated_at),
        attachments=tuple(attachment_to_domain(a) for a in orm_expense.attachments),
        report=report,
    )
