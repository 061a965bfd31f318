"""Expense domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal
from expensetrack.database.base import Database
from expensetrack.domain.entities import (
    Expense as ExpenseEntity,
    ExpenseCategory,
    ExpenseStatus,
)
from expensetrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    expense_not_found,
    expense_not_modifiable,
    report_closed_for_expenses,
)
from expensetrack.domain.expense_report import ExpenseReportService
from expensetrack.domain.status import is_modifiable, validate_status_transition

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for managing expenses nested under expense reports.

    Every mutation that can change amounts is followed by a recalculation
    of the parent report's total through ``report_service``.
    """

    def __init__(self, db: Database, report_service: ExpenseReportService):
        """Initialize expense service.

        Args:
            db: Database instance
            report_service: Service owning the parent reports
        """
        self.db = db
        self.report_service = report_service

    def create_expense(
        self,
        report_id: str,
        user_id: str,
        category: ExpenseCategory,
        expense_name: str,
        amount: Decimal,
        expense_date: date,
        description: Optional[str] = None,
    ) -> ExpenseEntity:
        """Add an expense to a report.

        Args:
            report_id: Parent report ID
            user_id: Caller, who must own the report
            category: Expense category
            expense_name: Short name
            amount: Non-negative amount
            expense_date: Date the expense was incurred
            description: Optional free text

        Returns:
            Created expense entity

        Raises:
            NotFoundError: If the report is not found
            ConflictError: If the report no longer accepts expenses
        """
        report = self.report_service.get_report(report_id, user_id)

        if not is_modifiable(report.status):
            logger.warning("Refused new expense on report %s in status %s", report_id, report.status.value)
            raise ConflictError(report_closed_for_expenses(report_id, report.status.value))

        expense_id = self.db.create_expense(
            report_id=report_id,
            category=category,
            expense_name=expense_name,
            amount=amount,
            expense_date=expense_date,
            description=description,
            status=ExpenseStatus.CREATED,
        )
        logger.info("Created expense %s on report %s", expense_id, report_id)

        self.report_service.recalculate_total_amount(report_id)

        return self.get_expense(expense_id, user_id)

    def list_expenses(self, report_id: str, user_id: str) -> list[ExpenseEntity]:
        """List a report's expenses, newest expense date first.

        Raises:
            NotFoundError: If the report is not found
        """
        self.report_service.get_report(report_id, user_id)
        return self.db.list_expenses(report_id)

    def get_expense(self, expense_id: str, user_id: str) -> ExpenseEntity:
        """Get an expense with its report and attachments.

        Raises:
            NotFoundError: If the expense does not exist or its report belongs
                to another user
        """
        expense = self.db.get_expense(expense_id)
        if expense is None or expense.report is None or expense.report.user_id != user_id:
            raise NotFoundError(expense_not_found(expense_id))
        return expense

    def _ensure_modifiable(self, expense: ExpenseEntity, action: str) -> None:
        report_status = expense.report.status
        if not (is_modifiable(expense.status) and is_modifiable(report_status)):
            logger.warning(
                "Refused %s of expense %s (status %s, report status %s)",
                action,
                expense.id,
                expense.status.value,
                report_status.value,
            )
            raise ConflictError(
                expense_not_modifiable(
                    expense.id, expense.status.value, report_status.value, action=action
                )
            )

    def update_expense(
        self,
        expense_id: str,
        user_id: str,
        category: Optional[ExpenseCategory] = None,
        expense_name: Optional[str] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        expense_date: Optional[date] = None,
        clear_description: bool = False,
    ) -> ExpenseEntity:
        """Update expense fields. Only provided fields are changed.

        The report total is recalculated only when ``amount`` is provided.

        Args:
            clear_description: If True, remove the description (``description``
                must be None)

        Raises:
            NotFoundError: If the expense is not found
            ConflictError: If the expense or its report no longer allows edits
            ValidationError: If both ``description`` and ``clear_description`` are given
        """
        if clear_description and description is not None:
            raise ValidationError("Cannot set both description and clear_description")

        expense = self.get_expense(expense_id, user_id)
        self._ensure_modifiable(expense, "modify")

        self.db.update_expense(
            expense_id,
            category=category,
            expense_name=expense_name,
            description=description,
            amount=amount,
            expense_date=expense_date,
            update_description=clear_description,
        )
        logger.info("Updated expense %s", expense_id)

        if amount is not None:
            self.report_service.recalculate_total_amount(expense.report_id)

        return self.get_expense(expense_id, user_id)

    def update_status(self, expense_id: str, user_id: str, status: ExpenseStatus) -> ExpenseEntity:
        """Move an expense to a new workflow status.

        Only the transition itself is checked; the parent report's status
        does not gate it.

        Raises:
            NotFoundError: If the expense is not found
            ConflictError: If the transition is not allowed
        """
        expense = self.get_expense(expense_id, user_id)

        validate_status_transition(expense.status, status)

        self.db.update_expense(expense_id, status=status)
        logger.info("Expense %s moved from %s to %s", expense_id, expense.status.value, status.value)
        return self.get_expense(expense_id, user_id)

    def delete_expense(self, expense_id: str, user_id: str) -> None:
        """Delete an expense and its attachments, then refresh the report total.

        Raises:
            NotFoundError: If the expense is not found
            ConflictError: If the expense or its report no longer allows deletion
        """
        expense = self.get_expense(expense_id, user_id)
        self._ensure_modifiable(expense, "delete")

        report_id = expense.report_id
        self.db.delete_expense(expense_id)
        logger.info("Deleted expense %s from report %s", expense_id, report_id)

        self.report_service.recalculate_total_amount(report_id)
