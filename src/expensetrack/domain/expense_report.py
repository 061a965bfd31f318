"""Expense report domain service."""

import logging
from typing import Callable, Optional
from datetime import date, datetime, UTC
from decimal import Decimal
from expensetrack.database.base import Database
from expensetrack.domain.entities import (
    REPORT_SORT_FIELDS,
    ExpenseReport as ExpenseReportEntity,
    ExpenseStatus,
    ReportPage,
)
from expensetrack.domain.errors import (
    ConflictError,
    NotFoundError,
    UnprocessableEntityError,
    ValidationError,
    report_not_found,
    report_not_modifiable,
    submit_without_expenses,
)
from expensetrack.domain.status import is_modifiable, validate_status_transition

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ExpenseReportService:
    """Service for managing expense reports and their workflow."""

    def __init__(self, db: Database, clock: Optional[Callable[[], datetime]] = None):
        """Initialize expense report service.

        Args:
            db: Database instance
            clock: Zero-argument callable returning the current UTC time
                (defaults to the system clock)
        """
        self.db = db
        self.clock = clock or _utc_now

    def create_report(self, user_id: str, purpose: str, report_date: date) -> ExpenseReportEntity:
        """Create a new expense report.

        The report always starts in CREATED with a zero total and no payment date.

        Args:
            user_id: Owner of the report
            purpose: What the report is for
            report_date: Report date

        Returns:
            Created report entity
        """
        report_id = self.db.create_report(
            user_id=user_id,
            purpose=purpose,
            report_date=report_date,
            status=ExpenseStatus.CREATED,
            total_amount=Decimal("0"),
        )
        logger.info("Created expense report %s for user %s", report_id, user_id)
        return self.get_report(report_id, user_id)

    def list_reports(
        self,
        user_id: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        status: Optional[ExpenseStatus] = None,
        sort_by: str = "report_date",
        order: str = "DESC",
    ) -> ReportPage:
        """List a user's reports one page at a time.

        Args:
            user_id: Owner of the reports
            page: 1-based page number
            limit: Page size (1-100)
            status: Optional status filter
            sort_by: Report field to order by
            order: "ASC" or "DESC"

        Returns:
            Page with the reports and the filtered count before pagination

        Raises:
            ValidationError: If paging or sorting parameters are out of range
        """
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}")
        if not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}, got {limit}")
        if sort_by not in REPORT_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort expense reports by '{sort_by}'. "
                f"Valid fields: {', '.join(REPORT_SORT_FIELDS)}"
            )
        direction = order.upper()
        if direction not in ("ASC", "DESC"):
            raise ValidationError(f"Sort order must be ASC or DESC, got '{order}'")

        total = self.db.count_reports(user_id, status=status)
        data = self.db.list_reports(
            user_id,
            status=status,
            sort_by=sort_by,
            descending=direction == "DESC",
            offset=(page - 1) * limit,
            limit=limit,
        )
        return ReportPage(data=data, total=total, page=page, limit=limit)

    def get_report(self, report_id: str, user_id: str) -> ExpenseReportEntity:
        """Get a report owned by ``user_id`` with its expenses and attachments.

        Raises:
            NotFoundError: If the report does not exist or belongs to another user
        """
        report = self.db.get_report(report_id, user_id=user_id)
        if report is None:
            raise NotFoundError(report_not_found(report_id))
        return report

    def update_report(
        self,
        report_id: str,
        user_id: str,
        purpose: Optional[str] = None,
        report_date: Optional[date] = None,
    ) -> ExpenseReportEntity:
        """Update report fields. Only provided fields are changed.

        Raises:
            NotFoundError: If the report is not found
            ConflictError: If the report's status no longer allows edits
        """
        report = self.get_report(report_id, user_id)

        if not is_modifiable(report.status):
            logger.warning("Refused update of report %s in status %s", report_id, report.status.value)
            raise ConflictError(report_not_modifiable(report_id, report.status.value))

        self.db.update_report(report_id, purpose=purpose, report_date=report_date)
        logger.info("Updated expense report %s", report_id)
        return self.get_report(report_id, user_id)

    def update_status(
        self, report_id: str, user_id: str, status: ExpenseStatus
    ) -> ExpenseReportEntity:
        """Move a report to a new workflow status.

        Submitting requires at least one expense. Reaching PAID stamps the
        payment date with the current time.

        Raises:
            NotFoundError: If the report is not found
            ConflictError: If the transition is not allowed
            UnprocessableEntityError: If submitting a report without expenses
        """
        report = self.get_report(report_id, user_id)

        validate_status_transition(report.status, status)

        if status == ExpenseStatus.SUBMITTED:
            if self.db.count_report_expenses(report_id) == 0:
                logger.warning("Refused submission of empty report %s", report_id)
                raise UnprocessableEntityError(submit_without_expenses(report_id))

        payment_date = None
        if status == ExpenseStatus.PAID:
            payment_date = self.clock()

        self.db.update_report(report_id, status=status, payment_date=payment_date)
        logger.info(
            "Expense report %s moved from %s to %s", report_id, report.status.value, status.value
        )
        return self.get_report(report_id, user_id)

    def delete_report(self, report_id: str, user_id: str) -> None:
        """Delete a report along with its expenses and their attachments.

        Raises:
            NotFoundError: If the report is not found
            ConflictError: If the report's status no longer allows deletion
        """
        report = self.get_report(report_id, user_id)

        if not is_modifiable(report.status):
            logger.warning("Refused deletion of report %s in status %s", report_id, report.status.value)
            raise ConflictError(report_not_modifiable(report_id, report.status.value, action="delete"))

        self.db.delete_report(report_id)
        logger.info("Deleted expense report %s with %d expense(s)", report_id, len(report.expenses))

    def recalculate_total_amount(self, report_id: str) -> Decimal:
        """Recompute a report's total from its current expenses and store it.

        Ownership and status are not checked; this only refreshes the
        derived total.

        Args:
            report_id: Report whose total to refresh

        Returns:
            The stored total (0 when the report has no expenses)
        """
        total = self.db.sum_report_expense_amounts(report_id)
        if total is None:
            total = Decimal("0.00")
        self.db.update_report_total(report_id, total)
        logger.info("Recalculated total of report %s: %s", report_id, total)
        return total
