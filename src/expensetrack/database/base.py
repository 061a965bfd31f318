"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from expensetrack.domain.entities import (
    Attachment,
    Expense,
    ExpenseCategory,
    ExpenseReport,
    ExpenseStatus,
    User,
    UserRole,
)


class Database(ABC):
    """Abstract database interface for expensetrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def check_connection(self) -> None:
        """Run a trivial query. Raises if the database is unreachable."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        email: str,
        name: str,
        role: UserRole = UserRole.EMPLOYEE,
        manager_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> str:
        """Create a user. Returns user ID (generated unless ``user_id`` is given)."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users, oldest first."""
        pass

    # Expense report operations
    @abstractmethod
    def create_report(
        self,
        user_id: str,
        purpose: str,
        report_date: date,
        status: ExpenseStatus = ExpenseStatus.CREATED,
        total_amount: Decimal = Decimal("0"),
    ) -> str:
        """Create an expense report. Returns report ID."""
        pass

    @abstractmethod
    def get_report(self, report_id: str, user_id: Optional[str] = None) -> Optional[ExpenseReport]:
        """Get report by ID with expenses and their attachments loaded.

        If ``user_id`` is given, a report owned by someone else is treated
        as absent.
        """
        pass

    @abstractmethod
    def list_reports(
        self,
        user_id: str,
        status: Optional[ExpenseStatus] = None,
        sort_by: str = "report_date",
        descending: bool = True,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[ExpenseReport]:
        """List a user's reports, optionally filtered by status.

        Args:
            user_id: Owner of the reports
            status: Optional status filter
            sort_by: Report field to order by
            descending: Sort direction
            offset: Number of rows to skip
            limit: Maximum number of rows to return (None for all)
        """
        pass

    @abstractmethod
    def count_reports(self, user_id: str, status: Optional[ExpenseStatus] = None) -> int:
        """Count a user's reports, optionally filtered by status."""
        pass

    @abstractmethod
    def update_report(
        self,
        report_id: str,
        purpose: Optional[str] = None,
        report_date: Optional[date] = None,
        status: Optional[ExpenseStatus] = None,
        payment_date: Optional[datetime] = None,
    ) -> None:
        """Update the provided report fields."""
        pass

    @abstractmethod
    def update_report_total(self, report_id: str, total_amount: Decimal) -> int:
        """Set a report's total amount. Returns the number of rows affected."""
        pass

    @abstractmethod
    def delete_report(self, report_id: str) -> None:
        """Delete a report together with its expenses and their attachments."""
        pass

    @abstractmethod
    def count_report_expenses(self, report_id: str) -> int:
        """Count the expenses currently belonging to a report."""
        pass

    @abstractmethod
    def sum_report_expense_amounts(self, report_id: str) -> Optional[Decimal]:
        """Sum the amounts of a report's expenses. Returns None when there are none."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        report_id: str,
        category: ExpenseCategory,
        expense_name: str,
        amount: Decimal,
        expense_date: date,
        description: Optional[str] = None,
        status: ExpenseStatus = ExpenseStatus.CREATED,
    ) -> str:
        """Create an expense under a report. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get expense by ID with its parent report and attachments loaded."""
        pass

    @abstractmethod
    def list_expenses(self, report_id: str) -> list[Expense]:
        """List a report's expenses with attachments, newest expense date first."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: str,
        category: Optional[ExpenseCategory] = None,
        expense_name: Optional[str] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        expense_date: Optional[date] = None,
        status: Optional[ExpenseStatus] = None,
        update_description: bool = False,
    ) -> None:
        """Update the provided expense fields.

        ``description`` is only written when given, or when ``update_description``
        is True, in which case None clears it.
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense together with its attachments."""
        pass

    # Attachment operations
    @abstractmethod
    def create_attachment(
        self, expense_id: str, file_name: str, file_path: str, mime_type: str, size: int
    ) -> str:
        """Record attachment metadata for an expense. Returns attachment ID."""
        pass

    @abstractmethod
    def list_attachments(self, expense_id: str) -> list[Attachment]:
        """List an expense's attachments."""
        pass
