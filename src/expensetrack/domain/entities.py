"""Domain model entities for expensetrack.

These are pure data classes representing business concepts, independent of
database schema. The gateway converts ORM rows into these snapshots so the
services never touch SQLAlchemy objects directly.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ExpenseStatus(str, Enum):
    """Workflow status shared by expense reports and expenses."""

    CREATED = "CREATED"
    SUBMITTED = "SUBMITTED"
    VALIDATED = "VALIDATED"
    REJECTED = "REJECTED"
    PAID = "PAID"


class ExpenseCategory(str, Enum):
    """Fixed set of expense categories."""

    MEALS = "MEALS"
    TRAVEL = "TRAVEL"
    SUPPLIES = "SUPPLIES"
    TEAM_EVENT = "TEAM_EVENT"
    PARKING = "PARKING"
    ACCOMMODATION = "ACCOMMODATION"
    TRANSPORT = "TRANSPORT"


class UserRole(str, Enum):
    """Role of a user in the approval chain."""

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"


# Report fields a listing may be ordered by
REPORT_SORT_FIELDS = (
    "purpose",
    "report_date",
    "total_amount",
    "status",
    "payment_date",
    "created_at",
    "updated_at",
)


@dataclass(frozen=True)
class User:
    """User domain entity.

    Reports refer to users by ``user_id`` only. There is no foreign key, so
    a report may name a user that has no row here.
    """

    id: str
    email: str
    name: str
    role: UserRole
    manager_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Attachment:
    """File metadata bound to one expense."""

    id: str
    expense_id: str
    file_name: str
    file_path: str
    mime_type: str
    size: int
    created_at: datetime


@dataclass(frozen=True)
class ExpenseReport:
    """Expense report domain entity.

    ``expenses`` is populated when the report is loaded with its children;
    ``total_amount`` is derived from them and never set by callers.
    """

    id: str
    user_id: str
    purpose: str
    report_date: date
    total_amount: Decimal
    status: ExpenseStatus
    payment_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    expenses: tuple["Expense", ...] = ()


@dataclass(frozen=True)
class Expense:
    """Expense line item domain entity.

    ``report`` is the parent report without its children, present when the
    expense was looked up on its own.
    """

    id: str
    report_id: str
    category: ExpenseCategory
    expense_name: str
    description: Optional[str]
    amount: Decimal
    expense_date: date
    status: ExpenseStatus
    created_at: datetime
    updated_at: datetime
    attachments: tuple[Attachment, ...] = ()
    report: Optional[ExpenseReport] = None


@dataclass(frozen=True)
class ReportPage:
    """One page of a filtered report listing."""

    data: list[ExpenseReport]
    total: int
    page: int
    limit: int
