"""SQLAlchemy models for expensetrack database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    role = Column(String(50), default="EMPLOYEE", nullable=False)
    manager_id = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class ExpenseReport(Base):
    """Expense report model."""

    __tablename__ = "expense_reports"

    id = Column(String(36), primary_key=True, default=_new_id)
    purpose = Column(String(500), nullable=False)
    report_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(10, 2), default=0, nullable=False)
    status = Column(String(50), default="CREATED", nullable=False)
    payment_date = Column(DateTime, nullable=True)
    # Weak reference to users.id, no foreign key
    user_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    expenses = relationship(
        "Expense",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="Expense.expense_date.desc()",
    )


class Expense(Base):
    """Expense line item model."""

    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=_new_id)
    category = Column(String(50), nullable=False)
    expense_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    expense_date = Column(Date, nullable=False)
    status = Column(String(50), default="CREATED", nullable=False)
    report_id = Column(
        String(36), ForeignKey("expense_reports.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    report = relationship("ExpenseReport", back_populates="expenses")
    attachments = relationship(
        "Attachment",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="Attachment.created_at",
    )


class Attachment(Base):
    """Attachment metadata model."""

    __tablename__ = "attachments"

    id = Column(String(36), primary_key=True, default=_new_id)
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(500), nullable=False)
    mime_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    expense_id = Column(
        String(36), ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    expense = relationship("Expense", back_populates="attachments")

