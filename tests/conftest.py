"""Shared pytest fixtures for expensetrack tests."""

import logging
import tempfile
import os
import re
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from expensetrack.database.factories import create_sqlite_database
from expensetrack.domain.attachment import AttachmentService
from expensetrack.domain.entities import ExpenseCategory
from expensetrack.domain.expense import ExpenseService
from expensetrack.domain.expense_report import ExpenseReportService
from expensetrack.domain.user import UserService
from expensetrack.logging_config import LOGGER_NAME

USER_ID = "00000000-0000-0000-0000-000000000001"
OTHER_USER_ID = "00000000-0000-0000-0000-000000000002"
PAYMENT_TIME = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the handler the CLI installs so it does not outlive the runner's streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def user_id():
    """ID of the user the tests act as."""
    return USER_ID


@pytest.fixture
def other_user_id():
    """ID of a second user who owns nothing the tests create."""
    return OTHER_USER_ID


@pytest.fixture
def report_service(temp_db):
    """Create an ExpenseReportService with a pinned clock."""
    return ExpenseReportService(temp_db, clock=lambda: PAYMENT_TIME)


@pytest.fixture
def expense_service(temp_db, report_service):
    """Create an ExpenseService wired to the report service."""
    return ExpenseService(temp_db, report_service)


@pytest.fixture
def attachment_service(temp_db, expense_service):
    """Create an AttachmentService wired to the expense service."""
    return AttachmentService(temp_db, expense_service)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService."""
    return UserService(temp_db)


@pytest.fixture
def sample_report(report_service, user_id):
    """Create a sample expense report."""
    return report_service.create_report(
        user_id=user_id, purpose="Business trip", report_date=date(2026, 2, 11)
    )


@pytest.fixture
def sample_expense(expense_service, sample_report, user_id):
    """Create a sample expense on the sample report."""
    return expense_service.create_expense(
        report_id=sample_report.id,
        user_id=user_id,
        category=ExpenseCategory.TRAVEL,
        expense_name="Train ticket",
        description="Paris to Lyon",
        amount=Decimal("125.50"),
        expense_date=date(2026, 2, 11),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def extract_id(output: str) -> str:
    """Pull the ID out of CLI output like "Created ... (ID: <id>)"."""
    match = re.search(r"\(ID: ([0-9a-f-]+)\)", output)
    assert match is not None, output
    return match.group(1)
