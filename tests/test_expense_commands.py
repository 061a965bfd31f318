"""Tests for expense, attachment and health CLI commands."""

import pytest

from expensetrack.cli.main import cli
from expensetrack.domain.entities import ExpenseStatus

from conftest import extract_id


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


@pytest.fixture
def report_id(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "report", "create", "Business trip", "--date", "2026-02-11")
    assert result.exit_code == 0, result.output
    return extract_id(result.output)


@pytest.fixture
def expense_id(cli_runner, temp_db, report_id):
    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        report_id,
        "--category",
        "MEALS",
        "--name",
        "Lunch",
        "--amount",
        "18.90",
        "--date",
        "2026-02-11",
    )
    assert result.exit_code == 0, result.output
    return extract_id(result.output)


class TestExpenseCommands:
    """Tests for the expense command group."""

    def test_add_expense(self, cli_runner, temp_db, report_id, expense_id):
        """Test adding an expense reports the new total."""
        expense = temp_db.get_expense(expense_id)

        assert expense.expense_name == "Lunch"
        assert str(expense.amount) == "18.90"
        assert expense.report_id == report_id

    def test_add_expense_invalid_amount(self, cli_runner, temp_db, report_id):
        """Test a bad amount is a validation error and nothing is stored."""
        result = _invoke(
            cli_runner, temp_db, "expense", "add", report_id, "--category", "MEALS", "--name", "Lunch", "--amount", "lots"
        )

        assert result.exit_code == 1
        assert "Error [validation_error]" in result.output
        assert temp_db.list_expenses(report_id) == []

    def test_add_expense_negative_amount(self, cli_runner, temp_db, report_id):
        """Test negative amounts are refused."""
        result = _invoke(
            cli_runner, temp_db, "expense", "add", report_id, "--category", "MEALS", "--name", "Refund", "--amount", "-1"
        )

        assert result.exit_code == 1
        assert "Error [validation_error]" in result.output

    def test_add_expense_blank_name(self, cli_runner, temp_db, report_id):
        """Test blank names are refused."""
        result = _invoke(
            cli_runner, temp_db, "expense", "add", report_id, "--category", "MEALS", "--name", "  ", "--amount", "1"
        )

        assert result.exit_code == 1
        assert "Expense name cannot be empty" in result.output

    def test_add_expense_unknown_category(self, cli_runner, temp_db, report_id):
        """Test click rejects categories outside the enumeration."""
        result = _invoke(
            cli_runner, temp_db, "expense", "add", report_id, "--category", "GROCERIES", "--name", "Food", "--amount", "1"
        )

        assert result.exit_code == 2

    def test_add_expense_to_locked_report(self, cli_runner, temp_db, report_id):
        """Test a paid report refuses new expenses."""
        temp_db.update_report(report_id, status=ExpenseStatus.PAID)

        result = _invoke(
            cli_runner, temp_db, "expense", "add", report_id, "--category", "MEALS", "--name", "Late", "--amount", "1"
        )

        assert result.exit_code == 1
        assert "Error [conflict]: Cannot add expenses" in result.output

    def test_list_expenses(self, cli_runner, temp_db, report_id, expense_id):
        """Test listing a report's expenses."""
        result = _invoke(cli_runner, temp_db, "expense", "list", report_id)

        assert result.exit_code == 0
        assert "Found 1 expense(s)" in result.output
        assert expense_id in result.output
        assert "MEALS" in result.output

    def test_list_expenses_empty(self, cli_runner, temp_db, report_id):
        """Test listing a report without expenses."""
        result = _invoke(cli_runner, temp_db, "expense", "list", report_id)

        assert result.exit_code == 0
        assert "No expenses found." in result.output

    def test_show_expense(self, cli_runner, temp_db, expense_id):
        """Test showing an expense with its report."""
        result = _invoke(cli_runner, temp_db, "expense", "show", expense_id)

        assert result.exit_code == 0
        assert "Name: Lunch" in result.output
        assert "Amount: 18.90" in result.output
        assert "Report: Business trip" in result.output

    def test_show_other_users_expense(self, cli_runner, temp_db, expense_id):
        """Test another user cannot see the expense."""
        result = _invoke(cli_runner, temp_db, "--user", "intruder", "expense", "show", expense_id)

        assert result.exit_code == 1
        assert f"Error [not_found]: Expense with ID {expense_id} not found" in result.output

    def test_update_description_only(self, cli_runner, temp_db, expense_id):
        """Test a description edit does not print a new total."""
        result = _invoke(cli_runner, temp_db, "expense", "update", expense_id, "--description", "With client")

        assert result.exit_code == 0, result.output
        assert f"Updated expense {expense_id}" in result.output
        assert "Report total" not in result.output
        assert temp_db.get_expense(expense_id).description == "With client"

    def test_clear_description(self, cli_runner, temp_db, expense_id):
        """Test an empty --description clears the stored description."""
        _invoke(cli_runner, temp_db, "expense", "update", expense_id, "--description", "With client")

        result = _invoke(cli_runner, temp_db, "expense", "update", expense_id, "--description", "")

        assert result.exit_code == 0, result.output
        assert f"Updated expense {expense_id}" in result.output
        temp_db.disconnect()
        assert temp_db.get_expense(expense_id).description is None

    def test_update_nothing(self, cli_runner, temp_db, expense_id):
        """Test update without options fails."""
        result = _invoke(cli_runner, temp_db, "expense", "update", expense_id)

        assert result.exit_code == 1
        assert "Nothing to update." in result.output

    def test_expense_status(self, cli_runner, temp_db, expense_id):
        """Test moving an expense through its workflow."""
        result = _invoke(cli_runner, temp_db, "expense", "status", expense_id, "SUBMITTED")
        assert result.exit_code == 0
        assert f"Expense {expense_id} is now SUBMITTED" in result.output

        result = _invoke(cli_runner, temp_db, "expense", "status", expense_id, "PAID")
        assert result.exit_code == 1
        assert "Error [conflict]: Invalid status transition from SUBMITTED to PAID" in result.output

    def test_delete_expense_cancelled(self, cli_runner, temp_db, expense_id):
        """Test declining the confirmation keeps the expense."""
        result = _invoke(cli_runner, temp_db, "expense", "delete", expense_id, input="n\n")

        assert result.exit_code == 0
        assert "Deletion cancelled." in result.output
        assert temp_db.get_expense(expense_id) is not None

    def test_delete_expense_resets_total(self, cli_runner, temp_db, report_id, expense_id):
        """Test deleting the only expense brings the total back to zero."""
        result = _invoke(cli_runner, temp_db, "expense", "delete", expense_id, "--yes")

        assert result.exit_code == 0
        assert "Deleted expense 'Lunch'" in result.output
        assert str(temp_db.get_report(report_id).total_amount) == "0.00"


class TestAttachmentCommands:
    """Tests for the attachment command group."""

    def test_attach_file(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test recording a file's metadata with a guessed MIME type."""
        receipt = tmp_path / "receipt.pdf"
        receipt.write_bytes(b"%PDF-1.4 receipt")

        result = _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(receipt))

        assert result.exit_code == 0, result.output
        assert "Attached 'receipt.pdf'" in result.output
        attachment = temp_db.list_attachments(expense_id)[0]
        assert attachment.mime_type == "application/pdf"
        assert attachment.size == len(b"%PDF-1.4 receipt")
        assert attachment.file_path == str(receipt.resolve())

    def test_attach_with_explicit_mime_type(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test --mime-type overrides the guess."""
        scan = tmp_path / "scan.bin"
        scan.write_bytes(b"\x00\x01")

        result = _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(scan), "--mime-type", "image/tiff")

        assert result.exit_code == 0, result.output
        assert temp_db.list_attachments(expense_id)[0].mime_type == "image/tiff"

    def test_attach_with_overlong_mime_type(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test a MIME type longer than 100 characters is refused."""
        scan = tmp_path / "scan.bin"
        scan.write_bytes(b"\x00")

        result = _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(scan), "--mime-type", "x" * 101)

        assert result.exit_code == 1
        assert "Error [validation_error]: Attachment MIME type must be at most 100 characters" in result.output
        assert temp_db.list_attachments(expense_id) == []

    def test_attach_missing_file(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test click rejects a path that does not exist."""
        result = _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(tmp_path / "nope.pdf"))

        assert result.exit_code == 2

    def test_attach_to_locked_expense(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test files cannot be attached to a locked expense."""
        receipt = tmp_path / "receipt.png"
        receipt.write_bytes(b"png")
        temp_db.update_expense(expense_id, status=ExpenseStatus.VALIDATED)

        result = _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(receipt))

        assert result.exit_code == 1
        assert "Error [conflict]" in result.output

    def test_list_attachments(self, cli_runner, temp_db, expense_id, tmp_path):
        """Test listing attachments."""
        result = _invoke(cli_runner, temp_db, "attachment", "list", expense_id)
        assert result.exit_code == 0
        assert "No attachments found." in result.output

        receipt = tmp_path / "receipt.jpg"
        receipt.write_bytes(b"jpg")
        _invoke(cli_runner, temp_db, "attachment", "add", expense_id, str(receipt))

        result = _invoke(cli_runner, temp_db, "attachment", "list", expense_id)
        assert "receipt.jpg" in result.output
        assert "image/jpeg" in result.output


def test_health(cli_runner, temp_db):
    """Test the health check against a working database."""
    result = _invoke(cli_runner, temp_db, "health")

    assert result.exit_code == 0
    assert "Database: ok" in result.output
