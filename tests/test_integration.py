"""Integration tests for end-to-end workflows."""

from datetime import date

from expensetrack.cli.main import cli

from conftest import extract_id


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: report → expenses → edits → submit → validate → pay."""
    # Step 1: Create report
    result = _invoke(cli_runner, temp_db, "report", "create", "Business trip", "--date", "2026-02-11")
    assert result.exit_code == 0, result.output
    report_id = extract_id(result.output)

    # Step 2: Submitting an empty report is refused
    result = _invoke(cli_runner, temp_db, "report", "status", report_id, "SUBMITTED")
    assert result.exit_code == 1
    assert "Error [unprocessable_entity]" in result.output

    # Step 3: Add two expenses
    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        report_id,
        "--category",
        "TRAVEL",
        "--name",
        "Train ticket",
        "--amount",
        "125.50",
        "--date",
        "2026-02-11",
        "--description",
        "Paris to Lyon",
    )
    assert result.exit_code == 0, result.output
    train_id = extract_id(result.output)
    assert "Report total is now 125.50" in result.output

    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        report_id,
        "--category",
        "accommodation",
        "--name",
        "Hotel",
        "--amount",
        "$100",
        "--date",
        "2026-02-12",
    )
    assert result.exit_code == 0, result.output
    hotel_id = extract_id(result.output)
    assert "Report total is now 225.50" in result.output

    # Step 4: Change an amount, then delete the other expense
    result = _invoke(cli_runner, temp_db, "expense", "update", train_id, "--amount", "200.00")
    assert result.exit_code == 0, result.output
    assert "Report total is now 300.00" in result.output

    result = _invoke(cli_runner, temp_db, "expense", "delete", hotel_id, "--yes")
    assert result.exit_code == 0, result.output
    assert "Deleted expense 'Hotel'" in result.output

    # Step 5: Walk the approval workflow
    for status in ("SUBMITTED", "VALIDATED"):
        result = _invoke(cli_runner, temp_db, "report", "status", report_id, status)
        assert result.exit_code == 0, result.output
        assert f"is now {status}" in result.output

    # Step 6: Validated reports are locked
    result = _invoke(cli_runner, temp_db, "expense", "update", train_id, "--name", "Changed")
    assert result.exit_code == 1
    assert "Error [conflict]" in result.output

    result = _invoke(cli_runner, temp_db, "report", "update", report_id, "--purpose", "Changed")
    assert result.exit_code == 1
    assert "Error [conflict]" in result.output

    # Step 7: Pay
    result = _invoke(cli_runner, temp_db, "report", "status", report_id, "paid")
    assert result.exit_code == 0, result.output
    assert "is now PAID" in result.output
    assert "Payment date set to" in result.output

    # Step 8: Final state
    report = temp_db.get_report(report_id)
    assert report.status.value == "PAID"
    assert str(report.total_amount) == "200.00"
    assert report.payment_date is not None
    assert [e.expense_name for e in report.expenses] == ["Train ticket"]
    assert report.expenses[0].expense_date == date(2026, 2, 11)

    result = _invoke(cli_runner, temp_db, "report", "show", report_id)
    assert result.exit_code == 0
    assert "Status: PAID" in result.output
    assert "Total: 200.00" in result.output
    assert "Paid:" in result.output


def test_reports_are_private(cli_runner, temp_db):
    """Test one user cannot see or change another user's report."""
    result = _invoke(cli_runner, temp_db, "--user", "alice", "report", "create", "Alice's trip")
    assert result.exit_code == 0
    report_id = extract_id(result.output)

    result = _invoke(cli_runner, temp_db, "--user", "bob", "report", "show", report_id)
    assert result.exit_code == 1
    assert f"Error [not_found]: Expense report with ID {report_id} not found" in result.output

    result = _invoke(cli_runner, temp_db, "--user", "bob", "report", "list")
    assert result.exit_code == 0
    assert "No expense reports found." in result.output

    result = _invoke(cli_runner, temp_db, "--user", "alice", "report", "list")
    assert "Alice's trip" in result.output


def test_user_from_environment(cli_runner, temp_db):
    """Test the caller can be set through the environment."""
    result = _invoke(
        cli_runner, temp_db, "report", "create", "Env trip", env={"EXPENSETRACK_USER_ID": "carol"}
    )
    report_id = extract_id(result.output)

    assert temp_db.get_report(report_id, user_id="carol") is not None
