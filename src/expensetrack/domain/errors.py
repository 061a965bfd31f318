"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``category`` is a stable
    machine-readable name and ``status_code`` the matching HTTP status.
    """

    category = "domain_error"
    status_code = 400


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    category = "validation_error"
    status_code = 400


class NotFoundError(DomainError):
    """Requested entity does not exist or is not owned by the caller."""

    category = "not_found"
    status_code = 404


class ConflictError(DomainError):
    """Illegal status transition or mutation of a non-modifiable entity."""

    category = "conflict"
    status_code = 409


class UnprocessableEntityError(DomainError):
    """Well-formed request refused by a business rule."""

    category = "unprocessable_entity"
    status_code = 422


def report_not_found(report_id: str) -> str:
    """Return message for missing expense report."""
    return f"Expense report with ID {report_id} not found"


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return f"User with ID {user_id} not found"


def email_taken(email: str) -> str:
    """Return message when a user email is already registered."""
    return f"A user with email {email} already exists"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense with ID {expense_id} not found"


def invalid_transition(current: str, target: str, allowed: Iterable[str]) -> str:
    """Return message for a status transition outside the allow-list."""
    allowed_text = ", ".join(allowed) or "none"
    return (
        f"Invalid status transition from {current} to {target}. "
        f"Allowed transitions: {allowed_text}"
    )


def report_not_modifiable(report_id: str, status: str, action: str = "modify") -> str:
    """Return message when a report's status blocks an edit or deletion."""
    return f"Cannot {action} expense report {report_id} with status {status}"


def report_closed_for_expenses(report_id: str, status: str) -> str:
    """Return message when expenses cannot be added to a report."""
    return f"Cannot add expenses to report {report_id} with status {status}"


def expense_not_modifiable(
    expense_id: str, status: str, report_status: str, action: str = "modify"
) -> str:
    """Return message when an expense or its report blocks an edit or deletion."""
    return (
        f"Cannot {action} expense {expense_id} with status {status} "
        f"or report status {report_status}"
    )


def submit_without_expenses(report_id: str) -> str:
    """Return message when submitting an empty report."""
    return f"Cannot submit expense report {report_id} without expenses"
