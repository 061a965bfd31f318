"""Status workflow rules shared by expense reports and expenses."""

from types import MappingProxyType
from typing import Mapping

from expensetrack.domain.entities import ExpenseStatus
from expensetrack.domain.errors import ConflictError, invalid_transition


VALID_TRANSITIONS: Mapping[ExpenseStatus, frozenset[ExpenseStatus]] = MappingProxyType(
    {
        ExpenseStatus.CREATED: frozenset({ExpenseStatus.SUBMITTED}),
        ExpenseStatus.SUBMITTED: frozenset({ExpenseStatus.VALIDATED, ExpenseStatus.REJECTED}),
        ExpenseStatus.VALIDATED: frozenset({ExpenseStatus.PAID}),
        ExpenseStatus.REJECTED: frozenset(),
        ExpenseStatus.PAID: frozenset(),
    }
)

MODIFIABLE_STATUSES = frozenset({ExpenseStatus.CREATED, ExpenseStatus.SUBMITTED})


def allowed_transitions(current: ExpenseStatus) -> list[ExpenseStatus]:
    """Return the legal targets for ``current`` in workflow order."""
    targets = VALID_TRANSITIONS[current]
    return [status for status in ExpenseStatus if status in targets]


def validate_status_transition(current: ExpenseStatus, target: ExpenseStatus) -> None:
    """Check that moving from ``current`` to ``target`` is allowed.

    Args:
        current: Current status
        target: Desired new status

    Raises:
        ConflictError: If the transition is not in the allow-list
    """
    allowed = allowed_transitions(current)
    if target not in allowed:
        raise ConflictError(
            invalid_transition(current.value, target.value, [s.value for s in allowed])
        )


def is_modifiable(status: ExpenseStatus) -> bool:
    """Return True if an entity in ``status`` may still be edited or deleted."""
    return status in MODIFIABLE_STATUSES


def is_terminal(status: ExpenseStatus) -> bool:
    """Return True if no transition leaves ``status``."""
    return not VALID_TRANSITIONS[status]
