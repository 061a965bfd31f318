"""Attachment domain service."""

import logging
from expensetrack.database.base import Database
from expensetrack.domain.entities import Attachment as AttachmentEntity
from expensetrack.domain.errors import ConflictError, ValidationError, expense_not_modifiable
from expensetrack.domain.expense import ExpenseService
from expensetrack.domain.status import is_modifiable

logger = logging.getLogger(__name__)

MAX_FILE_NAME_LENGTH = 255
MAX_FILE_PATH_LENGTH = 500
MAX_MIME_TYPE_LENGTH = 100


def _check_length(field: str, value: str, limit: int) -> None:
    if not value.strip():
        raise ValidationError(f"Attachment {field} cannot be empty")
    if len(value) > limit:
        raise ValidationError(f"Attachment {field} must be at most {limit} characters, got {len(value)}")


class AttachmentService:
    """Service for recording attachment metadata on expenses.

    Only metadata is stored; the file itself stays where it is.
    """

    def __init__(self, db: Database, expense_service: ExpenseService):
        """Initialize attachment service.

        Args:
            db: Database instance
            expense_service: Service used to authorize access to the expense
        """
        self.db = db
        self.expense_service = expense_service

    def add_attachment(
        self,
        expense_id: str,
        user_id: str,
        file_name: str,
        file_path: str,
        mime_type: str,
        size: int,
    ) -> AttachmentEntity:
        """Attach a file's metadata to an expense.

        Raises:
            NotFoundError: If the expense is not found
            ConflictError: If the expense or its report no longer allows edits
            ValidationError: If a field is empty or too long, or the size is negative
        """
        _check_length("file name", file_name, MAX_FILE_NAME_LENGTH)
        _check_length("file path", file_path, MAX_FILE_PATH_LENGTH)
        _check_length("MIME type", mime_type, MAX_MIME_TYPE_LENGTH)
        if size < 0:
            raise ValidationError(f"Attachment size cannot be negative, got {size}")

        expense = self.expense_service.get_expense(expense_id, user_id)
        if not (is_modifiable(expense.status) and is_modifiable(expense.report.status)):
            raise ConflictError(
                expense_not_modifiable(
                    expense_id, expense.status.value, expense.report.status.value, action="attach files to"
                )
            )

        attachment_id = self.db.create_attachment(
            expense_id=expense_id,
            file_name=file_name,
            file_path=file_path,
            mime_type=mime_type,
            size=size,
        )
        logger.info("Attached %s to expense %s", file_name, expense_id)

        return next(a for a in self.db.list_attachments(expense_id) if a.id == attachment_id)

    def list_attachments(self, expense_id: str, user_id: str) -> list[AttachmentEntity]:
        """List an expense's attachments.

        Raises:
            NotFoundError: If the expense is not found
        """
        self.expense_service.get_expense(expense_id, user_id)
        return self.db.list_attachments(expense_id)
