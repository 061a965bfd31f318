"""User domain service."""

import logging
import re
from typing import Optional
from expensetrack.database.base import Database
from expensetrack.domain.entities import User as UserEntity, UserRole
from expensetrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    email_taken,
    user_not_found,
)

logger = logging.getLogger(__name__)

# Identity every command acts as until real authentication exists
PLACEHOLDER_USER_ID = "00000000-0000-0000-0000-000000000001"
PLACEHOLDER_USER_EMAIL = "employee@example.com"
PLACEHOLDER_USER_NAME = "Default Employee"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_NAME_LENGTH = 255


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self,
        email: str,
        name: str,
        role: UserRole = UserRole.EMPLOYEE,
        manager_id: Optional[str] = None,
    ) -> UserEntity:
        """Create a new user.

        Args:
            email: Unique email address
            name: Display name
            role: Role in the approval chain
            manager_id: Optional ID of the user's manager

        Returns:
            Created user entity

        Raises:
            ValidationError: If the email or name is invalid
            ConflictError: If the email is already registered
            NotFoundError: If the manager does not exist
        """
        email = email.strip().lower()
        if not _EMAIL_RE.match(email) or len(email) > MAX_NAME_LENGTH:
            raise ValidationError(f"Invalid email address '{email}'")
        if not name.strip():
            raise ValidationError("User name cannot be empty")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"User name must be at most {MAX_NAME_LENGTH} characters")

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(email_taken(email))
        if manager_id is not None:
            self.get_user(manager_id)

        user_id = self.db.create_user(email=email, name=name, role=role, manager_id=manager_id)
        logger.info("Created user %s with email %s", user_id, email)
        return self.get_user(user_id)

    def list_users(self) -> list[UserEntity]:
        """List all users."""
        return self.db.list_users()

    def get_user(self, user_id: str) -> UserEntity:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def ensure_placeholder_user(self) -> tuple[UserEntity, bool]:
        """Create the placeholder employee if it is missing.

        Returns:
            The placeholder user and whether it was created now
        """
        user = self.db.get_user(PLACEHOLDER_USER_ID)
        if user is not None:
            return user, False

        self.db.create_user(
            email=PLACEHOLDER_USER_EMAIL,
            name=PLACEHOLDER_USER_NAME,
            role=UserRole.EMPLOYEE,
            user_id=PLACEHOLDER_USER_ID,
        )
        logger.info("Seeded placeholder user %s", PLACEHOLDER_USER_ID)
        return self.get_user(PLACEHOLDER_USER_ID), True
