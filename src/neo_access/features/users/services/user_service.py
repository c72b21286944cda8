"""User service for business logic."""

import logging
from typing import Any, Optional

from ....core.exceptions import ValidationError
from ....core.value_objects import UserId
from ..entities.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service for user business logic."""

    def __init__(self, user_repository: UserRepository):
        """Initialize user service."""
        self.user_repository = user_repository

    async def create_user(
        self,
        email: str,
        username: Optional[str] = None,
        details: Optional[Any] = None
    ) -> User:
        """Provision a new user with a freshly generated id.

        Raises:
            ValidationError: email is blank
            ConflictError: username or email is already in use
        """
        if not isinstance(email, str) or not email.strip():
            raise ValidationError("User email is required")
        if username is not None and (not isinstance(username, str) or not username.strip()):
            raise ValidationError("Username must be a non-empty string when given")

        user = User(id=UserId.generate(), email=email, username=username, details=details)
        created = await self.user_repository.insert(user)
        logger.info(f"Created user {created.id}")
        return created

    async def get_user(self, user_id: UserId) -> Optional[User]:
        """Get user by ID."""
        return await self.user_repository.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        return await self.user_repository.get_by_username(username)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return await self.user_repository.get_by_email(email)

    async def set_details(self, user_id: UserId, details: Optional[Any]) -> bool:
        """Replace the user's profile payload wholesale."""
        return await self.user_repository.set_details(user_id, details)

    async def deactivate_user(self, user_id: UserId) -> bool:
        """Soft-delete the user. Idempotent."""
        changed = await self.user_repository.deactivate(user_id)
        if changed:
            logger.info(f"Deactivated user {user_id}")
        return changed

    async def delete_user(self, user_id: UserId) -> bool:
        """Hard-delete the user. Irreversible."""
        deleted = await self.user_repository.delete(user_id)
        if deleted:
            logger.warning(f"Deleted user {user_id}")
        return deleted
