"""User repository for database operations."""

import logging
from typing import Any, Optional

import asyncpg

from ....core.exceptions import ConflictError
from ....core.value_objects import UserId, require_identifier
from ....database.connection import affected_rows
from ....database.schema import USERS_TABLE, USERS_USERNAME_KEY, USERS_EMAIL_KEY
from ....database.statements import StatementBuilder
from ..entities.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for ``auth.users``.

    Lookups return ``None`` when nothing matches. Mutations return whether a
    row was affected; touching an absent user is not an error.
    """

    def __init__(self, database_service):
        """Initialize user repository."""
        if not database_service:
            raise ValueError("Database service is required")
        self.database_service = database_service
        self.statements = StatementBuilder(USERS_TABLE)

    async def insert(self, user: User) -> User:
        """Insert a new user row.

        Raises:
            ConflictError: username or email is already taken
        """
        statement = self.statements.insert(
            {
                "id": user.id.value,
                "username": user.username,
                "email": user.email,
                "details": user.details,
                "active": user.active,
            },
            returning=USERS_TABLE.columns,
        )
        try:
            record = await self.database_service.fetchrow(statement.sql, *statement.args)
        except asyncpg.UniqueViolationError as e:
            if e.constraint_name == USERS_USERNAME_KEY:
                raise ConflictError("User", "username", user.username) from e
            if e.constraint_name == USERS_EMAIL_KEY:
                raise ConflictError("User", "email", user.email) from e
            raise ConflictError("User", "id", str(user.id)) from e

        logger.debug(f"Inserted user {user.id}")
        return User.from_record(record)

    async def _fetch_one(self, where) -> Optional[User]:
        statement = self.statements.select(where)
        record = await self.database_service.fetchrow(statement.sql, *statement.args)
        return User.from_record(record) if record else None

    async def get(self, user_id: UserId) -> Optional[User]:
        """Get a user by id."""
        require_identifier(user_id, UserId, "user_id")
        return await self._fetch_one({"id": user_id.value})

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by handle."""
        if username is None:
            return None
        return await self._fetch_one({"username": username})

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by contact address."""
        if email is None:
            return None
        return await self._fetch_one({"email": email})

    async def set_details(self, user_id: UserId, details: Optional[Any]) -> bool:
        """Replace the profile payload."""
        require_identifier(user_id, UserId, "user_id")
        statement = self.statements.update(
            {"details": details}, {"id": user_id.value}, touch="updated_at"
        )
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def deactivate(self, user_id: UserId) -> bool:
        """Mark the user inactive. Returns False if already inactive or absent."""
        require_identifier(user_id, UserId, "user_id")
        statement = self.statements.update(
            {"active": False}, {"id": user_id.value, "active": True}, touch="updated_at"
        )
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def delete(self, user_id: UserId) -> bool:
        """Hard-delete the user; memberships and grants go with it."""
        require_identifier(user_id, UserId, "user_id")
        statement = self.statements.delete({"id": user_id.value})
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0
