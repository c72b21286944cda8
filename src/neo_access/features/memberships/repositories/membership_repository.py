"""Membership repository for database operations."""

import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import ConflictError, UnknownPrincipalError
from ....core.value_objects import GroupId, UserId, PageWindow, require_identifier
from ....database.connection import affected_rows
from ....database.schema import (
    GROUPS_TABLE,
    MEMBERSHIPS_TABLE,
    MEMBERSHIPS_GROUP_FKEY,
)
from ....database.statements import StatementBuilder, SortOrder
from ...groups.entities.group import Group
from ..entities.membership import Membership

logger = logging.getLogger(__name__)


class MembershipRepository:
    """Repository for ``auth.group_memberships``.

    A user belongs to a group at most once; the (group_id, user_id) primary
    key enforces it. Rows disappear with either endpoint through
    ``ON DELETE CASCADE``.
    """

    def __init__(self, database_service):
        """Initialize membership repository."""
        if not database_service:
            raise ValueError("Database service is required")
        self.database_service = database_service
        self.statements = StatementBuilder(MEMBERSHIPS_TABLE)

    async def add(self, group_id: GroupId, user_id: UserId, role_name: str) -> Membership:
        """Insert a membership row.

        Raises:
            ConflictError: the user is already a member of the group
            UnknownPrincipalError: the group or the user does not exist
        """
        statement = self.statements.insert(
            {"group_id": group_id.value, "user_id": user_id.value, "role_name": role_name},
            returning=("group_id", "user_id", "role_name", "added_at"),
        )
        try:
            record = await self.database_service.fetchrow(statement.sql, *statement.args)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError("Membership", "user_id", str(user_id)) from e
        except asyncpg.ForeignKeyViolationError as e:
            if e.constraint_name == MEMBERSHIPS_GROUP_FKEY:
                raise UnknownPrincipalError("group", str(group_id)) from e
            raise UnknownPrincipalError("user", str(user_id)) from e

        logger.debug(f"Added user {user_id} to group {group_id} as {role_name}")
        return Membership.from_record(record)

    async def remove(self, group_id: GroupId, user_id: UserId) -> bool:
        """Delete a membership row. Returns False if there was none."""
        statement = self.statements.delete({"group_id": group_id.value, "user_id": user_id.value})
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def exists(self, group_id: GroupId, user_id: UserId, role_name: Optional[str] = None) -> bool:
        """Check for a membership, optionally with a specific role label."""
        where = {"group_id": group_id.value, "user_id": user_id.value}
        if role_name is not None:
            where["role_name"] = role_name
        statement = self.statements.exists(where)
        return bool(await self.database_service.fetchval(statement.sql, *statement.args))

    async def list_for_group(
        self,
        group_id: GroupId,
        window: Optional[PageWindow] = None
    ) -> List[Membership]:
        """Members of a group in insertion order."""
        statement = self.statements.select(
            {"group_id": group_id.value},
            columns=("group_id", "user_id", "role_name", "added_at"),
            order_by=[("seq", SortOrder.ASC)],
            window=window,
        )
        records = await self.database_service.fetch(statement.sql, *statement.args)
        return [Membership.from_record(r) for r in records]

    async def active_groups_for_user(self, user_id: UserId) -> List[Group]:
        """Active groups the user belongs to, ordered by display name."""
        require_identifier(user_id, UserId, "user_id")
        query = f"""
            SELECT {GROUPS_TABLE.column_list(alias="g")}
            FROM {MEMBERSHIPS_TABLE.qualified_name} m
            JOIN {GROUPS_TABLE.qualified_name} g ON g.id = m.group_id
            WHERE m.user_id = $1 AND g.active
            ORDER BY g.display_name ASC, g.id ASC
        """
        records = await self.database_service.fetch(query, user_id.value)
        return [Group.from_record(r) for r in records]
