"""Group repository for database operations."""

import logging
from typing import Any, Optional

import asyncpg

from ....core.exceptions import ConflictError
from ....core.value_objects import GroupId, require_identifier
from ....database.connection import affected_rows
from ....database.schema import GROUPS_TABLE, GROUPS_DISPLAY_NAME_KEY
from ....database.statements import StatementBuilder
from ..entities.group import Group

logger = logging.getLogger(__name__)


class GroupRepository:
    """Repository for ``auth.groups``."""

    def __init__(self, database_service):
        """Initialize group repository."""
        if not database_service:
            raise ValueError("Database service is required")
        self.database_service = database_service
        self.statements = StatementBuilder(GROUPS_TABLE)

    async def insert(self, group: Group) -> Group:
        """Insert a new group row.

        Raises:
            ConflictError: display name is already taken
        """
        statement = self.statements.insert(
            {
                "id": group.id.value,
                "display_name": group.display_name,
                "details": group.details,
                "active": group.active,
            },
            returning=GROUPS_TABLE.columns,
        )
        try:
            record = await self.database_service.fetchrow(statement.sql, *statement.args)
        except asyncpg.UniqueViolationError as e:
            if e.constraint_name == GROUPS_DISPLAY_NAME_KEY:
                raise ConflictError("Group", "display_name", group.display_name) from e
            raise ConflictError("Group", "id", str(group.id)) from e

        logger.debug(f"Inserted group {group.id}")
        return Group.from_record(record)

    async def _fetch_one(self, where) -> Optional[Group]:
        statement = self.statements.select(where)
        record = await self.database_service.fetchrow(statement.sql, *statement.args)
        return Group.from_record(record) if record else None

    async def get(self, group_id: GroupId) -> Optional[Group]:
        """Get a group by id."""
        require_identifier(group_id, GroupId, "group_id")
        return await self._fetch_one({"id": group_id.value})

    async def get_by_display_name(self, display_name: str) -> Optional[Group]:
        """Get a group by display name."""
        if display_name is None:
            return None
        return await self._fetch_one({"display_name": display_name})

    async def set_details(self, group_id: GroupId, details: Optional[Any]) -> bool:
        require_identifier(group_id, GroupId, "group_id")
        statement = self.statements.update(
            {"details": details}, {"id": group_id.value}, touch="updated_at"
        )
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def deactivate(self, group_id: GroupId) -> bool:
        require_identifier(group_id, GroupId, "group_id")
        statement = self.statements.update(
            {"active": False}, {"id": group_id.value, "active": True}, touch="updated_at"
        )
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def delete(self, group_id: GroupId) -> bool:
        require_identifier(group_id, GroupId, "group_id")
        statement = self.statements.delete({"id": group_id.value})
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0
