"""Audit log repository for database operations."""

import logging
from typing import List, Optional

import asyncpg

from ....core.value_objects import UserId, PageWindow
from ....database.schema import AUDIT_LOG_TABLE, USERS_TABLE
from ....database.statements import StatementBuilder, SortOrder
from ..entities.audit_entry import AuditEntry

logger = logging.getLogger(__name__)


class AuditRepository:
    """Append-only access to ``auth.log``."""

    def __init__(self, database_service):
        """Initialize audit repository."""
        if not database_service:
            raise ValueError("Database service is required")
        self.database_service = database_service
        self.statements = StatementBuilder(AUDIT_LOG_TABLE)

    async def append(self, entry: AuditEntry) -> AuditEntry:
        """Append an entry.

        The attribution is looked up in the same statement: if the user no
        longer exists the entry is stored unattributed instead of failing.
        A user deleted after the lookup but before the foreign key check has
        the same outcome.
        """
        query = f"""
            INSERT INTO {AUDIT_LOG_TABLE.qualified_name} (id, user_id, action, occurred_at)
            VALUES ($1, (SELECT id FROM {USERS_TABLE.qualified_name} WHERE id = $2), $3, $4)
            RETURNING {AUDIT_LOG_TABLE.column_list()}
        """
        user_value = entry.user_id.value if entry.user_id is not None else None
        try:
            record = await self.database_service.fetchrow(
                query, entry.id, user_value, entry.action, entry.occurred_at
            )
        except asyncpg.ForeignKeyViolationError:
            logger.warning(f"User {entry.user_id} deleted while recording audit entry {entry.id}")
            record = await self.database_service.fetchrow(
                query, entry.id, None, entry.action, entry.occurred_at
            )
        return AuditEntry.from_record(record)

    async def list_for_user(
        self,
        user_id: UserId,
        window: Optional[PageWindow] = None
    ) -> List[AuditEntry]:
        """Entries attributed to the user, newest first."""
        statement = self.statements.select(
            {"user_id": user_id.value},
            order_by=[("occurred_at", SortOrder.DESC), ("id", SortOrder.DESC)],
            window=window,
        )
        records = await self.database_service.fetch(statement.sql, *statement.args)
        return [AuditEntry.from_record(r) for r in records]
