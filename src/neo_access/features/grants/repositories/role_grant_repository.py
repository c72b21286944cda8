"""Role grant repository for database operations."""

import logging
from typing import List

import asyncpg

from ....core.exceptions import UnknownPrincipalError
from ....core.value_objects import GroupId, UserId, Principal, require_identifier
from ....database.connection import affected_rows
from ....database.schema import (
    GROUPS_TABLE,
    MEMBERSHIPS_TABLE,
    ROLE_GRANTS_TABLE,
)
from ....database.statements import StatementBuilder, SortOrder
from ..entities.role_grant import RoleGrant
from ..entities.scope import Scope

logger = logging.getLogger(__name__)


def holder_column(principal: Principal) -> str:
    """Column of ``auth.role_grants`` that stores grants for this principal type."""
    if isinstance(principal, UserId):
        return "user_id"
    if isinstance(principal, GroupId):
        return "group_id"
    raise TypeError(f"principal must be a UserId or GroupId, got {type(principal).__name__}")


class RoleGrantRepository:
    """Repository for ``auth.role_grants``.

    User grants and group grants share one table; exactly one of ``user_id``
    and ``group_id`` is set per row. Every scope, including the global one,
    goes through the same statements.
    """

    def __init__(self, database_service):
        """Initialize role grant repository."""
        if not database_service:
            raise ValueError("Database service is required")
        self.database_service = database_service
        self.statements = StatementBuilder(ROLE_GRANTS_TABLE)

    def _key(self, principal: Principal, scope: Scope, role: str):
        return {
            holder_column(principal): principal.value,
            "scope_kind": scope.kind,
            "scope_id": scope.id,
            "role_name": role,
        }

    async def insert(self, principal: Principal, scope: Scope, role: str) -> bool:
        """Insert a grant; an existing identical grant is left alone.

        Returns True if a new row was written.

        Raises:
            UnknownPrincipalError: the user or group does not exist
        """
        statement = self.statements.insert(
            self._key(principal, scope, role), on_conflict_do_nothing=True
        )
        try:
            result = await self.database_service.execute(statement.sql, *statement.args)
        except asyncpg.ForeignKeyViolationError as e:
            raise UnknownPrincipalError(principal.kind, str(principal)) from e
        return affected_rows(result) > 0

    async def delete(self, principal: Principal, scope: Scope, role: str) -> bool:
        """Delete a grant. Returns False if there was none."""
        statement = self.statements.delete(self._key(principal, scope, role))
        result = await self.database_service.execute(statement.sql, *statement.args)
        return affected_rows(result) > 0

    async def exists(self, principal: Principal, scope: Scope, role: str) -> bool:
        statement = self.statements.exists(self._key(principal, scope, role))
        return bool(await self.database_service.fetchval(statement.sql, *statement.args))

    async def list_for(self, principal: Principal) -> List[RoleGrant]:
        """All grants held directly by the principal, sorted by scope then role."""
        statement = self.statements.select(
            {holder_column(principal): principal.value},
            columns=("scope_kind", "scope_id", "role_name"),
            order_by=[
                ("scope_kind", SortOrder.ASC),
                ("scope_id", SortOrder.ASC),
                ("role_name", SortOrder.ASC),
            ],
        )
        records = await self.database_service.fetch(statement.sql, *statement.args)
        return [
            RoleGrant(principal, Scope(r["scope_kind"], r["scope_id"]), r["role_name"])
            for r in records
        ]

    async def roles_in_scope(self, principal: Principal, scope: Scope) -> List[str]:
        """Role names the principal holds in one scope, sorted."""
        statement = self.statements.select(
            {
                holder_column(principal): principal.value,
                "scope_kind": scope.kind,
                "scope_id": scope.id,
            },
            columns=("role_name",),
            order_by=[("role_name", SortOrder.ASC)],
        )
        records = await self.database_service.fetch(statement.sql, *statement.args)
        return [r["role_name"] for r in records]

    async def exists_effective(self, user_id: UserId, scope: Scope, role: str) -> bool:
        """Direct grant to the user, or a grant to an active group they belong to."""
        require_identifier(user_id, UserId, "user_id")
        query = f"""
            SELECT EXISTS (
                SELECT 1 FROM {ROLE_GRANTS_TABLE.qualified_name} r
                WHERE r.user_id = $1
                  AND r.scope_kind = $2 AND r.scope_id = $3 AND r.role_name = $4
            ) OR EXISTS (
                SELECT 1
                FROM {ROLE_GRANTS_TABLE.qualified_name} r
                JOIN {MEMBERSHIPS_TABLE.qualified_name} m ON m.group_id = r.group_id
                JOIN {GROUPS_TABLE.qualified_name} g ON g.id = r.group_id
                WHERE m.user_id = $1 AND g.active
                  AND r.scope_kind = $2 AND r.scope_id = $3 AND r.role_name = $4
            )
        """
        result = await self.database_service.fetchval(
            query, user_id.value, scope.kind, scope.id, role
        )
        return bool(result)
