"""Role grant service: the authorization core.

A grant is a (principal, scope kind, scope id, role) tuple. ``allow`` and
``revoke`` are idempotent so a retried instruction is always safe; two
concurrent ``allow`` calls for the same tuple both succeed because the
insert resolves conflicts with ``ON CONFLICT DO NOTHING``.

The ``*_global`` methods only substitute ``GLOBAL_SCOPE`` and delegate.
A grant made through them is the same row as one made by passing
``("global", "global")`` explicitly.
"""

import logging
from typing import List

from ....core.value_objects import UserId, Principal, require_identifier
from ..entities.role_grant import RoleGrant
from ..entities.scope import Scope, GLOBAL_SCOPE, require_name
from ..repositories.role_grant_repository import RoleGrantRepository, holder_column

logger = logging.getLogger(__name__)


class RoleGrantService:
    """Grants, revokes and answers questions about scoped roles."""

    def __init__(self, role_grant_repository: RoleGrantRepository):
        """Initialize role grant service."""
        self.role_grant_repository = role_grant_repository

    async def allow(self, principal: Principal, scope_kind: str, scope_id: str, role: str) -> None:
        """Grant ``role`` in the scope. Granting an existing grant is a no-op.

        Raises:
            UnknownPrincipalError: the user or group does not exist
        """
        holder_column(principal)
        scope = Scope(scope_kind, scope_id)
        require_name(role, "Role name")
        if await self.role_grant_repository.insert(principal, scope, role):
            logger.info(f"Granted {principal.kind} {principal} role '{role}' in {scope}")

    async def revoke(self, principal: Principal, scope_kind: str, scope_id: str, role: str) -> None:
        """Revoke ``role`` in the scope. Revoking a missing grant is a no-op."""
        holder_column(principal)
        scope = Scope(scope_kind, scope_id)
        require_name(role, "Role name")
        if await self.role_grant_repository.delete(principal, scope, role):
            logger.info(f"Revoked {principal.kind} {principal} role '{role}' in {scope}")

    async def has_role(self, principal: Principal, scope_kind: str, scope_id: str, role: str) -> bool:
        """True iff exactly this grant exists."""
        holder_column(principal)
        scope = Scope(scope_kind, scope_id)
        require_name(role, "Role name")
        return await self.role_grant_repository.exists(principal, scope, role)

    async def roles(self, principal: Principal) -> List[RoleGrant]:
        """Every grant the principal holds, ordered by (scope kind, scope id, role)."""
        holder_column(principal)
        return await self.role_grant_repository.list_for(principal)

    async def roles_in_scope(self, principal: Principal, scope_kind: str, scope_id: str) -> List[str]:
        """Role names held in one scope, ordered ascending."""
        holder_column(principal)
        return await self.role_grant_repository.roles_in_scope(principal, Scope(scope_kind, scope_id))

    async def allow_global(self, principal: Principal, role: str) -> None:
        await self.allow(principal, GLOBAL_SCOPE.kind, GLOBAL_SCOPE.id, role)

    async def revoke_global(self, principal: Principal, role: str) -> None:
        await self.revoke(principal, GLOBAL_SCOPE.kind, GLOBAL_SCOPE.id, role)

    async def has_global_role(self, principal: Principal, role: str) -> bool:
        return await self.has_role(principal, GLOBAL_SCOPE.kind, GLOBAL_SCOPE.id, role)

    async def global_roles(self, principal: Principal) -> List[str]:
        return await self.roles_in_scope(principal, GLOBAL_SCOPE.kind, GLOBAL_SCOPE.id)

    async def has_effective_role(self, user_id: UserId, scope_kind: str, scope_id: str, role: str) -> bool:
        """True if the user holds the role directly or via an active group.

        Only direct membership counts; groups do not nest.
        """
        require_identifier(user_id, UserId, "user_id")
        scope = Scope(scope_kind, scope_id)
        require_name(role, "Role name")
        return await self.role_grant_repository.exists_effective(user_id, scope, role)
