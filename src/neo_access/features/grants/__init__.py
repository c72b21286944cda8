"""Scoped role grants feature module."""

from .entities import Scope, GLOBAL_SCOPE, RoleGrant
from .repositories import RoleGrantRepository
from .services import RoleGrantService

__all__ = ["Scope", "GLOBAL_SCOPE", "RoleGrant", "RoleGrantRepository", "RoleGrantService"]
