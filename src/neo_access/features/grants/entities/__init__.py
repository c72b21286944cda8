"""Role grant entities."""

from .scope import Scope, GLOBAL_SCOPE
from .role_grant import RoleGrant

__all__ = ["Scope", "GLOBAL_SCOPE", "RoleGrant"]
