"""Role grant services."""

from .role_grant_service import RoleGrantService

__all__ = ["RoleGrantService"]
