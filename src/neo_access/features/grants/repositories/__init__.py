"""Role grant repositories."""

from .role_grant_repository import RoleGrantRepository

__all__ = ["RoleGrantRepository"]
