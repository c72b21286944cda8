"""Groups feature module."""

from .entities import Group
from .repositories import GroupRepository
from .services import GroupService

__all__ = ["Group", "GroupRepository", "GroupService"]
