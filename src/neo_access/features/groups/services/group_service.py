"""Group service for business logic."""

import logging
from typing import Any, Optional

from ....core.exceptions import ValidationError
from ....core.value_objects import GroupId
from ..entities.group import Group
from ..repositories.group_repository import GroupRepository

logger = logging.getLogger(__name__)


class GroupService:
    """Service for group business logic."""

    def __init__(self, group_repository: GroupRepository):
        """Initialize group service."""
        self.group_repository = group_repository

    async def create_group(self, display_name: str, details: Optional[Any] = None) -> Group:
        """Create a group with a freshly generated id.

        Raises:
            ValidationError: display name is blank
            ConflictError: display name is already in use
        """
        if not isinstance(display_name, str) or not display_name.strip():
            raise ValidationError("Group display name is required")

        group = Group(id=GroupId.generate(), display_name=display_name, details=details)
        created = await self.group_repository.insert(group)
        logger.info(f"Created group {created.id} ({created.display_name})")
        return created

    async def get_group(self, group_id: GroupId) -> Optional[Group]:
        return await self.group_repository.get(group_id)

    async def get_group_by_display_name(self, display_name: str) -> Optional[Group]:
        return await self.group_repository.get_by_display_name(display_name)

    async def set_details(self, group_id: GroupId, details: Optional[Any]) -> bool:
        """Replace the group's profile payload wholesale."""
        return await self.group_repository.set_details(group_id, details)

    async def deactivate_group(self, group_id: GroupId) -> bool:
        """Soft-delete the group. Memberships are kept. Idempotent."""
        changed = await self.group_repository.deactivate(group_id)
        if changed:
            logger.info(f"Deactivated group {group_id}")
        return changed

    async def delete_group(self, group_id: GroupId) -> bool:
        """Hard-delete the group with its memberships and grants."""
        deleted = await self.group_repository.delete(group_id)
        if deleted:
            logger.warning(f"Deleted group {group_id}")
        return deleted
