"""Membership service for business logic."""

import logging
from typing import List, Optional

from ....core.exceptions import ValidationError
from ....core.value_objects import GroupId, UserId, PageWindow, require_identifier
from ...groups.entities.group import Group
from ..entities.membership import Membership
from ..repositories.membership_repository import MembershipRepository

logger = logging.getLogger(__name__)


class MembershipService:
    """Service for the user/group membership relation."""

    def __init__(self, membership_repository: MembershipRepository):
        """Initialize membership service."""
        self.membership_repository = membership_repository

    async def add_member(self, group_id: GroupId, user_id: UserId, role_name: str) -> Membership:
        """Add a user to a group with a role label.

        There is no upsert: to change a member's role, remove them first.

        Raises:
            ConflictError: the user is already a member
            UnknownPrincipalError: the group or the user does not exist
        """
        require_identifier(group_id, GroupId, "group_id")
        require_identifier(user_id, UserId, "user_id")
        if not isinstance(role_name, str) or not role_name:
            raise ValidationError("Membership role label is required")

        membership = await self.membership_repository.add(group_id, user_id, role_name)
        logger.info(f"User {user_id} joined group {group_id} as '{role_name}'")
        return membership

    async def remove_member(self, group_id: GroupId, user_id: UserId) -> bool:
        """Remove a user from a group. Absent memberships are ignored.

        Returns whether a membership was actually removed.
        """
        require_identifier(group_id, GroupId, "group_id")
        require_identifier(user_id, UserId, "user_id")
        removed = await self.membership_repository.remove(group_id, user_id)
        if removed:
            logger.info(f"User {user_id} removed from group {group_id}")
        return removed

    async def is_member(self, group_id: GroupId, user_id: UserId) -> bool:
        require_identifier(group_id, GroupId, "group_id")
        require_identifier(user_id, UserId, "user_id")
        return await self.membership_repository.exists(group_id, user_id)

    async def has_role(self, group_id: GroupId, user_id: UserId, role_name: str) -> bool:
        """True iff the membership exists and carries exactly ``role_name``."""
        require_identifier(group_id, GroupId, "group_id")
        require_identifier(user_id, UserId, "user_id")
        return await self.membership_repository.exists(group_id, user_id, role_name)

    async def list_members(
        self,
        group_id: GroupId,
        window: Optional[PageWindow] = None
    ) -> List[Membership]:
        """Members in insertion order; the full list when ``window`` is None."""
        require_identifier(group_id, GroupId, "group_id")
        return await self.membership_repository.list_for_group(group_id, window)

    async def groups_for_user(self, user_id: UserId) -> List[Group]:
        """Active groups the user belongs to."""
        return await self.membership_repository.active_groups_for_user(user_id)
