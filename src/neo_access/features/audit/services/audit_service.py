"""Audit service."""

import logging
from typing import Any, List, Optional

from ....core.value_objects import UserId, PageWindow, require_identifier
from ....utils.datetime import utc_now
from ....utils.uuid import generate_uuid_v7
from ..entities.audit_entry import AuditEntry
from ..repositories.audit_repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    """Records principal-attributed actions.

    The stores never write audit entries on their own; callers that want a
    trail call ``record`` explicitly.
    """

    def __init__(self, audit_repository: AuditRepository):
        """Initialize audit service."""
        self.audit_repository = audit_repository

    async def record(self, user_id: Optional[UserId], action: Any) -> AuditEntry:
        """Append an entry with a generated id and the current UTC time."""
        if user_id is not None:
            require_identifier(user_id, UserId, "user_id")
        entry = AuditEntry(
            id=generate_uuid_v7(),
            user_id=user_id,
            action=action,
            occurred_at=utc_now(),
        )
        stored = await self.audit_repository.append(entry)
        logger.debug(f"Recorded audit entry {stored.id} for {user_id}")
        return stored

    async def events_for(
        self,
        user_id: UserId,
        window: Optional[PageWindow] = None
    ) -> List[AuditEntry]:
        """The user's audit trail, newest first."""
        require_identifier(user_id, UserId, "user_id")
        return await self.audit_repository.list_for_user(user_id, window)
