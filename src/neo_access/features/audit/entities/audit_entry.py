"""Audit entry domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from ....core.value_objects import UserId


@dataclass(frozen=True)
class AuditEntry:
    """One append-only record of an action.

    ``user_id`` is None when the action was not attributed or the acting
    user has since been deleted.
    """

    id: UUID
    user_id: Optional[UserId]
    action: Any
    occurred_at: datetime

    @classmethod
    def from_record(cls, record) -> "AuditEntry":
        user_id = record["user_id"]
        return cls(
            id=record["id"],
            user_id=UserId(user_id) if user_id is not None else None,
            action=record["action"],
            occurred_at=record["occurred_at"],
        )
