"""Membership domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.value_objects import GroupId, UserId


@dataclass(frozen=True)
class Membership:
    """A user's belonging to a group, carrying exactly one role label.

    The role label is local to the group and unrelated to scoped role grants.
    """

    group_id: GroupId
    user_id: UserId
    role_name: str
    added_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record) -> "Membership":
        return cls(
            group_id=GroupId(record["group_id"]),
            user_id=UserId(record["user_id"]),
            role_name=record["role_name"],
            added_at=record["added_at"],
        )
