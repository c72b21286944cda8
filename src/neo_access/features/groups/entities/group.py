"""Group domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ....core.value_objects import GroupId
from ....utils.datetime import utc_now


@dataclass
class Group:
    """A named set of users. Groups can hold role grants of their own."""

    id: GroupId
    display_name: str
    details: Optional[Any] = None
    active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_record(cls, record) -> "Group":
        """Build a group from a row of ``auth.groups``."""
        return cls(
            id=GroupId(record["id"]),
            display_name=record["display_name"],
            details=record["details"],
            active=record["active"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )
