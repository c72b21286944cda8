"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ....core.value_objects import UserId
from ....utils.datetime import utc_now


@dataclass
class User:
    """A principal that can authenticate, join groups and hold role grants.

    ``username`` is an optional handle; ``email`` is the required contact
    address. Both are unique. ``details`` is an opaque JSON payload that the
    store never interprets.
    """

    id: UserId
    email: str
    username: Optional[str] = None
    details: Optional[Any] = None
    active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_record(cls, record) -> "User":
        """Build a user from a row of ``auth.users``."""
        return cls(
            id=UserId(record["id"]),
            email=record["email"],
            username=record["username"],
            details=record["details"],
            active=record["active"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
        )
