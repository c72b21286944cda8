"""Self-service response models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ...audit.entities.audit_entry import AuditEntry
from ...groups.entities.group import Group
from ...users.entities.user import User


class UserResponse(BaseModel):
    """The caller's own user record."""

    id: str = Field(..., description="User ID")
    username: Optional[str] = Field(None, description="Username")
    email: str = Field(..., description="Email address")
    details: Optional[Any] = Field(None, description="Profile payload")
    active: bool = Field(..., description="Whether the user is active")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            details=user.details,
            active=user.active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class GroupSummaryResponse(BaseModel):
    """A group the caller belongs to."""

    id: str = Field(..., description="Group ID")
    name: str = Field(..., description="Group display name")

    @classmethod
    def from_entity(cls, group: Group) -> "GroupSummaryResponse":
        return cls(id=str(group.id), name=group.display_name)


class RoleNameResponse(BaseModel):
    """A global role held by the caller."""

    name: str = Field(..., description="Role name")


class AuditEntryResponse(BaseModel):
    """One entry of the caller's audit trail."""

    id: str = Field(..., description="Entry ID")
    action: Any = Field(..., description="Action payload")
    occurred_at: datetime = Field(..., description="When the action happened")

    @classmethod
    def from_entity(cls, entry: AuditEntry) -> "AuditEntryResponse":
        return cls(id=str(entry.id), action=entry.action, occurred_at=entry.occurred_at)
