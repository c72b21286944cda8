"""Self-service request and response models."""

from .request import LeaveGroupRequest
from .response import UserResponse, GroupSummaryResponse, RoleNameResponse, AuditEntryResponse

__all__ = [
    "LeaveGroupRequest",
    "UserResponse",
    "GroupSummaryResponse",
    "RoleNameResponse",
    "AuditEntryResponse",
]
