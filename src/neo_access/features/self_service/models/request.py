"""
Self-service request models.
"""

from pydantic import BaseModel, Field


class LeaveGroupRequest(BaseModel):
    """Request model for leaving a group.

    ``group_id`` stays text here; it is parsed by the endpoint so a malformed
    value is reported as a bad request rather than a schema error.
    """

    group_id: str = Field(..., description="Identifier of the group to leave")
