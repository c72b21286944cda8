"""
Current user (me) endpoints.

The caller is already resolved to a ``UserId`` by ``get_current_user_id``;
every endpoint here acts on that user only.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from loguru import logger

from ....config.constants import AuditActions
from ....config.settings import AccessSettings
from ....core.exceptions import NotFoundError
from ....core.value_objects import GroupId, UserId, PageWindow
from ....services import AccessServices
from ..dependencies import get_current_user_id, get_services, get_settings_dependency
from ..models.request import LeaveGroupRequest
from ..models.response import (
    UserResponse,
    GroupSummaryResponse,
    RoleNameResponse,
    AuditEntryResponse,
)

router = APIRouter(prefix="/auth/me", tags=["Self Service"])


@router.get(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile"
)
async def get_my_profile(
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services)
) -> UserResponse:
    user = await services.users.get_user(user_id)
    if user is None:
        logger.warning(f"Authenticated user {user_id} has no user record")
        raise NotFoundError("User")
    return UserResponse.from_entity(user)


@router.get(
    "/groups",
    response_model=List[GroupSummaryResponse],
    status_code=status.HTTP_200_OK,
    summary="List my groups",
    description="Active groups the current user is a member of"
)
async def list_my_groups(
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services)
) -> List[GroupSummaryResponse]:
    groups = await services.memberships.groups_for_user(user_id)
    return [GroupSummaryResponse.from_entity(g) for g in groups]


@router.get(
    "/permissions",
    response_model=List[RoleNameResponse],
    status_code=status.HTTP_200_OK,
    summary="List my global roles"
)
async def list_my_permissions(
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services)
) -> List[RoleNameResponse]:
    roles = await services.grants.global_roles(user_id)
    return [RoleNameResponse(name=role) for role in roles]


@router.get(
    "/events",
    response_model=List[AuditEntryResponse],
    status_code=status.HTTP_200_OK,
    summary="List my audit trail",
    description="Audit entries attributed to the current user, newest first"
)
async def list_my_events(
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    offset: int = Query(0, ge=0, description="Entries to skip"),
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services),
    settings: AccessSettings = Depends(get_settings_dependency)
) -> List[AuditEntryResponse]:
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    entries = await services.audit.events_for(user_id, PageWindow(page_size, offset))
    return [AuditEntryResponse.from_entity(e) for e in entries]


@router.post(
    "/deactivate",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Deactivate my account"
)
async def deactivate_me(
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services)
) -> Response:
    if await services.users.deactivate_user(user_id):
        await services.audit.record(user_id, {"type": AuditActions.SELF_DEACTIVATED})
        logger.info(f"User {user_id} deactivated their account")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Leave a group"
)
async def leave_group(
    request: LeaveGroupRequest,
    user_id: UserId = Depends(get_current_user_id),
    services: AccessServices = Depends(get_services)
) -> Response:
    group_id = GroupId.parse(request.group_id)
    if await services.memberships.remove_member(group_id, user_id):
        await services.audit.record(
            user_id, {"type": AuditActions.GROUP_LEFT, "group_id": str(group_id)}
        )
        logger.info(f"User {user_id} left group {group_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
