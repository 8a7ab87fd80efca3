"""
Access-right API routes.

Everything except the permission check requires the Admin authority.
"""
from typing import Annotated, Dict
from fastapi import APIRouter, Depends, Request, Response, status

from app.core import config
from app.core.rate_limit import limiter
from app.features.users.dependencies import get_current_user, get_current_admin_user
from app.features.users.models import User
from app.features.access_rights.dependencies import get_access_right_service
from app.features.access_rights.service import AccessRightService
from app.features.access_rights.schemas import (
    GroupAccessRightsResponse,
    UpdateAccessRightsRequest,
    PermissionCheckRequest,
    PermissionCheckResponse,
)


router = APIRouter()


@router.get("/group/{group_id}/module/{module}", response_model=GroupAccessRightsResponse)
async def get_group_access_rights(
    group_id: int,
    module: str,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Get a group's access rights for one module, creating missing ones with defaults."""
    return await service.get_group_access_rights(group_id, module)


@router.put("/update", response_model=GroupAccessRightsResponse)
async def update_access_rights(
    update_request: UpdateAccessRightsRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Override some actions of a group's module and return the full module state."""
    return await service.update_access_rights(update_request)


@router.post("/check-permission", response_model=PermissionCheckResponse)
@limiter.limit(config.CHECK_PERMISSION_RATE_LIMIT)
async def check_permission(
    request: Request,
    check_request: PermissionCheckRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Check whether a user may perform an action on a module."""
    return await service.check_permission(
        check_request.user_id,
        check_request.module,
        check_request.action,
    )


@router.get("/modules-actions", response_model=Dict[str, Dict[str, str]])
async def get_all_module_actions(
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """All modules with their actions and labels."""
    return service.all_module_actions()


@router.delete("/group/{group_id}", status_code=status.HTTP_200_OK)
async def delete_group_access_rights(
    group_id: int,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Delete every access right of a group."""
    await service.delete_group_access_rights(group_id)
    return Response(status_code=status.HTTP_200_OK)
