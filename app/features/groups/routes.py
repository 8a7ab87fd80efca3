"""
Group API routes (admin only).

Groups are scoped to the company of the calling administrator.
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, Response, status

from app.features.users.dependencies import get_current_admin_user
from app.features.users.models import User
from app.features.groups.dependencies import get_group_service
from app.features.groups.service import GroupService
from app.features.groups.schemas import GroupRequest, GroupResponse, GroupSummary


router = APIRouter()


@router.get("/", response_model=List[GroupSummary])
async def list_groups(
    service: Annotated[GroupService, Depends(get_group_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """List the company's groups with their user counts."""
    return await service.list_groups(admin.company_id)


@router.post("/", response_model=GroupResponse)
async def create_group(
    group: GroupRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Create a group and its default access rights."""
    return await service.create_group(group, admin.company_id)


@router.put("/{group_id}", response_model=GroupResponse)
async def rename_group(
    group_id: int,
    group: GroupRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Rename a group."""
    return await service.rename_group(group_id, group)


@router.delete("/{group_id}", status_code=status.HTTP_200_OK)
async def delete_group(
    group_id: int,
    service: Annotated[GroupService, Depends(get_group_service)],
    admin: Annotated[User, Depends(get_current_admin_user)],
):
    """Delete a group that has no users."""
    await service.delete_group(group_id)
    return Response(status_code=status.HTTP_200_OK)
