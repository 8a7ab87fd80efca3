"""
User feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.exceptions import NotFoundError, ValidationFailedError
from app.features.groups.models import Group
from app.features.users.models import User
from app.features.users.schemas import UserResponse, ChangeGroupRequest, UpdateManagerRequest
from app.features.users.dependencies import get_current_user, get_current_admin_user
from app.utils import get_logger


log = get_logger(__name__)
router = APIRouter()


async def _get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("Utilisateur non trouvé", resource_type="user", resource_id=user_id)
    return user


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    user: Annotated[User, Depends(get_current_user)]
):
    """Get current authenticated user's profile."""
    return user


@router.get("/", response_model=list[UserResponse])
async def list_users(
    admin: Annotated[User, Depends(get_current_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: int = 0,
    limit: int = 100
):
    """List the users of the administrator's company."""
    result = await db.execute(
        select(User)
        .where(User.company_id == admin.company_id)
        .order_by(User.id)
        .offset(skip)
        .limit(limit)
    )
    return result.scalars().all()


@router.put("/change-role", response_model=UserResponse)
async def change_user_group(
    change: ChangeGroupRequest,
    admin: Annotated[User, Depends(get_current_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Move a user to another group of the same company; the role label follows the group name."""
    user = await _get_user(db, change.id)

    result = await db.execute(
        select(Group).where(Group.name == change.role, Group.company_id == user.company_id)
    )
    group = result.scalars().first()
    if group is None:
        raise NotFoundError("Groupe non trouvé", resource_type="group")

    user.group = group
    user.role = group.name
    await db.flush()
    await db.refresh(user)
    log.info("User %s moved to group %s", user.id, group.name)
    return user


@router.put("/update-manager", response_model=UserResponse)
async def update_user_manager(
    update: UpdateManagerRequest,
    admin: Annotated[User, Depends(get_current_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Assign or clear the manager of a user."""
    user = await _get_user(db, update.user_id)

    if update.manager_id is not None:
        if update.manager_id == user.id:
            raise ValidationFailedError("Un utilisateur ne peut pas être son propre manager", field="managerId")
        await _get_user(db, update.manager_id)

    user.manager_id = update.manager_id
    await db.flush()
    await db.refresh(user)
    log.info("User %s manager set to %s", user.id, update.manager_id)
    return user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_by_id(
    user_id: int,
    admin: Annotated[User, Depends(get_current_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Get a user by ID."""
    return await _get_user(db, user_id)
