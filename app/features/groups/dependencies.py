"""
FastAPI dependencies for the groups feature.
"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.access_rights.dependencies import get_access_right_service
from app.features.access_rights.service import AccessRightService
from app.features.groups.service import GroupService


async def get_group_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    access_rights: Annotated[AccessRightService, Depends(get_access_right_service)],
) -> GroupService:
    return GroupService(db, access_rights)
