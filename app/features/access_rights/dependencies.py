"""
FastAPI dependencies for the access-rights feature.
"""
from typing import Annotated
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.access_rights.catalog import ModuleCatalog
from app.features.access_rights.service import AccessRightService


def get_module_catalog(request: Request) -> ModuleCatalog:
    """The catalog the application was started with."""
    return request.app.state.module_catalog


async def get_access_right_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    catalog: Annotated[ModuleCatalog, Depends(get_module_catalog)],
) -> AccessRightService:
    return AccessRightService(db, catalog)
