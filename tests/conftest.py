"""Shared pytest fixtures for backend tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

# Configure the app before anything imports app.core.config
_DB_DIR = tempfile.mkdtemp(prefix="access-rights-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.sqlite'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["CHECK_PERMISSION_RATE_LIMIT"] = "20/minute"
os.environ.pop("SEED_ON_STARTUP", None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.core.database.base import Base  # noqa: E402
from app.core.database.engine import AsyncSessionLocal, engine, init_db  # noqa: E402
from app.core.rate_limit import limiter  # noqa: E402
from app.features.access_rights.catalog import ModuleCatalog, build_catalog  # noqa: E402
from app.features.access_rights.service import AccessRightService  # noqa: E402
from app.features.groups.service import GroupService  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from tests.utils import auth_headers, create_group, create_user  # noqa: E402


@pytest_asyncio.fixture()
async def clean_database() -> AsyncIterator[None]:
    """Recreate every table before each test."""

    await init_db()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def catalog() -> ModuleCatalog:
    return build_catalog()


@pytest_asyncio.fixture()
async def db_session(clean_database: None) -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture()
def access_right_service(db_session: AsyncSession, catalog: ModuleCatalog) -> AccessRightService:
    return AccessRightService(db_session, catalog)


@pytest.fixture()
def group_service(db_session: AsyncSession, access_right_service: AccessRightService) -> GroupService:
    return GroupService(db_session, access_right_service)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI, clean_database: None) -> AsyncIterator[AsyncClient]:
    """Provide an HTTPX async client bound to the FastAPI app."""

    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture()
async def seed_company(db_session: AsyncSession, catalog: ModuleCatalog) -> dict[str, Any]:
    """Company 1 with seeded Admin/Manager/Employé groups and one user in each."""

    service = AccessRightService(db_session, catalog)
    admin_group = await create_group(db_session, "Admin")
    manager_group = await create_group(db_session, "Manager")
    employee_group = await create_group(db_session, "Employé")
    for group in (admin_group, manager_group, employee_group):
        await service.create_default_access_rights(group)

    admin = await create_user(db_session, "admin@example.com", "Admin", admin_group)
    manager = await create_user(db_session, "manager@example.com", "Manager", manager_group)
    employee = await create_user(db_session, "employee@example.com", "Employé", employee_group)
    await db_session.commit()

    return {
        "admin": admin,
        "manager": manager,
        "employee": employee,
        "admin_group": admin_group,
        "manager_group": manager_group,
        "employee_group": employee_group,
        "admin_headers": auth_headers(admin.id),
        "manager_headers": auth_headers(manager.id),
        "employee_headers": auth_headers(employee.id),
    }
