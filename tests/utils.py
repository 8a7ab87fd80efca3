"""Helpers shared by the test modules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.access_rights.models import AccessRight
from app.features.groups.models import Group
from app.features.users.models import User


TEST_JWT_SECRET = "test-secret"


async def create_group(db: AsyncSession, name: str, company_id: int = 1) -> Group:
    group = Group(company_id=company_id, name=name, description=name)
    db.add(group)
    await db.flush()
    return group


async def create_user(
    db: AsyncSession,
    email: str,
    role: str,
    group: Group | None = None,
    company_id: int = 1,
    **fields: Any,
) -> User:
    user = User(
        email=email,
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", role),
        company_id=company_id,
        role=role,
        group_id=group.id if group else None,
        active=fields.pop("active", True),
        **fields,
    )
    db.add(user)
    await db.flush()
    return user


async def count_access_rights(db: AsyncSession, group_id: int, module: str | None = None) -> int:
    stmt = select(func.count(AccessRight.id)).where(AccessRight.group_id == group_id)
    if module is not None:
        stmt = stmt.where(AccessRight.module == module)
    result = await db.execute(stmt)
    return result.scalar() or 0


def make_token(user_id: Any, expires_in: timedelta = timedelta(minutes=5), **claims: Any) -> str:
    payload = {"userId": user_id, "exp": datetime.now(timezone.utc) + expires_in, **claims}
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}
