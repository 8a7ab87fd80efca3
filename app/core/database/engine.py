"""
Async engine and session handling.

``DATABASE_URL`` selects the backend: ``sqlite+aiosqlite`` by default,
``postgresql+asyncpg`` works without code changes once asyncpg is installed.
"""
from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from app.core import config
from app.utils import get_logger


log = get_logger(__name__)

IS_SQLITE = config.SQLALCHEMY_DATABASE_URL.startswith("sqlite")

engine = create_async_engine(
    config.SQLALCHEMY_DATABASE_URL,
    # aiosqlite connections are bound to the thread that opened them
    poolclass=NullPool if IS_SQLITE else None,
    echo=False,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session.

    Commits when the route returns and rolls back when anything raises, so
    services only ever flush.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the user, group and access-right tables if they do not exist."""
    from app.core.database.base import Base

    # Register the mappers before create_all
    from app.features.users.models import User  # noqa: F401
    from app.features.groups.models import Group  # noqa: F401
    from app.features.access_rights.models import AccessRight  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.debug("Tables ready on %s", engine.url.render_as_string(hide_password=True))
