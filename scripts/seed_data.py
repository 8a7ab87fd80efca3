"""
Seed script to populate the default groups, their access rights and demo users.

Run this script against an empty database; it does nothing if groups exist.

Usage:
    python -m scripts.seed_data
"""
import asyncio

from app.core.database.engine import get_db, init_db
from app.features.access_rights.catalog import build_catalog
from app.seed import DEFAULT_GROUPS, seed
from app.utils import get_logger


log = get_logger(__name__)


async def main():
    """Create tables, then seed them."""
    log.info("Starting seeding...")

    log.info("Initializing database tables...")
    await init_db()

    catalog = build_catalog()

    async for db in get_db():
        try:
            created = await seed(db, catalog)
            await db.commit()
        except Exception as e:
            log.error(f"Error seeding data: {e}", exc_info=True)
            await db.rollback()
            raise

        if created:
            log.info("Default groups created:")
            for company_id, name, description in DEFAULT_GROUPS:
                log.info(f"  - [{company_id}] {name}: {description}")
        break


if __name__ == "__main__":
    asyncio.run(main())
