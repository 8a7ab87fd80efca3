"""
Default groups and demo users for a fresh database.

Nothing is written when any group already exists.
"""
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.access_rights.catalog import ModuleCatalog
from app.features.access_rights.service import AccessRightService
from app.features.groups.models import Group
from app.features.users.models import User
from app.utils import get_logger


log = get_logger(__name__)


# (company_id, name, description)
DEFAULT_GROUPS = [
    (1, "Admin", "Administrateur système avec tous les droits"),
    (1, "Manager", "Manager avec droits étendus"),
    (1, "Formateur", "Formateur avec droits limités"),
    (1, "Collaborateur", "Collaborateur avec droits de base"),
    (1, "Employé", "Employé avec droits minimaux"),
    (2, "Admin", "Admin pour entreprise 2"),
]


# Demo users of company 1; "manager" refers to another entry by email
DEMO_USERS = [
    {
        "email": "admin@example.com",
        "first_name": "Baba Daouda",
        "last_name": "Prince",
        "position": "DG",
        "department": "Direction Administrative",
        "collaborator_code": "GS-022151",
        "role": "Admin",
    },
    {
        "email": "manager@example.com",
        "first_name": "Thomas Junior",
        "last_name": "Jude",
        "department": "Direction Administrative",
        "role": "Manager",
    },
    {
        "email": "formateur@example.com",
        "first_name": "Ahmed",
        "last_name": "Formateur",
        "department": "Formation",
        "role": "Formateur",
        "manager": "manager@example.com",
    },
    {
        "email": "collaborateur@example.com",
        "first_name": "Sandra",
        "last_name": "Aka",
        "position": "DRH",
        "department": "Service Commercial",
        "collaborator_code": "ATZ-022151",
        "role": "Collaborateur",
        "manager": "manager@example.com",
    },
    {
        "email": "employe@example.com",
        "first_name": "Boris",
        "last_name": "Samne",
        "position": "Agent Back office",
        "department": "Service Client",
        "role": "Employé",
        "manager": "manager@example.com",
    },
]


async def seed_groups(db: AsyncSession, catalog: ModuleCatalog) -> dict[tuple[int, str], Group]:
    """Create the default groups with their default access rights."""
    access_rights = AccessRightService(db, catalog)
    groups = {}

    for company_id, name, description in DEFAULT_GROUPS:
        group = Group(company_id=company_id, name=name, description=description)
        db.add(group)
        await db.flush()
        await access_rights.create_default_access_rights(group)
        groups[(company_id, name)] = group
        log.info(f"Created group {name} for company {company_id}")

    return groups


async def seed_users(db: AsyncSession, groups: dict[tuple[int, str], Group]) -> list[User]:
    """Create the demo users of company 1, managers first."""
    users: dict[str, User] = {}

    for entry in DEMO_USERS:
        fields = {key: value for key, value in entry.items() if key != "manager"}
        manager = users.get(entry.get("manager", ""))
        user = User(
            **fields,
            company_id=1,
            group_id=groups[(1, entry["role"])].id,
            manager_id=manager.id if manager else None,
            active=True,
            status="Actif",
        )
        db.add(user)
        await db.flush()
        users[user.email] = user
        log.info(f"Created user {user.email} ({user.role})")

    return list(users.values())


async def seed(db: AsyncSession, catalog: ModuleCatalog) -> bool:
    """
    Seed an empty database.

    Returns:
        True if data was created, False if groups already existed
    """
    result = await db.execute(select(func.count(Group.id)))
    if result.scalar():
        log.info("Data already present, skipping initialization")
        return False

    log.info("Initializing default groups and access rights...")
    groups = await seed_groups(db, catalog)
    await seed_users(db, groups)
    log.info("Initialization completed")
    return True
