"""
Group lifecycle: create (with default access rights), rename, delete, list.
"""
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlreadyExistsError, NotEmptyError, NotFoundError
from app.features.access_rights.service import AccessRightService
from app.features.groups.models import Group
from app.features.groups.schemas import GroupRequest, GroupSummary
from app.features.users.models import User
from app.utils import get_logger


log = get_logger(__name__)


class GroupService:

    def __init__(self, db: AsyncSession, access_rights: AccessRightService):
        self.db = db
        self.access_rights = access_rights

    async def create_group(self, request: GroupRequest, company_id: Optional[int]) -> Group:
        """Create a group in ``company_id`` and seed its default access rights."""
        result = await self.db.execute(
            select(Group.id).where(Group.name == request.name, Group.company_id == company_id)
        )
        if result.first() is not None:
            raise AlreadyExistsError("Un groupe avec le même nom existe déjà.", name=request.name)

        group = Group(
            company_id=company_id,
            name=request.name,
            description=request.description or request.name,
        )
        self.db.add(group)
        await self.db.flush()
        log.info("Group %s created in company %s", group.name, company_id)

        await self.access_rights.create_default_access_rights(group)
        await self.db.refresh(group)
        return group

    async def rename_group(self, group_id: int, request: GroupRequest) -> Group:
        """
        Rename a group.

        The name collision check spans every company, unlike creation.
        """
        result = await self.db.execute(
            select(Group.id).where(Group.name == request.name, Group.id != group_id)
        )
        if result.first() is not None:
            raise AlreadyExistsError("Un groupe avec le même nom existe.", name=request.name)

        group = await self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Groupe n'existe pas", resource_type="group", resource_id=group_id)

        group.name = request.name
        group.description = request.description or request.name
        await self.db.flush()
        await self.db.refresh(group)
        log.info("Group %s renamed to %s", group_id, group.name)
        return group

    async def delete_group(self, group_id: int) -> None:
        """Delete an empty group together with its access rights."""
        group = await self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Groupe non trouvé", resource_type="group", resource_id=group_id)

        member_count = await self._count_users(group_id)
        if member_count:
            raise NotEmptyError("Groupe non vide", member_count=member_count)

        await self.access_rights.delete_group_access_rights(group_id)
        await self.db.delete(group)
        await self.db.flush()
        log.info("Group %s deleted", group_id)

    async def list_groups(self, company_id: Optional[int]) -> List[GroupSummary]:
        """Groups of a company with their member counts."""
        user_count = (
            select(User.group_id, func.count(User.id).label("user_count"))
            .group_by(User.group_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Group, func.coalesce(user_count.c.user_count, 0))
            .outerjoin(user_count, user_count.c.group_id == Group.id)
            .where(Group.company_id == company_id)
            .order_by(Group.id)
        )
        return [
            GroupSummary(
                id=group.id,
                name=group.name,
                description=group.description,
                user_count=count,
            )
            for group, count in result.all()
        ]

    async def _count_users(self, group_id: int) -> int:
        result = await self.db.execute(
            select(func.count(User.id)).where(User.group_id == group_id)
        )
        return result.scalar() or 0
