"""
Access-right service.

Seeds a group's access rights from the default policy, serves and updates them
per module (backfilling actions that have no row yet), and answers permission
checks for users.

The service never commits: the request-scoped session from ``get_db`` commits
when the route returns and rolls back if anything raises.
"""
from typing import List, Mapping, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.features.access_rights.catalog import ModuleCatalog
from app.features.access_rights.models import AccessRight
from app.features.access_rights.policy import default_permission
from app.features.access_rights.schemas import (
    AccessRightItem,
    GroupAccessRightsResponse,
    PermissionCheckResponse,
    UpdateAccessRightsRequest,
)
from app.features.groups.models import Group
from app.features.users.models import User
from app.utils import get_logger


log = get_logger(__name__)


ADMIN_GRANTED = "Administrateur - Accès autorisé"
GRANTED = "Accès autorisé"
DENIED = "Accès refusé"


class AccessRightService:

    def __init__(self, db: AsyncSession, catalog: ModuleCatalog):
        self.db = db
        self.catalog = catalog

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def all_module_actions(self) -> dict[str, dict[str, str]]:
        return self.catalog.as_dict()

    def available_modules(self) -> list[str]:
        return self.catalog.available_modules()

    def module_actions(self, module: str) -> Mapping[str, str]:
        return self.catalog.module_actions(module)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    async def create_default_access_rights(self, group: Group) -> List[AccessRight]:
        """
        Insert one row per catalog (module, action) using the default policy.

        Rows are inserted unconditionally; calling this twice for the same
        group duplicates them.
        """
        log.info("Creating default access rights for group %s (%s)", group.id, group.name)

        rights = [
            AccessRight(
                group_id=group.id,
                module=module,
                action=action,
                allowed=default_permission(group.name, module, action),
            )
            for module, action in self.catalog.pairs()
        ]
        self.db.add_all(rights)
        await self.db.flush()
        return rights

    # ------------------------------------------------------------------
    # Retrieval / update
    # ------------------------------------------------------------------

    async def get_group_access_rights(self, group_id: int, module: str) -> GroupAccessRightsResponse:
        """
        Access rights of a group for one module.

        Catalog actions without a stored row are created with their default
        value before the response is built, so a read may write.
        """
        group = await self._get_group(group_id)

        result = await self.db.execute(
            select(AccessRight)
            .where(AccessRight.group_id == group_id, AccessRight.module == module)
            .order_by(AccessRight.id)
        )
        rights = list(result.scalars().all())
        actions = self.catalog.module_actions(module)

        existing = {right.action for right in rights}
        missing = [
            AccessRight(
                group_id=group.id,
                module=module,
                action=action,
                allowed=default_permission(group.name, module, action),
            )
            for action in actions
            if action not in existing
        ]
        if missing:
            log.info(
                "Backfilling %d access rights for group %s on module %s",
                len(missing), group_id, module,
            )
            self.db.add_all(missing)
            await self.db.flush()
            rights.extend(missing)

        return GroupAccessRightsResponse(
            group_id=group.id,
            group_name=group.name,
            module=module,
            access_rights=[
                AccessRightItem(
                    id=right.id,
                    action=right.action,
                    allowed=right.allowed,
                    action_label=actions.get(right.action),
                )
                for right in rights
            ],
        )

    async def update_access_rights(self, request: UpdateAccessRightsRequest) -> GroupAccessRightsResponse:
        log.info(
            "Updating access rights for group %s on module %s",
            request.group_id, request.module,
        )
        group = await self._get_group(request.group_id)

        # Session does not autoflush; remember rows created for repeated actions
        touched: dict[str, AccessRight] = {}
        for update in request.access_rights:
            right = touched.get(update.action)
            if right is None:
                right = await self._find(group.id, request.module, update.action)
            if right is None:
                right = AccessRight(group_id=group.id, module=request.module, action=update.action)
                self.db.add(right)
            right.allowed = update.allowed
            touched[update.action] = right

        await self.db.flush()
        return await self.get_group_access_rights(request.group_id, request.module)

    # ------------------------------------------------------------------
    # Permission check
    # ------------------------------------------------------------------

    async def check_permission(self, user_id: int, module: str, action: str) -> PermissionCheckResponse:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("Utilisateur non trouvé", resource_type="user", resource_id=user_id)

        if user.is_admin:
            return PermissionCheckResponse(has_permission=True, message=ADMIN_GRANTED)

        right = None
        if user.group_id is not None:
            right = await self._find(user.group_id, module, action)

        has_permission = right is not None and bool(right.allowed)
        log.debug(
            "Permission %s on %s for user %s: %s",
            action, module, user_id, "granted" if has_permission else "denied",
        )
        return PermissionCheckResponse(
            has_permission=has_permission,
            message=GRANTED if has_permission else DENIED,
        )

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    async def delete_group_access_rights(self, group_id: int) -> int:
        log.info("Deleting access rights for group %s", group_id)
        result = await self.db.execute(
            delete(AccessRight)
            .where(AccessRight.group_id == group_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_group(self, group_id: int) -> Group:
        group = await self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Groupe non trouvé", resource_type="group", resource_id=group_id)
        return group

    async def _find(self, group_id: int, module: str, action: str) -> Optional[AccessRight]:
        result = await self.db.execute(
            select(AccessRight)
            .where(
                AccessRight.group_id == group_id,
                AccessRight.module == module,
                AccessRight.action == action,
            )
            .order_by(AccessRight.id)
        )
        return result.scalars().first()
