"""
Pydantic schemas for access-right requests and responses.
"""
from typing import List, Optional
from pydantic import Field

from app.core.schemas import CamelModel


# ============================================================================
# Group access rights
# ============================================================================

class AccessRightItem(CamelModel):
    """One action of a module with its flag and display label."""
    id: Optional[int] = None
    action: str
    allowed: bool
    action_label: Optional[str] = None


class GroupAccessRightsResponse(CamelModel):
    """Access rights of one group for one module."""
    group_id: int
    group_name: str
    module: str
    access_rights: List[AccessRightItem] = []


class AccessRightUpdate(CamelModel):
    """New flag for one action."""
    action: str = Field(..., min_length=1, max_length=100)
    allowed: bool


class UpdateAccessRightsRequest(CamelModel):
    """Overrides for some actions of one module of one group."""
    group_id: int
    module: str = Field(..., min_length=1, max_length=100)
    access_rights: List[AccessRightUpdate] = []


# ============================================================================
# Permission check
# ============================================================================

class PermissionCheckRequest(CamelModel):
    """Does ``user_id`` have ``action`` on ``module``?"""
    user_id: int
    module: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


class PermissionCheckResponse(CamelModel):
    has_permission: bool
    message: str
