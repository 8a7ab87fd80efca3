"""
Pydantic schemas for user-related requests and responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.core.schemas import CamelModel


class GroupRef(CamelModel):
    id: int
    name: str


class UserResponse(CamelModel):
    """Schema for user responses."""
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    collaborator_code: Optional[str] = None
    company_id: Optional[int] = None
    manager_id: Optional[int] = None
    role: Optional[str] = None
    group: Optional[GroupRef] = None
    active: bool
    status: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ChangeGroupRequest(CamelModel):
    """Move a user to the company group named ``role``."""
    id: int = Field(..., description="User ID")
    role: str = Field(..., min_length=1, max_length=100, description="Target group name")


class UpdateManagerRequest(CamelModel):
    """Assign (or clear, with null) a user's manager."""
    user_id: int
    manager_id: Optional[int] = None
