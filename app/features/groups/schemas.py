"""
Pydantic schemas for group requests and responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, Field

from app.core.schemas import CamelModel


class GroupRequest(CamelModel):
    """Schema for creating or renaming a group."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100, description="Group name")
    description: Optional[str] = Field(None, max_length=1000, description="Defaults to the name")


class GroupResponse(CamelModel):
    id: int
    company_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class GroupSummary(CamelModel):
    """Group row of the admin listing."""
    id: int
    name: str
    description: Optional[str] = None
    user_count: int = 0
