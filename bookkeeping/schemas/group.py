"""
Pydantic schemas for ledger groups.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    parent_group_id: int | None = None


class GroupUpdate(BaseModel):
    """Partial update. Only fields present in the request are changed."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    parent_group_id: int | None = None


class GroupResponse(BaseModel):
    id: int
    name: str
    description: str | None
    parent_group_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
