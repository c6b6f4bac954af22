"""
Pydantic schemas for project API endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .tag import TagResponse


class ProjectBase(BaseModel):
    """Base project schema."""

    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(default="", max_length=10000)
    is_public: bool = True


class ProjectCreate(ProjectBase):
    """Schema for creating projects."""

    tag_ids: list[UUID] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    """Schema for updating projects.

    An omitted or empty ``tag_ids`` keeps the project's current tags.
    """

    title: str | None = Field(None, min_length=5, max_length=255)
    description: str | None = Field(None, max_length=10000)
    is_public: bool | None = None
    tag_ids: list[UUID] | None = None


class ProjectResponse(ProjectBase):
    """Schema for project responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    slug: str
    tags: list[TagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
