"""
Pydantic schemas for log API endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from lognest.db.models import MediaType

from .interaction import CommentResponse


class MediaBase(BaseModel):
    """Reference to a stored file attached to a log."""

    file_path: str = Field(..., min_length=1, max_length=255)
    thumbnail_path: str = Field(default="", max_length=255)
    type: MediaType
    sort_order: int = Field(default=0, ge=0)


class MediaResponse(MediaBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID


class LogCreate(BaseModel):
    """Schema for creating logs."""

    project_id: UUID
    content: str = Field(..., min_length=1)
    media: list[MediaBase] = Field(default_factory=list)


class LogUpdate(BaseModel):
    """Schema for updating logs.

    ``media`` replaces the attached media when given; omit it to keep them.
    """

    content: str | None = Field(None, min_length=1)
    media: list[MediaBase] | None = None


class LogResponse(BaseModel):
    """Schema for log responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_profile_id: UUID
    project_id: UUID
    content: str
    like_count: int
    comment_count: int
    media: list[MediaResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
