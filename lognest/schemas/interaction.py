"""
Pydantic schemas for likes and comments.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LikeCreate(BaseModel):
    """Schema for liking a log."""

    log_id: UUID


class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_profile_id: UUID
    log_id: UUID
    created_at: datetime


class CommentCreate(BaseModel):
    """Schema for creating comments."""

    log_id: UUID
    body: str = Field(..., min_length=1, max_length=255)


class CommentUpdate(BaseModel):
    """Schema for updating comments."""

    body: str = Field(..., min_length=1, max_length=255)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_profile_id: UUID
    log_id: UUID
    body: str
    created_at: datetime
    updated_at: datetime
