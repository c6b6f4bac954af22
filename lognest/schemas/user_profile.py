"""
Pydantic schemas for user profiles.
"""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserProfileCreate(BaseModel):
    bio: str = Field(default="", max_length=5000)


class UserProfileUpdate(BaseModel):
    bio: str = Field(..., max_length=5000)


class AuthUser(BaseModel):
    """User record as returned by the auth provider."""

    id: UUID
    email: str
    first_name: str = ""
    last_name: str = ""
    avatar_path: str = ""
    email_verified: bool = False


class UserProfileResponse(BaseModel):
    """Schema for profile responses."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID = Field(
        validation_alias=AliasChoices("user_id", "id"), serialization_alias="id"
    )
    bio: str
    follower_count: int
    following_count: int
    created_at: datetime
    updated_at: datetime
    user: AuthUser | None = None
