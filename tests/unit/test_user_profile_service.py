"""
Unit tests for UserProfileService.
"""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.exceptions import (
    ExternalServiceError,
    ResourceConflictError,
    ResourceNotFoundError,
)
from lognest.schemas.user_profile import UserProfileUpdate
from lognest.services.user_profile_service import UserProfileService


def _provider_user(user_id) -> dict:
    return {
        "id": str(user_id),
        "email": "writer@example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "avatar_path": "avatars/ada.png",
        "email_verified": True,
    }


class TestUserProfileService:
    """Test suite for UserProfileService."""

    async def test_create_profile(self, db_session: AsyncSession):
        user_id = uuid4()

        profile = await UserProfileService.create_profile(db_session, user_id, bio="Hello")

        assert profile.user_id == user_id
        assert profile.bio == "Hello"
        assert profile.follower_count == 0
        assert profile.following_count == 0

    async def test_create_profile_twice_conflicts(self, db_session: AsyncSession, test_profile):
        with pytest.raises(ResourceConflictError, match="already exists"):
            await UserProfileService.create_profile(db_session, test_profile.user_id)

    async def test_get_profile(self, db_session: AsyncSession, test_profile):
        profile = await UserProfileService.get_profile(db_session, test_profile.user_id)

        assert profile.bio == "Writes about compilers"

    async def test_get_missing_profile(self, db_session: AsyncSession):
        with pytest.raises(ResourceNotFoundError, match="User profile not found"):
            await UserProfileService.get_profile(db_session, uuid4())

    async def test_update_profile(self, db_session: AsyncSession, test_profile):
        profile = await UserProfileService.update_profile(
            db_session, test_profile.user_id, UserProfileUpdate(bio="Now writes about GPUs")
        )

        assert profile.bio == "Now writes about GPUs"

    async def test_get_current_profile_merges_provider_user(
        self, db_session: AsyncSession, test_profile, auth_client, auth_provider
    ):
        """Test that the provider's user record is attached to the local profile."""
        auth_provider.respond(
            "GET", "/api/auth/user", json={"data": _provider_user(test_profile.user_id)}
        )

        response = await UserProfileService.get_current_profile(
            db_session, auth_client, "Bearer token-123"
        )

        assert auth_provider.last_request.headers["Authorization"] == "Bearer token-123"
        assert response.user_id == test_profile.user_id
        assert response.bio == "Writes about compilers"
        assert response.user.first_name == "Ada"
        assert response.model_dump(by_alias=True)["id"] == test_profile.user_id

    async def test_get_current_profile_without_local_profile(
        self, db_session: AsyncSession, auth_client, auth_provider
    ):
        auth_provider.respond("GET", "/api/auth/user", json={"data": _provider_user(uuid4())})

        with pytest.raises(ResourceNotFoundError):
            await UserProfileService.get_current_profile(db_session, auth_client, "Bearer t")

    async def test_get_current_profile_provider_rejects(
        self, db_session: AsyncSession, auth_client, auth_provider
    ):
        auth_provider.respond("GET", "/api/auth/user", status_code=401, json={"message": "no"})

        with pytest.raises(ExternalServiceError, match="get user"):
            await UserProfileService.get_current_profile(db_session, auth_client, "Bearer t")
