"""
Business logic service for user profiles.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.exceptions import ResourceConflictError, ResourceNotFoundError
from lognest.core.logging import get_logger
from lognest.db.models import UserProfile
from lognest.db.repository import Repository
from lognest.db.session import transaction
from lognest.schemas.user_profile import UserProfileResponse, UserProfileUpdate

from .auth_service import AuthServiceClient

logger = get_logger(__name__)

profiles = Repository(UserProfile, primary_key="user_id")


class UserProfileService:
    """Service for user profile management."""

    @staticmethod
    async def create_profile(db: AsyncSession, user_id: UUID, bio: str = "") -> UserProfile:
        """
        Create the local profile for an auth-provider user.

        Raises:
            ResourceConflictError: If a profile already exists for the user
        """
        if await db.get(UserProfile, user_id) is not None:
            raise ResourceConflictError(f"Profile for user {user_id} already exists")

        async with transaction(db):
            profile = profiles.add(
                db, user_id=user_id, bio=bio, follower_count=0, following_count=0
            )

        logger.info("profile_created", user_id=str(user_id))
        return profile

    @staticmethod
    async def get_profile(db: AsyncSession, user_id: UUID) -> UserProfile:
        profile = await profiles.get(db, user_id)
        if not profile:
            raise ResourceNotFoundError("User profile not found")
        return profile

    @staticmethod
    async def update_profile(
        db: AsyncSession, user_id: UUID, profile_data: UserProfileUpdate
    ) -> UserProfile:
        profile = await UserProfileService.get_profile(db, user_id)

        async with transaction(db):
            profile.bio = profile_data.bio

        logger.info("profile_updated", user_id=str(user_id))
        return profile

    @staticmethod
    async def get_current_profile(
        db: AsyncSession, client: AuthServiceClient, authorization: str
    ) -> UserProfileResponse:
        """
        Look up the caller at the auth provider and merge in the local profile.

        Args:
            db: Database session
            client: Auth provider client
            authorization: The caller's ``Authorization`` header, forwarded as is

        Returns:
            UserProfileResponse: Local profile with the provider's user record

        Raises:
            ExternalServiceError: If the provider lookup fails
            ResourceNotFoundError: If no local profile exists for the user
        """
        user = await client.get_user(authorization)
        profile = await UserProfileService.get_profile(db, user.id)

        response = UserProfileResponse.model_validate(profile)
        return response.model_copy(update={"user": user})
