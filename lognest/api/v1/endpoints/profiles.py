"""
User profile API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.api.v1.dependencies.auth import get_auth_client, get_current_user
from lognest.core.exceptions import ResourceNotFoundError
from lognest.core.security import TokenClaims
from lognest.db.session import get_db
from lognest.schemas.core import APIResponse
from lognest.schemas.user_profile import (
    UserProfileCreate,
    UserProfileResponse,
    UserProfileUpdate,
)
from lognest.services.auth_service import AuthServiceClient
from lognest.services.user_profile_service import UserProfileService


router = APIRouter()


@router.post("", response_model=APIResponse[UserProfileResponse], status_code=201)
async def create_profile(
    profile_data: UserProfileCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[UserProfileResponse]:
    """Create the caller's profile; 409 if it already exists."""
    profile = await UserProfileService.create_profile(
        db, current_user.user_id, bio=profile_data.bio
    )
    return APIResponse(
        message="user profile created", data=UserProfileResponse.model_validate(profile)
    )


@router.get("/me", response_model=APIResponse[UserProfileResponse])
async def get_my_profile(
    request: Request,
    db: AsyncSession = Depends(get_db),
    client: AuthServiceClient = Depends(get_auth_client),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[UserProfileResponse]:
    """
    Get the caller's profile merged with their auth-provider user record.

    The caller's Authorization header is forwarded to the provider unchanged.
    """
    profile = await UserProfileService.get_current_profile(
        db, client, request.headers["Authorization"]
    )
    return APIResponse(message="user profile retrieved", data=profile)


@router.get("/{user_id}", response_model=APIResponse[UserProfileResponse])
async def get_profile(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> APIResponse[UserProfileResponse]:
    profile = await UserProfileService.get_profile(db, user_id)
    return APIResponse(
        message="user profile retrieved", data=UserProfileResponse.model_validate(profile)
    )


@router.put("/{user_id}", response_model=APIResponse[UserProfileResponse])
async def update_profile(
    user_id: UUID,
    profile_data: UserProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[UserProfileResponse]:
    """Update a profile; callers can only edit their own."""
    if user_id != current_user.user_id:
        raise ResourceNotFoundError("User profile not found")

    profile = await UserProfileService.update_profile(db, user_id, profile_data)
    return APIResponse(
        message="user profile updated", data=UserProfileResponse.model_validate(profile)
    )
