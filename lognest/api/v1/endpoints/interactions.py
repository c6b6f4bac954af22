"""
Like and comment API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.api.v1.dependencies.auth import get_current_user
from lognest.core.security import TokenClaims
from lognest.db.session import get_db
from lognest.schemas.core import APIResponse
from lognest.schemas.interaction import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    LikeCreate,
    LikeResponse,
)
from lognest.services.interaction_service import InteractionService


router = APIRouter()


@router.post("/likes", response_model=APIResponse[LikeResponse], status_code=201)
async def like_log(
    like_data: LikeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[LikeResponse]:
    """
    Like a log.

    Raises:
        ResourceNotFoundError: 404 if the log does not exist
        ResourceConflictError: 409 if the caller already likes it
    """
    like = await InteractionService.like_log(db, like_data.log_id, current_user.user_id)
    return APIResponse(message="like created", data=LikeResponse.model_validate(like))


@router.delete("/likes/{log_id}", response_model=APIResponse[None])
async def unlike_log(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[None]:
    await InteractionService.unlike_log(db, log_id, current_user.user_id)
    return APIResponse(message="like deleted")


@router.get("/likes/logs/{log_id}", response_model=APIResponse[list[LikeResponse]])
async def list_log_likes(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[list[LikeResponse]]:
    likes = await InteractionService.list_log_likes(db, log_id, current_user.user_id)
    return APIResponse(
        message="likes retrieved",
        data=[LikeResponse.model_validate(like) for like in likes],
    )


@router.post("/comments", response_model=APIResponse[CommentResponse], status_code=201)
async def create_comment(
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[CommentResponse]:
    comment = await InteractionService.create_comment(db, comment_data, current_user.user_id)
    return APIResponse(message="comment created", data=CommentResponse.model_validate(comment))


@router.put("/comments/{comment_id}", response_model=APIResponse[CommentResponse])
async def update_comment(
    comment_id: UUID,
    comment_data: CommentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[CommentResponse]:
    comment = await InteractionService.update_comment(
        db, comment_id, comment_data, current_user.user_id
    )
    return APIResponse(message="comment updated", data=CommentResponse.model_validate(comment))


@router.delete("/comments/{comment_id}", response_model=APIResponse[None])
async def delete_comment(
    comment_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[None]:
    await InteractionService.delete_comment(db, comment_id, current_user.user_id)
    return APIResponse(message="comment deleted")


@router.get("/comments/log/{log_id}", response_model=APIResponse[list[CommentResponse]])
async def list_log_comments(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[list[CommentResponse]]:
    comments = await InteractionService.list_log_comments(db, log_id, current_user.user_id)
    return APIResponse(
        message="comments retrieved",
        data=[CommentResponse.model_validate(comment) for comment in comments],
    )
