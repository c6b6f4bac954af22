"""
Business logic service for likes and comments.

Each write keeps the denormalized ``like_count`` / ``comment_count`` on the
log in step, inside the same transaction.
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.exceptions import ResourceConflictError, ResourceNotFoundError
from lognest.core.ids import new_id
from lognest.core.logging import get_logger
from lognest.db.models import Comment, Like, Log
from lognest.db.repository import Repository
from lognest.db.session import transaction
from lognest.schemas.interaction import CommentCreate, CommentUpdate

from .log_service import LogService

logger = get_logger(__name__)

comments = Repository(Comment)


async def _bump(db: AsyncSession, log_id: UUID, column: str, delta: int) -> None:
    counter = getattr(Log, column)
    await db.execute(
        update(Log)
        .where(Log.id == log_id)
        .values({column: counter + delta})
    )


class InteractionService:
    """Service for likes and comments on logs."""

    @staticmethod
    async def _ensure_log(db: AsyncSession, log_id: UUID, viewer_id: UUID) -> None:
        # Same visibility as reading the log itself
        await LogService.get_log(db, log_id, viewer_id)

    @staticmethod
    async def like_log(db: AsyncSession, log_id: UUID, user_id: UUID) -> Like:
        """
        Like a log on behalf of ``user_id``.

        Raises:
            ResourceNotFoundError: If log not found or not visible
            ResourceConflictError: If the user already likes the log
        """
        await InteractionService._ensure_log(db, log_id, user_id)

        if await db.get(Like, (user_id, log_id)) is not None:
            raise ResourceConflictError("Log already liked")

        like = Like(user_profile_id=user_id, log_id=log_id)
        try:
            async with transaction(db):
                db.add(like)
                await db.flush()
                await _bump(db, log_id, "like_count", 1)
        except IntegrityError as e:
            raise ResourceConflictError("Log already liked") from e

        logger.info("log_liked", log_id=str(log_id), user_id=str(user_id))
        return like

    @staticmethod
    async def unlike_log(db: AsyncSession, log_id: UUID, user_id: UUID) -> None:
        """
        Remove the user's like from a log.

        Raises:
            ResourceNotFoundError: If the user does not like the log
        """
        like = await db.get(Like, (user_id, log_id))
        if like is None:
            raise ResourceNotFoundError("Like not found")

        async with transaction(db):
            await db.delete(like)
            await _bump(db, log_id, "like_count", -1)

        logger.info("log_unliked", log_id=str(log_id), user_id=str(user_id))

    @staticmethod
    async def list_log_likes(
        db: AsyncSession, log_id: UUID, viewer_id: UUID
    ) -> list[Like]:
        await InteractionService._ensure_log(db, log_id, viewer_id)
        result = await db.execute(
            select(Like).where(Like.log_id == log_id).order_by(Like.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_comment(
        db: AsyncSession, comment_data: CommentCreate, user_id: UUID
    ) -> Comment:
        """
        Comment on a log.

        Args:
            db: Database session
            comment_data: Comment creation data
            user_id: Author of the comment

        Returns:
            Comment: Created comment

        Raises:
            ResourceNotFoundError: If log not found or not visible
        """
        await InteractionService._ensure_log(db, comment_data.log_id, user_id)

        async with transaction(db):
            comment = comments.add(
                db,
                id=new_id(),
                user_profile_id=user_id,
                log_id=comment_data.log_id,
                body=comment_data.body,
            )
            await db.flush()
            await _bump(db, comment_data.log_id, "comment_count", 1)

        logger.info(
            "comment_created", comment_id=str(comment.id), log_id=str(comment.log_id)
        )
        return comment

    @staticmethod
    async def update_comment(
        db: AsyncSession, comment_id: UUID, comment_data: CommentUpdate, user_id: UUID
    ) -> Comment:
        comment = await InteractionService._get_own_comment(db, comment_id, user_id)

        async with transaction(db):
            comment.body = comment_data.body

        logger.info("comment_updated", comment_id=str(comment_id))
        return comment

    @staticmethod
    async def delete_comment(db: AsyncSession, comment_id: UUID, user_id: UUID) -> None:
        comment = await InteractionService._get_own_comment(db, comment_id, user_id)

        async with transaction(db):
            comments.soft_delete(comment)
            await db.flush()
            await _bump(db, comment.log_id, "comment_count", -1)

        logger.info("comment_deleted", comment_id=str(comment_id))

    @staticmethod
    async def list_log_comments(
        db: AsyncSession, log_id: UUID, viewer_id: UUID
    ) -> list[Comment]:
        """List live comments on a log, oldest first."""
        await InteractionService._ensure_log(db, log_id, viewer_id)
        result = await db.execute(
            comments.select(Comment.log_id == log_id).order_by(Comment.created_at)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _get_own_comment(
        db: AsyncSession, comment_id: UUID, user_id: UUID
    ) -> Comment:
        comment = await comments.get(db, comment_id, Comment.user_profile_id == user_id)
        if not comment:
            raise ResourceNotFoundError(f"Comment with ID {comment_id} not found")
        return comment
