"""
Business logic service for logs and their media.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lognest.core.exceptions import ResourceNotFoundError
from lognest.core.ids import new_id
from lognest.core.logging import get_logger
from lognest.core.pagination import Pagination
from lognest.db.models import Log, Media, Project
from lognest.db.repository import Repository
from lognest.db.session import transaction
from lognest.schemas.log import LogCreate, LogUpdate, MediaBase

from .project_service import ProjectService, projects

logger = get_logger(__name__)

logs = Repository(Log, allowed_sort_columns=("created_at", "like_count", "comment_count"))

WITH_DETAILS = (selectinload(Log.media), selectinload(Log.comments))


def _build_media(items: list[MediaBase]) -> list[Media]:
    return [Media(id=new_id(), **item.model_dump()) for item in items]


class LogService:
    """Service for log management."""

    @staticmethod
    async def create_log(db: AsyncSession, log_data: LogCreate, user_id: UUID) -> Log:
        """
        Create a log in one of the user's projects.

        The log and its media rows are written in one transaction.

        Args:
            db: Database session
            log_data: Log creation data
            user_id: Author of the log

        Returns:
            Log: Created log with media and comments loaded

        Raises:
            ResourceNotFoundError: If the project does not exist or is not the user's
        """
        project = await projects.get(db, log_data.project_id, Project.user_id == user_id)
        if not project:
            raise ResourceNotFoundError(f"Project with ID {log_data.project_id} not found")

        log = Log(
            id=new_id(),
            user_profile_id=user_id,
            project_id=project.id,
            content=log_data.content,
            like_count=0,
            comment_count=0,
            media=_build_media(log_data.media),
        )
        async with transaction(db):
            db.add(log)

        logger.info(
            "log_created",
            log_id=str(log.id),
            project_id=str(project.id),
            media=len(log_data.media),
        )
        return await LogService._reload(db, log.id)

    @staticmethod
    async def get_log(db: AsyncSession, log_id: UUID, viewer_id: UUID | None = None) -> Log:
        """
        Get log by ID with its media and live comments.

        Logs of private projects are only visible to the project owner.

        Raises:
            ResourceNotFoundError: If log not found or not visible
        """
        log = await logs.get(db, log_id, options=WITH_DETAILS, refresh=True)
        if not log:
            raise ResourceNotFoundError(f"Log with ID {log_id} not found")

        try:
            await ProjectService.get_project(db, log.project_id, viewer_id)
        except ResourceNotFoundError as e:
            raise ResourceNotFoundError(f"Log with ID {log_id} not found") from e
        return log

    @staticmethod
    async def list_project_logs(
        db: AsyncSession,
        project_id: UUID,
        pagination: Pagination,
        viewer_id: UUID | None = None,
    ) -> list[Log]:
        """
        List the logs of a project visible to ``viewer_id``.

        Raises:
            ResourceNotFoundError: If the project does not exist or is not visible
        """
        await ProjectService.get_project(db, project_id, viewer_id)
        return await logs.list_page(
            db, pagination, Log.project_id == project_id, options=WITH_DETAILS
        )

    @staticmethod
    async def update_log(
        db: AsyncSession, log_id: UUID, log_data: LogUpdate, user_id: UUID
    ) -> Log:
        """
        Update a log written by ``user_id``.

        When ``media`` is given it replaces the attached media.

        Raises:
            ResourceNotFoundError: If log not found or not written by the user
        """
        log = await logs.get(
            db,
            log_id,
            Log.user_profile_id == user_id,
            options=(selectinload(Log.media),),
            refresh=True,
        )
        if not log:
            raise ResourceNotFoundError(f"Log with ID {log_id} not found")

        async with transaction(db):
            if log_data.content is not None:
                log.content = log_data.content
            if log_data.media is not None:
                log.media = _build_media(log_data.media)

        logger.info(
            "log_updated",
            log_id=str(log_id),
            media_replaced=log_data.media is not None,
        )
        return await LogService._reload(db, log_id)

    @staticmethod
    async def delete_log(db: AsyncSession, log_id: UUID, user_id: UUID) -> None:
        """
        Soft delete a log written by ``user_id``.

        Raises:
            ResourceNotFoundError: If log not found or not written by the user
        """
        log = await logs.get(db, log_id, Log.user_profile_id == user_id)
        if not log:
            raise ResourceNotFoundError(f"Log with ID {log_id} not found")

        async with transaction(db):
            logs.soft_delete(log)

        logger.info("log_deleted", log_id=str(log_id))

    @staticmethod
    async def _reload(db: AsyncSession, log_id: UUID) -> Log:
        log = await logs.get(db, log_id, options=WITH_DETAILS, refresh=True)
        if not log:
            raise ResourceNotFoundError(f"Log with ID {log_id} not found")
        return log
