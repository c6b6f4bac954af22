"""
Business logic service for project management.

Projects carry their tags through the ``project_tags`` join table, which is
written only through :mod:`lognest.db.association`.
"""

from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lognest.core.exceptions import ResourceNotFoundError
from lognest.core.ids import new_id
from lognest.core.logging import get_logger
from lognest.core.pagination import Pagination
from lognest.core.slug import to_slug
from lognest.db.association import (
    Association,
    create_with_members,
    delete_edges,
    update_with_members,
)
from lognest.db.models import Project, ProjectTag
from lognest.db.repository import Repository
from lognest.db.session import transaction
from lognest.schemas.project import ProjectCreate, ProjectUpdate

from .tag_service import TagService

logger = get_logger(__name__)

projects = Repository(Project, allowed_sort_columns=("created_at", "title", "is_public"))

PROJECT_TAGS = Association(ProjectTag, owner_key="project_id", member_key="tag_id")

WITH_TAGS = (selectinload(Project.tags),)


def _visible_to(viewer_id: UUID | None):
    if viewer_id is None:
        return Project.is_public.is_(True)
    return or_(Project.is_public.is_(True), Project.user_id == viewer_id)


class ProjectService:
    """Service for project management and tag association."""

    @staticmethod
    async def create_project(
        db: AsyncSession,
        project_data: ProjectCreate,
        user_id: UUID,
    ) -> Project:
        """
        Create a new project with its tags.

        Args:
            db: Database session
            project_data: Project creation data
            user_id: Owner of the new project

        Returns:
            Project: Created project with tags loaded

        Raises:
            ValidationError: If any tag id does not exist
        """
        tag_ids = list(dict.fromkeys(project_data.tag_ids))
        await TagService.ensure_tags_exist(db, tag_ids)

        project = Project(
            id=new_id(),
            user_id=user_id,
            title=project_data.title,
            description=project_data.description,
            is_public=project_data.is_public,
            slug=to_slug(project_data.title),
        )
        await create_with_members(db, project, PROJECT_TAGS, tag_ids)

        logger.info(
            "project_created",
            project_id=str(project.id),
            user_id=str(user_id),
            tags=len(tag_ids),
        )
        return await ProjectService._reload(db, project.id)

    @staticmethod
    async def get_project(
        db: AsyncSession, project_id: UUID, viewer_id: UUID | None = None
    ) -> Project:
        """
        Get a project by ID.

        Private projects are only visible to their owner.

        Raises:
            ResourceNotFoundError: If project not found or not visible
        """
        project = await projects.get(
            db, project_id, _visible_to(viewer_id), options=WITH_TAGS, refresh=True
        )
        if not project:
            raise ResourceNotFoundError(f"Project with ID {project_id} not found")
        return project

    @staticmethod
    async def get_project_by_slug(
        db: AsyncSession, slug: str, viewer_id: UUID | None = None
    ) -> Project:
        project = await projects.get_by(
            db,
            Project.slug == slug,
            _visible_to(viewer_id),
            options=WITH_TAGS,
            refresh=True,
        )
        if not project:
            raise ResourceNotFoundError(f"Project with slug '{slug}' not found")
        return project

    @staticmethod
    async def list_projects(db: AsyncSession, pagination: Pagination) -> list[Project]:
        """List public projects."""
        return await projects.list_page(
            db, pagination, Project.is_public.is_(True), options=WITH_TAGS
        )

    @staticmethod
    async def list_user_projects(
        db: AsyncSession,
        user_id: UUID,
        pagination: Pagination,
        include_private: bool = False,
    ) -> list[Project]:
        """
        List projects owned by ``user_id``.

        Args:
            db: Database session
            user_id: Owner whose projects are listed
            pagination: Request pagination, updated in place
            include_private: Whether private projects are included

        Returns:
            List of projects for the requested page
        """
        filters = [Project.user_id == user_id]
        if not include_private:
            filters.append(Project.is_public.is_(True))
        return await projects.list_page(db, pagination, *filters, options=WITH_TAGS)

    @staticmethod
    async def update_project(
        db: AsyncSession,
        project_id: UUID,
        project_data: ProjectUpdate,
        user_id: UUID,
    ) -> Project:
        """
        Update a project owned by ``user_id``.

        A non-empty ``tag_ids`` replaces the project's tags. An omitted or
        empty list leaves them as they are.

        Raises:
            ResourceNotFoundError: If project not found or not owned by the user
            ValidationError: If any tag id does not exist
        """
        project = await ProjectService._get_owned(db, project_id, user_id)

        tag_ids = project_data.tag_ids
        if tag_ids:
            tag_ids = list(dict.fromkeys(tag_ids))
            await TagService.ensure_tags_exist(db, tag_ids)

        values = {
            field: value
            for field, value in project_data.model_dump(
                exclude_unset=True, exclude={"tag_ids"}
            ).items()
            if value is not None
        }
        await update_with_members(db, project, values, PROJECT_TAGS, tag_ids)

        logger.info(
            "project_updated",
            project_id=str(project_id),
            fields=sorted(values),
            tags_replaced=bool(tag_ids),
        )
        return await ProjectService._reload(db, project_id)

    @staticmethod
    async def delete_project(db: AsyncSession, project_id: UUID, user_id: UUID) -> None:
        """
        Soft delete a project owned by ``user_id`` and drop its tag links.

        Raises:
            ResourceNotFoundError: If project not found or not owned by the user
        """
        project = await ProjectService._get_owned(db, project_id, user_id)

        async with transaction(db):
            projects.soft_delete(project)
            await delete_edges(db, PROJECT_TAGS, project.id)

        logger.info("project_deleted", project_id=str(project_id), user_id=str(user_id))

    @staticmethod
    async def _get_owned(db: AsyncSession, project_id: UUID, user_id: UUID) -> Project:
        project = await projects.get(db, project_id, Project.user_id == user_id)
        if not project:
            raise ResourceNotFoundError(f"Project with ID {project_id} not found")
        return project

    @staticmethod
    async def _reload(db: AsyncSession, project_id: UUID) -> Project:
        project = await projects.get(db, project_id, options=WITH_TAGS, refresh=True)
        if not project:
            raise ResourceNotFoundError(f"Project with ID {project_id} not found")
        return project
