"""
Business logic service for tag management.
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.exceptions import ResourceNotFoundError, ValidationError
from lognest.core.ids import new_id
from lognest.core.logging import get_logger
from lognest.core.pagination import Pagination
from lognest.db.models import ProjectTag, Tag
from lognest.db.repository import Repository
from lognest.db.session import transaction
from lognest.schemas.tag import TagCreate, TagUpdate

logger = get_logger(__name__)

tags = Repository(Tag, allowed_sort_columns=("created_at", "name"))


class TagService:
    """Service for tag management."""

    @staticmethod
    async def create_tag(db: AsyncSession, tag_data: TagCreate) -> Tag:
        """
        Create a new tag.

        Args:
            db: Database session
            tag_data: Tag creation data

        Returns:
            Tag: Created tag
        """
        async with transaction(db):
            tag = tags.add(db, id=new_id(), name=tag_data.name)

        logger.info("tag_created", tag_id=str(tag.id), name=tag.name)
        return tag

    @staticmethod
    async def get_tag(db: AsyncSession, tag_id: UUID) -> Tag:
        """
        Get tag by ID.

        Raises:
            ResourceNotFoundError: If tag not found
        """
        tag = await tags.get(db, tag_id)
        if not tag:
            raise ResourceNotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    @staticmethod
    async def list_tags(db: AsyncSession, pagination: Pagination) -> list[Tag]:
        return await tags.list_page(db, pagination)

    @staticmethod
    async def update_tag(db: AsyncSession, tag_id: UUID, tag_data: TagUpdate) -> Tag:
        """
        Rename a tag.

        Raises:
            ResourceNotFoundError: If tag not found
        """
        tag = await TagService.get_tag(db, tag_id)

        async with transaction(db):
            tag.name = tag_data.name

        logger.info("tag_updated", tag_id=str(tag.id))
        return tag

    @staticmethod
    async def delete_tag(db: AsyncSession, tag_id: UUID) -> None:
        """
        Soft delete a tag and unlink it from every project.

        Raises:
            ResourceNotFoundError: If tag not found
        """
        tag = await TagService.get_tag(db, tag_id)

        async with transaction(db):
            tags.soft_delete(tag)
            await db.execute(delete(ProjectTag).where(ProjectTag.tag_id == tag.id))

        logger.info("tag_deleted", tag_id=str(tag_id))

    @staticmethod
    async def ensure_tags_exist(db: AsyncSession, tag_ids: list[UUID]) -> None:
        """
        Check that every id names a live tag.

        Raises:
            ValidationError: If any tag id is unknown
        """
        if not tag_ids:
            return

        result = await db.execute(
            select(Tag.id).where(Tag.id.in_(tag_ids), Tag.deleted_at.is_(None))
        )
        found = set(result.scalars().all())
        missing = [str(tag_id) for tag_id in tag_ids if tag_id not in found]
        if missing:
            raise ValidationError(
                f"Tags not found: {', '.join(missing)}",
                details={"missing_tag_ids": missing},
            )
