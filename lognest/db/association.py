"""
Many-to-many association synchronization.

An owner row (a project) is linked to member rows (tags) through a join table.
The join rows are never edited piecemeal: creating the owner inserts one row
per member, and updating the owner with a non-empty member list replaces the
whole set. Both run inside a single transaction together with the owner write.
"""

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.logging import get_logger
from lognest.db.session import transaction

logger = get_logger(__name__)

OwnerT = TypeVar("OwnerT")


@dataclass(frozen=True)
class Association:
    """Describes a join table: its model and the owner/member key columns."""

    model: type
    owner_key: str
    member_key: str

    @property
    def owner_column(self):
        return getattr(self.model, self.owner_key)

    @property
    def member_column(self):
        return getattr(self.model, self.member_key)

    def edge(self, owner_id: uuid.UUID, member_id: uuid.UUID) -> Any:
        return self.model(**{self.owner_key: owner_id, self.member_key: member_id})


def _unique(member_ids: Iterable[uuid.UUID]) -> list[uuid.UUID]:
    return list(dict.fromkeys(member_ids))


async def insert_edges(
    db: AsyncSession,
    association: Association,
    owner_id: uuid.UUID,
    member_ids: Iterable[uuid.UUID],
) -> None:
    """Add one join row per member id and flush them."""
    for member_id in _unique(member_ids):
        db.add(association.edge(owner_id, member_id))
    await db.flush()


async def delete_edges(
    db: AsyncSession, association: Association, owner_id: uuid.UUID
) -> None:
    """Remove every join row belonging to ``owner_id``."""
    await db.execute(
        delete(association.model).where(association.owner_column == owner_id)
    )


async def member_ids_of(
    db: AsyncSession, association: Association, owner_id: uuid.UUID
) -> set[uuid.UUID]:
    result = await db.execute(
        select(association.member_column).where(association.owner_column == owner_id)
    )
    return set(result.scalars().all())


async def create_with_members(
    db: AsyncSession,
    owner: OwnerT,
    association: Association,
    member_ids: Iterable[uuid.UUID],
) -> OwnerT:
    """
    Insert ``owner`` and its join rows atomically.

    Args:
        db: Database session
        owner: New owner instance, primary key already assigned
        association: Join table descriptor
        member_ids: Member ids to link

    Returns:
        The persisted owner

    Raises:
        SQLAlchemyError: Any insert failure, after the whole write is rolled back
    """
    member_ids = _unique(member_ids)
    async with transaction(db):
        db.add(owner)
        await db.flush()
        await insert_edges(db, association, owner.id, member_ids)

    logger.debug(
        "association_created",
        table=association.model.__tablename__,
        owner_id=str(owner.id),
        members=len(member_ids),
    )
    return owner


async def update_with_members(
    db: AsyncSession,
    owner: OwnerT,
    values: Mapping[str, Any],
    association: Association,
    member_ids: Iterable[uuid.UUID] | None,
) -> OwnerT:
    """
    Apply scalar ``values`` to ``owner`` and resynchronize its join rows atomically.

    A non-empty ``member_ids`` replaces the existing set (delete all, then
    insert). An empty or missing list leaves the existing join rows untouched.

    Args:
        db: Database session
        owner: Persistent owner instance
        values: Column values to set on the owner
        association: Join table descriptor
        member_ids: Desired member ids, or None

    Returns:
        The updated owner

    Raises:
        SQLAlchemyError: Any write failure, after the whole write is rolled back
    """
    member_ids = _unique(member_ids or [])
    async with transaction(db):
        for field, value in values.items():
            setattr(owner, field, value)
        await db.flush()

        if member_ids:
            await delete_edges(db, association, owner.id)
            await insert_edges(db, association, owner.id, member_ids)

    logger.debug(
        "association_updated",
        table=association.model.__tablename__,
        owner_id=str(owner.id),
        replaced=bool(member_ids),
        members=len(member_ids),
    )
    return owner
