"""
Generic repository over soft-deletable models.

Each entity is described once (model plus allowed sort columns) and every
service reuses the same read/list/delete code. All reads exclude rows whose
``deleted_at`` is set.
"""

import uuid
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption
from sqlalchemy.sql.elements import ColumnElement

from lognest.core.pagination import Pagination, paginate

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """Query helpers for one mapped model."""

    def __init__(
        self,
        model: type[ModelT],
        allowed_sort_columns: Sequence[str] = ("created_at",),
        primary_key: str = "id",
    ):
        self.model = model
        self.allowed_sort_columns = frozenset(allowed_sort_columns)
        self.primary_key = primary_key

    def select(self, *filters: ColumnElement[bool]) -> Select:
        """Base statement for live rows matching ``filters``."""
        return select(self.model).where(self.model.deleted_at.is_(None), *filters)

    async def get_by(
        self,
        db: AsyncSession,
        *filters: ColumnElement[bool],
        options: Sequence[ORMOption] = (),
        refresh: bool = False,
    ) -> ModelT | None:
        stmt = self.select(*filters).options(*options)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(
        self,
        db: AsyncSession,
        id: uuid.UUID,
        *filters: ColumnElement[bool],
        options: Sequence[ORMOption] = (),
        refresh: bool = False,
    ) -> ModelT | None:
        return await self.get_by(
            db,
            getattr(self.model, self.primary_key) == id,
            *filters,
            options=options,
            refresh=refresh,
        )

    async def list_page(
        self,
        db: AsyncSession,
        pagination: Pagination,
        *filters: ColumnElement[bool],
        options: Sequence[ORMOption] = (),
    ) -> list[ModelT]:
        """Return one page of live rows; fills in the pagination totals."""
        stmt = await paginate(
            db,
            self.select(*filters),
            pagination,
            self.model,
            self.allowed_sort_columns,
        )
        result = await db.execute(stmt.options(*options))
        return list(result.scalars().all())

    async def exists(self, db: AsyncSession, *filters: ColumnElement[bool]) -> bool:
        result = await db.execute(self.select(*filters).limit(1))
        return result.first() is not None

    def add(self, db: AsyncSession, **values: Any) -> ModelT:
        instance = self.model(**values)
        db.add(instance)
        return instance

    @staticmethod
    def soft_delete(instance: Any) -> None:
        instance.mark_deleted()
