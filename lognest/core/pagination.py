"""
Pagination engine shared by every listing endpoint.

A caller builds a filtered ``Select`` and hands it to :func:`paginate` together
with the request's :class:`Pagination` and the endpoint's allowed sort columns.
The engine counts the filtered rows, fills in ``total_rows``/``total_pages``,
and returns the statement ordered and windowed. Ordering only ever uses a
column from the allow-list; anything else falls back to ``created_at DESC``.
"""

import math
from collections.abc import Collection

from pydantic import BaseModel, Field
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
DEFAULT_SORT_COLUMN = "created_at"
# Largest value a database LIMIT or OFFSET accepts
MAX_SQL_INT = 2**63 - 1


class Pagination(BaseModel):
    """Pagination request parameters and the metadata computed for them."""

    limit: int = 0
    page: int = 0
    total_rows: int = 0
    total_pages: int = 0
    sort_by: str = ""
    sort_order: str = ""

    def get_limit(self) -> int:
        if self.limit <= 0:
            self.limit = DEFAULT_LIMIT
        self.limit = min(self.limit, MAX_SQL_INT)
        return self.limit

    def get_page(self) -> int:
        if self.page <= 0:
            self.page = DEFAULT_PAGE
        return self.page

    def get_offset(self) -> int:
        return min((self.get_page() - 1) * self.get_limit(), MAX_SQL_INT)

    def is_ascending(self) -> bool:
        return self.sort_order.upper() == "ASC"

    def set_total_rows(self, total_rows: int) -> None:
        self.total_rows = total_rows
        self.total_pages = math.ceil(total_rows / self.get_limit())


class PaginationMeta(BaseModel):
    """Pagination block rendered in list responses."""

    limit: int
    page: int
    total_rows: int
    total_pages: int
    sort_by: str | None = Field(default=None)
    sort_order: str | None = Field(default=None)

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationMeta":
        return cls(
            limit=pagination.get_limit(),
            page=pagination.get_page(),
            total_rows=pagination.total_rows,
            total_pages=pagination.total_pages,
            sort_by=pagination.sort_by or None,
            sort_order=pagination.sort_order or None,
        )


def order_clause(
    model: type,
    pagination: Pagination,
    allowed_sort_columns: Collection[str],
) -> ColumnElement:
    """Resolve the ORDER BY expression for a listing.

    ``sort_by`` must match an allowed column exactly; otherwise the default
    ``created_at DESC`` is used whatever ``sort_order`` says.
    """
    if pagination.sort_by not in allowed_sort_columns:
        return model.__table__.c[DEFAULT_SORT_COLUMN].desc()

    column = model.__table__.c[pagination.sort_by]
    return column.asc() if pagination.is_ascending() else column.desc()


async def count_rows(db: AsyncSession, stmt: Select) -> int:
    """Count rows matched by ``stmt`` ignoring any ordering or window."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = await db.scalar(count_stmt)
    return int(total or 0)


async def paginate(
    db: AsyncSession,
    stmt: Select,
    pagination: Pagination,
    model: type,
    allowed_sort_columns: Collection[str],
) -> Select:
    """Count ``stmt`` and return it ordered and windowed.

    Populates ``pagination.total_rows`` and ``pagination.total_pages`` as a
    side effect. Data-access errors from the count propagate unchanged.

    Args:
        db: Database session
        stmt: Statement with the caller's base filter already applied
        pagination: Request pagination, updated in place
        model: Mapped class whose table owns the sort columns
        allowed_sort_columns: Column names permitted as ``sort_by``

    Returns:
        Select: Ordered statement with offset and limit applied
    """
    pagination.set_total_rows(await count_rows(db, stmt))

    return (
        stmt.order_by(order_clause(model, pagination, allowed_sort_columns))
        .offset(pagination.get_offset())
        .limit(pagination.get_limit())
    )
