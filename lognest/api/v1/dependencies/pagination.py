"""
Pagination query parameters.
"""

from fastapi import Query

from lognest.core.pagination import Pagination


def get_pagination(
    page: int = Query(0, description="1-based page number; non-positive means 1"),
    limit: int = Query(0, description="Page size; non-positive means 10"),
    sort_by: str = Query("", description="Column to sort by"),
    sort_order: str = Query("", description="ASC or DESC"),
) -> Pagination:
    return Pagination(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
