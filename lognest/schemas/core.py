"""
Core schemas used across multiple modules: response envelopes.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from lognest.core.pagination import PaginationMeta


T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Envelope for successful responses."""

    status: str = "success"
    message: str
    data: T | None = None


class PaginatedResponse(APIResponse[list[T]], Generic[T]):
    """Envelope for list responses."""

    pagination: PaginationMeta


class ErrorResponse(BaseModel):
    """Envelope for error responses."""

    status: str = "error"
    message: str
    errors: list[str] | None = None
