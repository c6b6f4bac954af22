"""
Per-request time budget.
"""

import asyncio
from typing import Any, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from lognest.core.exceptions import RequestTimeoutError
from lognest.core.logging import get_logger
from lognest.schemas.core import ErrorResponse


logger = get_logger(__name__)


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Abandons requests that run longer than ``timeout_seconds`` with a 504."""

    def __init__(self, app: Any, timeout_seconds: float):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "request_timeout",
                method=request.method,
                path=request.url.path,
                timeout_seconds=self.timeout_seconds,
            )
            return JSONResponse(
                status_code=RequestTimeoutError.status_code,
                content=ErrorResponse(message="Request timed out").model_dump(
                    exclude_none=True
                ),
            )
