"""
Correlation ID middleware for request tracing and logging.
"""

import uuid
from typing import Any, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from lognest.core.logging import get_logger, set_correlation_id


logger = get_logger(__name__)


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation id and echoes it back."""

    def __init__(self, app: Any, header_name: str = "X-Correlation-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[self.header_name] = correlation_id

        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response
