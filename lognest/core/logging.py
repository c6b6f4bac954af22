"""
Structured logging configuration for Lognest API.
Provides JSON logging with correlation IDs and security-conscious log handling.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from .config import Settings


# Context variable for request correlation ID
correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Keys carrying credentials: auth cookies, the refresh header, request
# bodies of the auth proxy and the JWT settings.
REDACTED_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "x-refresh-token",
        "authorization",
        "cookie",
        "set-cookie",
        "password",
        "jwt_secret",
    }
)
REDACTED_SUFFIXES = ("_token", "_secret", "password")
MAX_VALUE_LENGTH = 1000


def add_correlation_id(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add correlation ID to log entries."""
    current_correlation_id = correlation_id.get()
    if current_correlation_id:
        event_dict["correlation_id"] = current_correlation_id
    return event_dict


def _is_secret(key: str) -> bool:
    key = key.lower()
    return key in REDACTED_KEYS or key.endswith(REDACTED_SUFFIXES)


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: "[REDACTED]" if _is_secret(str(k)) else _scrub(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
        return value[:MAX_VALUE_LENGTH] + "...[TRUNCATED]"
    return value


def redact_sensitive_fields(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Hide auth cookies, bearer headers and passwords, including inside
    nested header or body dicts, and truncate oversized strings.
    """
    return _scrub(event_dict)


def setup_logging(settings: Settings) -> None:
    """Configure structured logging for the application."""

    processors: list[Processor] = [
        add_correlation_id,
        structlog.contextvars.merge_contextvars,
        redact_sensitive_fields,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )

    stream = sys.stdout if settings.is_development else sys.stderr

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, settings.log_level),
    )

    # Silence noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(request_id: str | None = None) -> str:
    """Set correlation ID for the current context."""
    if request_id is None:
        request_id = str(uuid.uuid4())
    correlation_id.set(request_id)
    return request_id


def get_correlation_id() -> str | None:
    """Get current correlation ID."""
    return correlation_id.get()
