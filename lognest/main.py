"""
Main FastAPI application entry point for Lognest API.
Configures the application, middleware, routes, and error handling.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from lognest.core.config import Settings
from lognest.core.exceptions import LognestException
from lognest.core.logging import get_logger, setup_logging
from lognest.db.session import Database
from lognest.middleware.correlation import CorrelationMiddleware
from lognest.middleware.timeout import TimeoutMiddleware
from lognest.schemas.core import ErrorResponse
from lognest.services.auth_service import AuthServiceClient


logger = get_logger(__name__)


def _error(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True),
    )


def _detail_messages(details: dict) -> list[str] | None:
    messages: list[str] = []
    for value in details.values():
        messages.extend(str(item) for item in (value if isinstance(value, list) else [value]))
    return messages or None


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(LognestException)
    async def lognest_exception_handler(
        request: Request, exc: LognestException
    ) -> JSONResponse:
        """Render domain exceptions with the status each one carries."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "lognest_exception",
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
            path=request.url.path,
        )
        return _error(exc.status_code, exc.message, _detail_messages(exc.details))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.info("request_validation_failed", path=request.url.path, errors=errors)
        return _error(400, "Invalid request", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("database_error", error=str(exc), path=request.url.path, exc_info=True)
        errors = None if settings.is_production else [str(exc)]
        return _error(500, "A database error occurred", errors)

    @app.exception_handler(500)
    async def internal_server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("internal_server_error", error=str(exc), exc_info=True)
        errors = None if settings.is_production else [str(exc)]
        return _error(500, "An internal server error occurred", errors)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    auth_client: AuthServiceClient | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Application settings; read from the environment when omitted
        database: Database handle; built from ``settings`` when omitted
        auth_client: Auth provider client; built from ``settings`` when omitted

    Returns:
        FastAPI: Configured application
    """
    settings = settings or Settings()
    setup_logging(settings)

    database = database or Database(settings)
    auth_client = auth_client or AuthServiceClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "application_starting",
            version=settings.app_version,
            environment=settings.environment,
        )
        try:
            yield
        finally:
            logger.info("application_stopping")
            await auth_client.close()
            await database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Projects, logs, tags and interactions for the Lognest blogging platform",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.auth_client = auth_client

    # Last added runs first
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=settings.allowed_headers,
    )

    @app.middleware("http")
    async def security_headers_middleware(request: Request, call_next) -> Response:
        """Add security headers to responses."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if settings.is_production:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response

    _register_exception_handlers(app, settings)

    @app.get("/ready", tags=["Health"])
    async def readiness_check() -> JSONResponse:
        """Readiness check: the database answers a trivial query."""
        try:
            async with database.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("readiness_check_failed", error=str(e))
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready", "service": settings.app_name},
            )
        return JSONResponse(
            content={
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
            }
        )

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> dict:
        return {
            "status": "alive",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """Root endpoint providing API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "documentation": "/docs" if settings.is_development else None,
            "status": "operational",
        }

    from lognest.api.v1.router import api_router

    app.include_router(api_router, prefix="/api")

    return app
