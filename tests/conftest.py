"""
Pytest configuration and fixtures for Lognest API tests.
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.config import Settings
from lognest.db.models import Project, Tag, UserProfile
from lognest.db.session import Database, get_db
from lognest.main import create_app
from lognest.services.auth_service import AuthServiceClient
from tests.factories import ALL_FACTORIES, ProjectFactory, TagFactory, UserProfileFactory


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-for-lognest"
TEST_AUTH_SERVICE_URL = "http://auth.test"


class FakeAuthProvider:
    """Stands in for the auth provider behind an ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}

    def respond(self, method: str, path: str, status_code: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = (status_code, json)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.routes.get(
            (request.method, request.url.path), (404, {"message": "not found"})
        )
        return httpx.Response(status_code, json=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory database and a stubbed auth provider."""
    return Settings(
        _env_file=None,
        environment="testing",
        log_level="WARNING",
        database_url=TEST_DATABASE_URL,
        jwt_secret=TEST_JWT_SECRET,
        jwt_algorithm="HS256",
        auth_service_url=TEST_AUTH_SERVICE_URL,
        request_timeout_seconds=5.0,
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Fresh schema per test."""
    database = Database(test_settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async with database.session_factory() as session:
        for factory_class in ALL_FACTORIES:
            factory_class._meta.sqlalchemy_session = session

        yield session

        await session.rollback()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest_asyncio.fixture
async def auth_client(
    test_settings: Settings, auth_provider: FakeAuthProvider
) -> AsyncGenerator[AuthServiceClient, None]:
    client = AuthServiceClient(test_settings, transport=httpx.MockTransport(auth_provider.handler))
    yield client
    await client.close()


@pytest.fixture
def app(
    test_settings: Settings,
    database: Database,
    db_session: AsyncSession,
    auth_client: AuthServiceClient,
) -> FastAPI:
    """Application wired to the test database session and the fake auth provider."""
    app = create_app(test_settings, database=database, auth_client=auth_client)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_token(test_settings: Settings) -> Callable[..., str]:
    """Build access tokens the way the auth provider signs them."""

    def _make_token(
        user_id: uuid.UUID,
        expires_in: timedelta = timedelta(minutes=5),
        secret: str | None = None,
        algorithm: str = "HS256",
        **claims: Any,
    ) -> str:
        payload = {
            "user_id": str(user_id),
            "email": "writer@example.com",
            "role_id": 2,
            "provider": "local",
            "sid": "session-1",
            "mfa": False,
            "exp": datetime.now(timezone.utc) + expires_in,
            **claims,
        }
        return jwt.encode(payload, secret or test_settings.jwt_secret, algorithm=algorithm)

    return _make_token


@pytest.fixture
def user_id() -> uuid.UUID:
    """The authenticated caller in API tests."""
    return uuid.uuid4()


@pytest.fixture
def auth_headers(make_token, user_id: uuid.UUID) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest_asyncio.fixture
async def test_profile(db_session: AsyncSession, user_id: uuid.UUID) -> UserProfile:
    profile = UserProfileFactory(user_id=user_id, bio="Writes about compilers")
    await db_session.commit()
    return profile


@pytest_asyncio.fixture
async def test_tags(db_session: AsyncSession) -> list[Tag]:
    """Three live tags."""
    tags = [TagFactory(name=name) for name in ("alpha", "beta", "gamma")]
    await db_session.commit()
    return tags


@pytest_asyncio.fixture
async def test_project(db_session: AsyncSession, user_id: uuid.UUID) -> Project:
    """A public project owned by the caller."""
    project = ProjectFactory(user_id=user_id, title="Building a tiny compiler")
    await db_session.commit()
    return project
