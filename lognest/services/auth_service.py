"""
Client for the external auth provider.

Login, registration, token refresh and user lookup are delegated to the
provider over HTTP. Any failure to reach it, or any non-200 answer, surfaces
as an :class:`ExternalServiceError`.
"""

from typing import Any
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.core.config import Settings
from lognest.core.exceptions import ExternalServiceError
from lognest.core.logging import get_logger
from lognest.schemas.auth import LoginRequest, RegisterRequest, TokenPair
from lognest.schemas.user_profile import AuthUser

logger = get_logger(__name__)


class AuthServiceClient:
    """Async HTTP client for the auth provider."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the client.

        Args:
            settings: Application settings; supplies base URL and timeout
            transport: Optional transport, used to stub the provider in tests
        """
        self.base_url = settings.auth_service_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.auth_service_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self.client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("auth_service_unreachable", action=action, error=str(e))
            raise ExternalServiceError(f"Failed to {action}: auth service unreachable") from e

        if response.status_code != 200:
            logger.warning(
                "auth_service_rejected", action=action, status_code=response.status_code
            )
            raise ExternalServiceError(f"Failed to {action}")

        try:
            body = response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"Failed to {action}: could not parse auth service response"
            ) from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ExternalServiceError(
                f"Failed to {action}: auth service response is missing 'data'"
            )
        return data

    async def login(self, credentials: LoginRequest) -> TokenPair:
        data = await self._request(
            "POST", "/api/auth/login", action="login", json=credentials.model_dump()
        )
        return self._token_pair(data, "login")

    async def register(self, registration: RegisterRequest) -> dict[str, Any]:
        """
        Register a user with the provider.

        Returns:
            The provider's ``data`` object; it carries the new user ``id``
        """
        return await self._request(
            "POST",
            "/api/auth/register",
            action="register",
            json=registration.model_dump(),
        )

    async def refresh_token(self, access_token: str, refresh_token: str) -> TokenPair:
        data = await self._request(
            "POST",
            "/api/auth/refresh-token",
            action="refresh token",
            headers={
                "Authorization": f"Bearer {access_token}",
                "X-Refresh-Token": refresh_token,
            },
        )
        return self._token_pair(data, "refresh token")

    async def get_user(self, authorization: str) -> AuthUser:
        """Fetch the caller's user record, forwarding their Authorization header."""
        data = await self._request(
            "GET",
            "/api/auth/user",
            action="get user",
            headers={"Authorization": authorization},
        )
        try:
            return AuthUser.model_validate(data)
        except ValueError as e:
            raise ExternalServiceError("Failed to get user: malformed user record") from e

    @staticmethod
    def _token_pair(data: dict[str, Any], action: str) -> TokenPair:
        try:
            return TokenPair.model_validate(data)
        except ValueError as e:
            raise ExternalServiceError(f"Failed to {action}: tokens missing") from e


class AuthService:
    """Auth flows that touch local state as well as the provider."""

    @staticmethod
    async def register(
        db: AsyncSession, client: AuthServiceClient, registration: RegisterRequest
    ) -> dict[str, Any]:
        """
        Register with the provider, then create the local user profile.

        Raises:
            ExternalServiceError: If the provider fails or returns no usable id
        """
        from .user_profile_service import UserProfileService

        data = await client.register(registration)

        try:
            user_id = UUID(str(data["id"]))
        except (KeyError, ValueError) as e:
            raise ExternalServiceError("Invalid user ID from auth service") from e

        try:
            await UserProfileService.create_profile(db, user_id)
        except Exception:
            logger.critical("profile_creation_failed_after_register", user_id=str(user_id))
            raise

        logger.info("user_registered", user_id=str(user_id))
        return data
