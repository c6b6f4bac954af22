"""
Authentication dependencies for FastAPI.

Bearer tokens are validated locally against the shared secret; there is no
user lookup in this service's database.
"""

from fastapi import Depends, Request

from lognest.core.config import Settings
from lognest.core.exceptions import AuthenticationError
from lognest.core.logging import get_logger
from lognest.core.security import TokenClaims, extract_token_from_header, validate_token
from lognest.services.auth_service import AuthServiceClient


logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_client(request: Request) -> AuthServiceClient:
    return request.app.state.auth_client


async def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """
    Get the authenticated caller from the ``Authorization`` header.

    Raises:
        AuthenticationError: If the header is missing, malformed, or the token is invalid
    """
    try:
        token = extract_token_from_header(request.headers.get("Authorization"))
        claims = validate_token(token, settings)
    except AuthenticationError as e:
        logger.warning("authentication_failed", reason=e.message, path=request.url.path)
        raise

    request.state.user_id = str(claims.user_id)
    return claims


async def get_optional_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenClaims | None:
    """Like :func:`get_current_user`, but anonymous callers get ``None``."""
    if not request.headers.get("Authorization"):
        return None
    return await get_current_user(request, settings)
