"""
Authentication endpoints proxied to the external auth provider.

Tokens obtained from the provider are handed to the browser as HTTP-only
cookies and never appear in response bodies.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.api.v1.dependencies.auth import get_auth_client, get_settings
from lognest.core.config import Settings
from lognest.core.exceptions import AuthenticationError
from lognest.core.logging import get_logger
from lognest.core.security import parse_expired_token
from lognest.db.session import get_db
from lognest.schemas.auth import LoginRequest, RegisterRequest, TokenPair
from lognest.schemas.core import APIResponse
from lognest.services.auth_service import AuthService, AuthServiceClient


logger = get_logger(__name__)
router = APIRouter()

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def _cookie_options(settings: Settings) -> dict:
    if settings.is_production:
        return {"secure": True, "samesite": "none", "domain": settings.cookie_domain}
    return {"secure": False, "samesite": "lax"}


def _set_token_cookies(response: Response, tokens: TokenPair, settings: Settings) -> None:
    options = _cookie_options(settings)
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        tokens.access_token,
        max_age=int(timedelta(minutes=settings.access_token_cookie_minutes).total_seconds()),
        httponly=True,
        path="/",
        **options,
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        tokens.refresh_token,
        max_age=int(timedelta(hours=settings.refresh_token_cookie_hours).total_seconds()),
        httponly=True,
        path="/",
        **options,
    )


@router.post("/login", response_model=APIResponse[None])
async def login(
    credentials: LoginRequest,
    response: Response,
    client: AuthServiceClient = Depends(get_auth_client),
    settings: Settings = Depends(get_settings),
) -> APIResponse[None]:
    tokens = await client.login(credentials)
    _set_token_cookies(response, tokens, settings)
    logger.info("user_logged_in")
    return APIResponse(message="login success")


@router.post("/register", response_model=APIResponse[None])
async def register(
    registration: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    client: AuthServiceClient = Depends(get_auth_client),
) -> APIResponse[None]:
    """Register with the provider and create the matching local profile."""
    await AuthService.register(db, client, registration)
    return APIResponse(message="register success")


@router.post("/refresh-token", response_model=APIResponse[None])
async def refresh_token(
    request: Request,
    response: Response,
    client: AuthServiceClient = Depends(get_auth_client),
    settings: Settings = Depends(get_settings),
) -> APIResponse[None]:
    """
    Exchange the token cookies for a fresh pair.

    The access token may be expired but must still be signed by us.

    Raises:
        AuthenticationError: 401 if either cookie is missing or the access token is forged
    """
    access_token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not access_token:
        raise AuthenticationError("Unauthorized, no access token provided")

    refresh = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh:
        raise AuthenticationError("Unauthorized, no refresh token provided")

    claims = parse_expired_token(access_token, settings)
    tokens = await client.refresh_token(access_token, refresh)
    _set_token_cookies(response, tokens, settings)

    logger.info("token_refreshed", user_id=str(claims.user_id))
    return APIResponse(message="refresh token success")


@router.post("/logout", response_model=APIResponse[None])
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> APIResponse[None]:
    options = _cookie_options(settings)
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, path="/", httponly=True, **options)
    return APIResponse(message="logout success")
