"""
Security utilities for bearer-token validation.

Tokens are issued by the external auth provider and signed with a shared
HMAC secret; this service only validates them.
"""

import uuid
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, Field

from .config import Settings
from .exceptions import AuthenticationError
from .logging import get_logger

logger = get_logger(__name__)

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class TokenClaims(BaseModel):
    """Claims carried by an access token."""

    user_id: uuid.UUID
    email: str = ""
    role_id: int = 0
    provider: str | None = None
    session_id: str | None = Field(default=None, alias="sid")
    mfa_completed: bool = Field(default=False, alias="mfa")
    exp: int | None = None

    model_config = {"populate_by_name": True}


def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
    if not payload.get("user_id"):
        raise AuthenticationError("Token missing user_id")
    try:
        return TokenClaims.model_validate(payload)
    except ValueError as e:
        raise AuthenticationError("Token validation failed") from e


def validate_token(token: str, settings: Settings) -> TokenClaims:
    """Verify signature and expiry of an access token and return its claims."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError as e:
        logger.info("jwt_expired")
        raise AuthenticationError("Token has expired") from e
    except JWTError as e:
        logger.warning("jwt_verification_failed", error=str(e))
        raise AuthenticationError("Invalid token") from e

    claims = _claims_from_payload(payload)
    logger.debug("token_verified", user_id=str(claims.user_id))
    return claims


def parse_expired_token(token: str, settings: Settings) -> TokenClaims:
    """Decode a possibly expired access token for the refresh flow.

    Expiry is not checked, but the signature is, the header must name an HMAC
    algorithm, and the token must still carry an ``exp`` claim.
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise AuthenticationError("Invalid token") from e

    if header.get("alg") not in HMAC_ALGORITHMS:
        logger.warning("jwt_unexpected_signing_method", alg=header.get("alg"))
        raise AuthenticationError("Unexpected signing method")

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False},
        )
    except JWTError as e:
        logger.warning("jwt_verification_failed", error=str(e))
        raise AuthenticationError("Invalid token") from e

    if payload.get("exp") is None:
        raise AuthenticationError("Missing exp in token")

    return _claims_from_payload(payload)


def extract_token_from_header(authorization: str | None) -> str:
    """Extract the JWT from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise AuthenticationError("Unauthorized, no token provided")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError("Unauthorized, invalid token format")
    return parts[1]
