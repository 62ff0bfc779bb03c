"""Bearer auth dependencies.

Protected routes depend on ``get_current_user``, which validates the session
token issued by ``POST /api/auth/google``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from backend.app.auth.google import GoogleTokenVerifier, IdentityVerifier
from backend.app.auth.tokens import InvalidSessionTokenError, JwtTokenService
from backend.app.config import get_settings
from backend.app.models.auth import SessionPrincipal


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@lru_cache
def get_token_service() -> JwtTokenService:
    """Get cached session token service."""
    return JwtTokenService.from_settings(get_settings())


@lru_cache
def get_identity_verifier() -> IdentityVerifier:
    """Get cached Google ID token verifier."""
    return GoogleTokenVerifier(client_id=get_settings().google_client_id)


async def get_current_user(
    token_service: Annotated[JwtTokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> SessionPrincipal:
    """Extract the authenticated user from the authorization header.

    Args:
        token_service: Session token service
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        SessionPrincipal for the token's subject

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if not authorization:
        raise _unauthorized("Not authenticated")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise _unauthorized("Invalid authorization header format")

    try:
        return token_service.decode_access_token(token.strip())
    except InvalidSessionTokenError as e:
        raise _unauthorized("Invalid or expired token") from e
