"""Session token issuance and validation (HS256 JWT)."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from backend.app.config import Settings
from backend.app.models.auth import GoogleIdentity, SessionPrincipal

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class InvalidSessionTokenError(Exception):
    """Raised when a session token fails validation."""


class JwtTokenService:
    """Signs and validates the bearer tokens handed to the browser."""

    def __init__(
        self,
        *,
        signing_key: str,
        issuer: str,
        audience: str,
        expiration_minutes: int = 60,
    ) -> None:
        if not signing_key:
            raise ValueError("signing_key is required")
        self._signing_key = signing_key
        self._issuer = issuer
        self._audience = audience
        self._lifetime = timedelta(minutes=expiration_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtTokenService":
        """Build a token service from application settings."""
        return cls(
            signing_key=settings.jwt_signing_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def create_access_token(
        self, identity: GoogleIdentity, now: datetime | None = None
    ) -> tuple[str, int]:
        """Issue a session token for a verified identity.

        Args:
            identity: Verified Google identity
            now: Issue time (for testing)

        Returns:
            Tuple of (encoded token, lifetime in seconds)
        """
        if now is None:
            now = datetime.now(UTC)
        expires = now + self._lifetime

        claims: dict[str, Any] = {
            "sub": identity.subject,
            "name": identity.name or identity.email or "",
            "email": identity.email or "",
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "exp": expires,
        }
        if identity.picture:
            claims["picture"] = identity.picture

        token = jwt.encode(claims, self._signing_key, algorithm=ALGORITHM)
        return token, int(self._lifetime.total_seconds())

    def decode_access_token(self, token: str) -> SessionPrincipal:
        """Validate a session token and return its principal.

        Raises:
            InvalidSessionTokenError: If signature, issuer, audience or expiry is invalid
        """
        try:
            claims = jwt.decode(
                token,
                self._signing_key,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                audience=self._audience,
                options={"require": ["sub", "exp", "iss", "aud"]},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected session token: %s", type(e).__name__)
            raise InvalidSessionTokenError(str(e)) from e

        subject = claims.get("sub")
        if not subject:
            raise InvalidSessionTokenError("Token has no subject")

        return SessionPrincipal(
            user_id=subject,
            name=claims.get("name") or None,
            email=claims.get("email") or None,
            picture_url=claims.get("picture"),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
