"""Google ID token verification via google-auth."""

import logging
from typing import Protocol

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from backend.app.models.auth import GoogleIdentity

logger = logging.getLogger(__name__)


class IdentityVerificationError(Exception):
    """Raised when an identity token cannot be verified."""


class IdentityVerifier(Protocol):
    """Protocol for identity token verifiers."""

    def verify(self, id_token: str) -> GoogleIdentity:
        """Verify an identity token and return its claims.

        Raises:
            IdentityVerificationError: If the token is blank or invalid
        """
        ...


class GoogleTokenVerifier:
    """Verifies Google-issued ID tokens against the configured OAuth client id.

    Signature, expiry, issuer and audience checks are delegated to
    ``google.oauth2.id_token.verify_oauth2_token``. Google's signing certs are
    fetched over a shared ``requests`` session.
    """

    def __init__(self, client_id: str, clock_skew_seconds: int = 10) -> None:
        if not client_id:
            raise ValueError("client_id is required")
        self._client_id = client_id
        self._clock_skew_seconds = clock_skew_seconds
        self._transport = google_requests.Request()

    def verify(self, id_token: str) -> GoogleIdentity:
        if not id_token or not id_token.strip():
            raise IdentityVerificationError("Google ID token is required")

        try:
            claims = google_id_token.verify_oauth2_token(
                id_token,
                self._transport,
                audience=self._client_id,
                clock_skew_in_seconds=self._clock_skew_seconds,
            )
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning("Google ID token verification failed: %s", e)
            raise IdentityVerificationError(str(e)) from e

        subject = claims.get("sub")
        if not subject:
            raise IdentityVerificationError("Google ID token has no subject")

        return GoogleIdentity(
            subject=subject,
            name=claims.get("name"),
            email=claims.get("email"),
            picture=claims.get("picture"),
        )
