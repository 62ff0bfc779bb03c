"""Auth endpoint - POST /api/auth/google."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.api.auth import get_identity_verifier, get_token_service
from backend.app.auth.google import IdentityVerificationError, IdentityVerifier
from backend.app.auth.tokens import JwtTokenService
from backend.app.models.auth import AuthGoogleRequest, AuthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/google", response_model=AuthResponse)
def exchange_google_token(
    request: AuthGoogleRequest,
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
    token_service: Annotated[JwtTokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Exchange a Google ID token for a session token.

    Declared sync so the Google certificate fetch runs in the threadpool.

    Args:
        request: Google ID token from the browser
        verifier: Google ID token verifier
        token_service: Session token service

    Returns:
        Bearer session token and its lifetime

    Raises:
        HTTPException: 401 if the ID token is blank or fails verification
    """
    if not request.id_token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="ID token is required")

    try:
        identity = verifier.verify(request.id_token)
    except IdentityVerificationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid Google ID token"
        ) from e

    token, expires_in = token_service.create_access_token(identity)
    logger.info("Issued session token for subject %s", identity.subject)

    return AuthResponse(access_token=token, expires_in_seconds=expires_in)
