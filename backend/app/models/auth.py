"""Identity and session token models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from backend.app.models.common import CamelModel


class GoogleIdentity(BaseModel):
    """Verified claims of a Google ID token."""

    subject: str
    name: str | None = None
    email: str | None = None
    picture: str | None = None


class SessionPrincipal(BaseModel):
    """Authenticated user decoded from a session token."""

    user_id: str
    name: str | None = None
    email: str | None = None
    picture_url: str | None = None
    expires_at: datetime


class AuthGoogleRequest(CamelModel):
    """Request body for POST /api/auth/google."""

    id_token: str = ""


class AuthResponse(CamelModel):
    """Response for POST /api/auth/google."""

    access_token: str
    token_type: Literal["Bearer"] = "Bearer"
    expires_in_seconds: int


class ProfileResponse(CamelModel):
    """Response for GET /api/profile/me."""

    user_id: str
    name: str | None = None
    email: str | None = None
    picture_url: str | None = None
