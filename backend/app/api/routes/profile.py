"""Profile endpoint - GET /api/profile/me."""

from typing import Annotated

from fastapi import APIRouter, Depends

from backend.app.api.auth import get_current_user
from backend.app.models.auth import ProfileResponse, SessionPrincipal

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_me(user: Annotated[SessionPrincipal, Depends(get_current_user)]) -> ProfileResponse:
    """Return the signed-in user's profile from session token claims."""
    return ProfileResponse(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        picture_url=user.picture_url,
    )
