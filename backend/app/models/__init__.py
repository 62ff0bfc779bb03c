"""Models package - re-exports for convenience."""

from backend.app.models.auth import (
    AuthGoogleRequest,
    AuthResponse,
    GoogleIdentity,
    ProfileResponse,
    SessionPrincipal,
)
from backend.app.models.clipboard import (
    ClipboardCreateResponse,
    ClipboardItem,
    ClipboardListResponse,
    ClipboardTextCreateRequest,
    ItemType,
    StoredItemMetadata,
)
from backend.app.models.common import CamelModel
from backend.app.models.health import HealthResponse

__all__ = [
    # Common
    "CamelModel",
    # Auth
    "GoogleIdentity",
    "SessionPrincipal",
    "AuthGoogleRequest",
    "AuthResponse",
    "ProfileResponse",
    # Clipboard
    "ItemType",
    "ClipboardItem",
    "StoredItemMetadata",
    "ClipboardListResponse",
    "ClipboardTextCreateRequest",
    "ClipboardCreateResponse",
    # Health
    "HealthResponse",
]
