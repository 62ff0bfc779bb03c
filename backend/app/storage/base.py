"""Clipboard storage protocol and shared helpers."""

import re
import uuid
from typing import BinaryIO, Protocol

from backend.app.models.clipboard import ClipboardItem

_ITEM_ID_RE = re.compile(r"^[0-9a-f]{32}$")

DEFAULT_CONTENT_TYPE = "application/octet-stream"
MARKDOWN_CONTENT_TYPE = "text/markdown"


class StorageError(Exception):
    """Raised when the storage backend fails a request."""


def new_item_id() -> str:
    """Generate a new item id (32-char lowercase hex)."""
    return uuid.uuid4().hex


def is_valid_item_id(item_id: str) -> bool:
    """Check that an item id has the shape produced by ``new_item_id``."""
    return bool(_ITEM_ID_RE.match(item_id))


def normalize_title(title: str | None) -> str | None:
    """Blank titles are stored as ``None``."""
    if title is None or not title.strip():
        return None
    return title


class ClipboardStore(Protocol):
    """Per-user clipboard item storage.

    Every operation is scoped to a single owner; items of other users are
    never visible.
    """

    def list_items(self, user_id: str) -> list[ClipboardItem]:
        """List all items of a user, newest first."""
        ...

    def create_text(self, user_id: str, markdown_content: str, title: str | None = None) -> str:
        """Store a markdown note.

        Args:
            user_id: Owner
            markdown_content: Note body (trimmed before storing)
            title: Optional title

        Returns:
            New item id
        """
        ...

    def create_file(
        self,
        user_id: str,
        file_name: str,
        content_type: str,
        size: int,
        content: BinaryIO,
        title: str | None = None,
    ) -> str:
        """Store an uploaded file.

        Args:
            user_id: Owner
            file_name: Original file name
            content_type: MIME type
            size: Content length in bytes
            content: Readable binary stream
            title: Optional title

        Returns:
            New item id
        """
        ...

    def delete_item(self, user_id: str, item_id: str) -> None:
        """Delete an item and its content. Unknown ids are ignored."""
        ...

    def check_health(self) -> None:
        """Raise StorageError if the backend is unreachable."""
        ...
