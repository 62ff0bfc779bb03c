"""In-memory implementation of the clipboard store."""

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import BinaryIO

from backend.app.models.clipboard import ClipboardItem
from backend.app.storage.base import MARKDOWN_CONTENT_TYPE, new_item_id, normalize_title


@dataclass
class _StoredItem:
    item: ClipboardItem
    content: bytes


class InMemoryClipboardStore:
    """In-memory implementation of ClipboardStore.

    File items keep their bytes but have no preview URL.
    """

    def __init__(self) -> None:
        self._items: dict[str, list[_StoredItem]] = {}
        self._lock = threading.Lock()

    def list_items(self, user_id: str) -> list[ClipboardItem]:
        """List all items of a user, newest first."""
        with self._lock:
            indexed = list(enumerate(stored.item for stored in self._items.get(user_id, [])))

        # Sort by created_at descending, later insertions first on ties
        indexed.sort(key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [item for _, item in indexed]

    def create_text(self, user_id: str, markdown_content: str, title: str | None = None) -> str:
        """Store a markdown note."""
        body = markdown_content.strip()
        item = ClipboardItem(
            id=new_item_id(),
            item_type="text",
            title=normalize_title(title),
            markdown_content=body,
            content_type=MARKDOWN_CONTENT_TYPE,
            created_at=datetime.now(UTC),
        )
        self._append(user_id, _StoredItem(item=item, content=body.encode("utf-8")))
        return item.id

    def create_file(
        self,
        user_id: str,
        file_name: str,
        content_type: str,
        size: int,
        content: BinaryIO,
        title: str | None = None,
    ) -> str:
        """Store an uploaded file."""
        item = ClipboardItem(
            id=new_item_id(),
            item_type="file",
            title=normalize_title(title),
            file_name=file_name,
            content_type=content_type,
            file_size_bytes=size,
            created_at=datetime.now(UTC),
        )
        self._append(user_id, _StoredItem(item=item, content=content.read()))
        return item.id

    def delete_item(self, user_id: str, item_id: str) -> None:
        """Delete an item. Unknown ids are ignored."""
        with self._lock:
            items = self._items.get(user_id)
            if items is None:
                return
            self._items[user_id] = [s for s in items if s.item.id.lower() != item_id.lower()]

    def check_health(self) -> None:
        """Always healthy."""
        return None

    def get_content(self, user_id: str, item_id: str) -> bytes | None:
        """Get the stored bytes of an item (None if unknown).

        Not part of ClipboardStore; lets tests inspect what an upload stored.
        """
        with self._lock:
            for stored in self._items.get(user_id, []):
                if stored.item.id == item_id:
                    return stored.content
        return None

    def _append(self, user_id: str, stored: _StoredItem) -> None:
        with self._lock:
            self._items.setdefault(user_id, []).append(stored)
