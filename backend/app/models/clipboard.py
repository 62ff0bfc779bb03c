"""Clipboard item domain models."""

from datetime import datetime
from typing import Literal

from pydantic import Field, model_validator

from backend.app.models.common import CamelModel

ItemType = Literal["text", "file"]


class ClipboardItem(CamelModel):
    """A user-owned note or uploaded file.

    ``item_type`` determines which optional fields are populated: text items
    carry ``markdown_content``; file items carry the file fields and, when the
    backend can sign links, a ``preview_url``.
    """

    id: str
    item_type: ItemType
    title: str | None = None
    markdown_content: str | None = None
    file_name: str | None = None
    content_type: str | None = None
    file_size_bytes: int | None = Field(None, ge=0)
    preview_url: str | None = None
    created_at: datetime

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "ClipboardItem":
        if self.item_type == "text":
            if self.file_name is not None or self.file_size_bytes is not None:
                raise ValueError("text items cannot carry file fields")
        elif self.markdown_content is not None:
            raise ValueError("file items cannot carry markdown content")
        return self


class StoredItemMetadata(CamelModel):
    """Metadata document persisted next to each item in object storage."""

    id: str
    item_type: ItemType
    title: str | None = None
    markdown_content: str | None = None
    file_key: str | None = None
    file_name: str | None = None
    content_type: str | None = None
    file_size_bytes: int | None = None
    created_at: datetime

    def to_item(self, preview_url: str | None = None) -> ClipboardItem:
        """Convert to the API representation."""
        return ClipboardItem(
            id=self.id,
            item_type=self.item_type,
            title=self.title,
            markdown_content=self.markdown_content,
            file_name=self.file_name,
            content_type=self.content_type,
            file_size_bytes=self.file_size_bytes,
            preview_url=preview_url,
            created_at=self.created_at,
        )


class ClipboardListResponse(CamelModel):
    """Response for GET /api/clipboard."""

    items: list[ClipboardItem]


class ClipboardTextCreateRequest(CamelModel):
    """Request body for POST /api/clipboard/text."""

    title: str | None = None
    markdown_content: str = ""


class ClipboardCreateResponse(CamelModel):
    """Response for item creation endpoints."""

    id: str
