"""Clipboard endpoints - list, create text, upload file, delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status

from backend.app.api.auth import get_current_user
from backend.app.config import Settings, get_settings
from backend.app.models.auth import SessionPrincipal
from backend.app.models.clipboard import (
    ClipboardCreateResponse,
    ClipboardListResponse,
    ClipboardTextCreateRequest,
)
from backend.app.storage.base import DEFAULT_CONTENT_TYPE, ClipboardStore, is_valid_item_id
from backend.app.storage.factory import get_clipboard_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clipboard", tags=["clipboard"])

# Storage calls are blocking (boto3), so handlers are sync and run in the threadpool.


@router.get("", response_model=ClipboardListResponse)
def list_items(
    user: Annotated[SessionPrincipal, Depends(get_current_user)],
    store: Annotated[ClipboardStore, Depends(get_clipboard_store)],
) -> ClipboardListResponse:
    """List the user's clipboard items, newest first."""
    return ClipboardListResponse(items=store.list_items(user.user_id))


@router.post(
    "/text", response_model=ClipboardCreateResponse, status_code=status.HTTP_201_CREATED
)
def create_text(
    request: ClipboardTextCreateRequest,
    user: Annotated[SessionPrincipal, Depends(get_current_user)],
    store: Annotated[ClipboardStore, Depends(get_clipboard_store)],
) -> ClipboardCreateResponse:
    """Create a markdown note.

    Raises:
        HTTPException: 400 if the markdown content is blank
    """
    if not request.markdown_content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Markdown content is required."
        )

    item_id = store.create_text(user.user_id, request.markdown_content, request.title)
    return ClipboardCreateResponse(id=item_id)


@router.post(
    "/files", response_model=ClipboardCreateResponse, status_code=status.HTTP_201_CREATED
)
def upload_file(
    user: Annotated[SessionPrincipal, Depends(get_current_user)],
    store: Annotated[ClipboardStore, Depends(get_clipboard_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    file: Annotated[UploadFile | None, File()] = None,
    title: Annotated[str | None, Form()] = None,
) -> ClipboardCreateResponse:
    """Upload a file or image.

    Raises:
        HTTPException: 400 if no file or an empty file is sent,
            413 if it exceeds the configured upload limit
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is required.")

    size = _measure(file)
    if size == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is required.")
    if size > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_bytes} byte limit.",
        )

    item_id = store.create_file(
        user.user_id,
        file_name=file.filename or "upload",
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        size=size,
        content=file.file,
        title=title,
    )
    logger.info("Stored upload %s (%d bytes) for %s", item_id, size, user.user_id)
    return ClipboardCreateResponse(id=item_id)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str,
    user: Annotated[SessionPrincipal, Depends(get_current_user)],
    store: Annotated[ClipboardStore, Depends(get_clipboard_store)],
) -> Response:
    """Delete an item. Unknown ids are a no-op.

    Raises:
        HTTPException: 400 if the id is malformed
    """
    normalized = item_id.lower()
    if not is_valid_item_id(normalized):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid item id.")

    store.delete_item(user.user_id, normalized)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _measure(upload: UploadFile) -> int:
    """Byte size of an upload, leaving the stream rewound."""
    if upload.size is not None:
        return upload.size

    stream = upload.file
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    return size
