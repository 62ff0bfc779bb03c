"""Clipboard store construction and FastAPI dependency."""

from functools import lru_cache

from backend.app.config import Settings, get_settings
from backend.app.storage.base import ClipboardStore
from backend.app.storage.inmemory import InMemoryClipboardStore
from backend.app.storage.s3 import S3ClipboardStore


def create_store_from_settings(settings: Settings) -> ClipboardStore:
    """Create the configured clipboard store.

    Raises:
        ValueError: If the S3 backend is selected without bucket or region.
    """
    if settings.storage_backend == "memory":
        return InMemoryClipboardStore()

    if not settings.aws_bucket_name or not settings.aws_region:
        raise ValueError("AWS_BUCKET_NAME and AWS_REGION must be set for the s3 storage backend.")

    return S3ClipboardStore.from_settings(settings)


@lru_cache
def get_clipboard_store() -> ClipboardStore:
    """Get the process-wide clipboard store (boto3 clients pool connections)."""
    return create_store_from_settings(get_settings())
