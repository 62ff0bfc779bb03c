"""S3-backed clipboard store.

Key layout per item::

    {prefix}/{user_id}/{item_id}/metadata.json
    {prefix}/{user_id}/{item_id}/content.md     (text items)
    {prefix}/{user_id}/{item_id}/content        (file items)

The metadata document is the source of truth for listings; content objects
are only read through presigned URLs.
"""

import json
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, BinaryIO
from urllib.parse import quote

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from backend.app.config import Settings
from backend.app.models.clipboard import ClipboardItem, StoredItemMetadata
from backend.app.storage.base import (
    MARKDOWN_CONTENT_TYPE,
    StorageError,
    new_item_id,
    normalize_title,
)
from backend.app.utils.logging import StructuredStorageLogger
from backend.app.utils.metrics import PrometheusStorageMetrics

logger = logging.getLogger(__name__)

METADATA_FILE = "metadata.json"
TEXT_CONTENT_FILE = "content.md"
FILE_CONTENT_FILE = "content"

# S3 DeleteObjects accepts at most 1000 keys per call
_DELETE_BATCH = 1000

# S3 caps user metadata at 2 KB in total
_MAX_TITLE_METADATA = 1024


class S3ClipboardStore:
    """ClipboardStore implementation on top of an S3 bucket."""

    def __init__(
        self,
        client: BaseClient,
        bucket: str,
        region: str,
        prefix: str = "clipboard",
        presigned_url_ttl_seconds: int = 15 * 60,
    ) -> None:
        self._s3 = client
        self._bucket = bucket
        self._region = region
        self._prefix = prefix.rstrip("/")
        self._presigned_ttl = presigned_url_ttl_seconds
        self._bucket_ready = False
        self._log = StructuredStorageLogger()
        self._metrics = PrometheusStorageMetrics()

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ClipboardStore":
        """Build a store with a boto3 client configured from settings."""
        client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            config=Config(signature_version="s3v4"),
        )
        return cls(
            client=client,
            bucket=settings.aws_bucket_name,
            region=settings.aws_region,
            prefix=settings.storage_prefix,
            presigned_url_ttl_seconds=settings.presigned_url_ttl_minutes * 60,
        )

    # ------------------------------------------------------------------
    # ClipboardStore
    # ------------------------------------------------------------------

    def list_items(self, user_id: str) -> list[ClipboardItem]:
        """List all items of a user, newest first."""
        with self._operation("list", user_id):
            self._ensure_bucket()
            items: list[ClipboardItem] = []

            for key in self._iter_keys(self._user_prefix(user_id)):
                if not key.lower().endswith(f"/{METADATA_FILE}"):
                    continue

                metadata = self._get_metadata(key)
                if metadata is None:
                    continue
                preview_url = self._presign(metadata.file_key) if metadata.file_key else None
                items.append(metadata.to_item(preview_url=preview_url))

        items.sort(key=lambda x: x.created_at, reverse=True)
        return items

    def create_text(self, user_id: str, markdown_content: str, title: str | None = None) -> str:
        """Store a markdown note as content.md plus metadata.json."""
        item_id = new_item_id()
        body = markdown_content.strip()
        base_key = self._item_prefix(user_id, item_id)

        with self._operation("create_text", user_id, item_id):
            self._ensure_bucket()
            self._s3.put_object(
                Bucket=self._bucket,
                Key=f"{base_key}{TEXT_CONTENT_FILE}",
                Body=body.encode("utf-8"),
                ContentType=MARKDOWN_CONTENT_TYPE,
                Metadata={"user-id": user_id, "item-type": "text"},
            )

            metadata = StoredItemMetadata(
                id=item_id,
                item_type="text",
                title=normalize_title(title),
                markdown_content=body,
                content_type=MARKDOWN_CONTENT_TYPE,
                created_at=datetime.now(UTC),
            )
            self._put_metadata(base_key, user_id, metadata)

        self._metrics.inc_created("text")
        return item_id

    def create_file(
        self,
        user_id: str,
        file_name: str,
        content_type: str,
        size: int,
        content: BinaryIO,
        title: str | None = None,
    ) -> str:
        """Upload file content plus metadata.json."""
        item_id = new_item_id()
        base_key = self._item_prefix(user_id, item_id)
        file_key = f"{base_key}{FILE_CONTENT_FILE}"

        with self._operation("create_file", user_id, item_id):
            self._ensure_bucket()
            self._s3.upload_fileobj(
                content,
                self._bucket,
                file_key,
                ExtraArgs={
                    "ContentType": content_type,
                    "Metadata": {
                        "user-id": user_id,
                        "item-type": "file",
                        # S3 user metadata must be ASCII
                        "original-file-name": quote(file_name),
                    },
                },
            )

            metadata = StoredItemMetadata(
                id=item_id,
                item_type="file",
                title=normalize_title(title),
                file_key=file_key,
                file_name=file_name,
                content_type=content_type,
                file_size_bytes=size,
                created_at=datetime.now(UTC),
            )
            self._put_metadata(base_key, user_id, metadata)

        self._metrics.inc_created("file")
        return item_id

    def delete_item(self, user_id: str, item_id: str) -> None:
        """Delete every object under the item prefix."""
        with self._operation("delete", user_id, item_id):
            self._ensure_bucket()
            keys = list(self._iter_keys(self._item_prefix(user_id, item_id)))

            for start in range(0, len(keys), _DELETE_BATCH):
                batch = keys[start : start + _DELETE_BATCH]
                self._s3.delete_objects(
                    Bucket=self._bucket,
                    Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
                )

    def check_health(self) -> None:
        """Check that the bucket is reachable, creating it on first use."""
        with self._operation("health", "-"):
            if self._bucket_ready:
                self._s3.head_bucket(Bucket=self._bucket)
            else:
                self._ensure_bucket()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _user_prefix(self, user_id: str) -> str:
        return f"{self._prefix}/{user_id}/"

    def _item_prefix(self, user_id: str, item_id: str) -> str:
        # Trailing slash keeps one id from matching another sharing its head
        return f"{self._prefix}/{user_id}/{item_id}/"

    def _iter_keys(self, prefix: str) -> Iterator[str]:
        paginator = self._s3.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                yield obj["Key"]

    def _get_metadata(self, key: str) -> StoredItemMetadata | None:
        """Read one metadata document; unreadable documents are skipped."""
        response = self._s3.get_object(Bucket=self._bucket, Key=key)
        body = response["Body"].read()
        try:
            return StoredItemMetadata.model_validate_json(body)
        except ValueError as e:
            logger.warning("Skipping unreadable metadata %s: %s", key, e)
            return None

    def _put_metadata(self, base_key: str, user_id: str, metadata: StoredItemMetadata) -> None:
        object_metadata: dict[str, str] = {
            "user-id": user_id,
            "item-type": metadata.item_type,
            "created-at": metadata.created_at.isoformat(),
        }
        if metadata.title:
            quoted_title = quote(metadata.title)
            # metadata.json keeps the full title
            if len(quoted_title) <= _MAX_TITLE_METADATA:
                object_metadata["title"] = quoted_title

        document = metadata.model_dump(mode="json", by_alias=True)
        self._s3.put_object(
            Bucket=self._bucket,
            Key=f"{base_key}{METADATA_FILE}",
            Body=json.dumps(document).encode("utf-8"),
            ContentType="application/json",
            Metadata=object_metadata,
        )

    def _presign(self, key: str) -> str:
        url: str = self._s3.generate_presigned_url(
            "get_object",
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=self._presigned_ttl,
        )
        return url

    def _ensure_bucket(self) -> None:
        """Create the bucket on first use if it does not exist."""
        if self._bucket_ready:
            return

        try:
            self._s3.head_bucket(Bucket=self._bucket)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in ("404", "NoSuchBucket", "NotFound"):
                raise
            self._create_bucket()

        self._bucket_ready = True

    def _create_bucket(self) -> None:
        kwargs: dict[str, Any] = {"Bucket": self._bucket}
        if self._region and self._region != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        try:
            logger.info("Creating bucket: %s", self._bucket)
            self._s3.create_bucket(**kwargs)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "BucketAlreadyOwnedByYou":
                raise

    @contextmanager
    def _operation(self, operation: str, user_id: str, item_id: str | None = None) -> Iterator[None]:
        """Time, log and count a storage operation; wrap boto errors in StorageError."""
        started = time.perf_counter()
        try:
            yield
        except (ClientError, BotoCoreError, ValueError) as e:
            latency_ms = (time.perf_counter() - started) * 1000
            reason = _error_reason(e)
            self._metrics.record_latency(operation, "error", latency_ms)
            self._metrics.inc_error(operation, reason)
            self._log.log_operation(
                operation, user_id, "error", latency_ms, item_id=item_id, error_reason=reason
            )
            logger.exception("Storage operation failed: %s", operation)
            raise StorageError(f"{operation} failed: {reason}") from e

        latency_ms = (time.perf_counter() - started) * 1000
        self._metrics.record_latency(operation, "success", latency_ms)
        self._log.log_operation(operation, user_id, "success", latency_ms, item_id=item_id)


def _error_reason(error: Exception) -> str:
    if isinstance(error, ClientError):
        code: str = error.response.get("Error", {}).get("Code", "ClientError")
        return code
    return type(error).__name__
