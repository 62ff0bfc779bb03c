"""Health check endpoints.

- GET /api/health: liveness, always 200
- GET /healthz: component status including storage, 503 when degraded
"""

import logging
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.app.models.health import HealthResponse
from backend.app.storage.base import ClipboardStore, StorageError
from backend.app.storage.factory import get_clipboard_store

logger = logging.getLogger(__name__)

router = APIRouter()


def check_storage(store: ClipboardStore) -> tuple[bool, str]:
    """Check storage connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        store.check_health()
        return (True, "ok")
    except StorageError as e:
        logger.warning("Storage health check failed: %s", e)
        return (False, f"error: {e}")


@router.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Simple health check for Docker/k8s."""
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/healthz", response_model=None)
def healthz(
    store: Annotated[ClipboardStore, Depends(get_clipboard_store)],
) -> dict[str, Any] | JSONResponse:
    """Health check with component details.

    Returns:
        200 with component status if storage is reachable
        503 otherwise
    """
    storage_ok, storage_status = check_storage(store)

    response_body = {
        "status": "ok" if storage_ok else "degraded",
        "components": {"storage": storage_status},
    }

    if not storage_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body
