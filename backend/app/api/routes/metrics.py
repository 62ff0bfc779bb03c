"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes:
    - clipboard_storage_latency_ms{operation, outcome}
    - clipboard_storage_errors_total{operation, reason}
    - clipboard_items_created_total{item_type}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
