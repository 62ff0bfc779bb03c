"""Health check models."""

from datetime import datetime

from backend.app.models.common import CamelModel


class HealthResponse(CamelModel):
    """Response for GET /api/health."""

    status: str
    timestamp: datetime
