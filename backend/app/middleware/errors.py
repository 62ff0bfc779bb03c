"""Catch-all error middleware.

Registered before CORSMiddleware so it sits inside it: 500 responses still
carry the CORS headers and reach the browser as a 500.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    """Turn unhandled exceptions into a generic 500."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "%s on %s %s (500)",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc_info=exc,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": "Request failed"},
            )
