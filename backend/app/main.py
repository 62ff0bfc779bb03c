"""FastAPI application - clipboard sync API."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.routes.auth import router as auth_router
from backend.app.api.routes.clipboard import router as clipboard_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.profile import router as profile_router
from backend.app.config import Settings, get_settings
from backend.app.middleware.errors import CatchAllExceptionMiddleware
from backend.app.storage.base import StorageError
from backend.app.utils.logging import configure_logging

logger = logging.getLogger(__name__)

API_TITLE = "Clipboard Sync API"
API_VERSION = "0.1.0"


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input is a 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Storage request failed"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Raises:
        ConfigurationError: If required auth, storage or CORS settings are missing
    """
    if settings is None:
        settings = get_settings()
    settings.validate_required()

    configure_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(title=API_TITLE, version=API_VERSION)

    # Added first so CORSMiddleware wraps it
    app.add_middleware(CatchAllExceptionMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, _storage_error_handler)  # type: ignore[arg-type]

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(auth_router)
    app.include_router(profile_router)
    app.include_router(clipboard_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": API_TITLE, "version": API_VERSION}

    logger.info("Application configured (storage backend: %s)", settings.storage_backend)
    return app


app = create_app()
