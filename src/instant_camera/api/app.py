"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from instant_camera.api.photos import router as photos_router
from instant_camera.app_logging import configure_logging
from instant_camera.containers import AppContainer
from instant_camera.domain.errors import (
    CaptureBusyError,
    CaptureUnavailableError,
    ClipboardUnavailableError,
    DecodeError,
    InstantCameraError,
    PhotoNotFoundError,
)

_ERROR_STATUS: dict[type[InstantCameraError], int] = {
    PhotoNotFoundError: 404,
    CaptureBusyError: 409,
    DecodeError: 422,
    ClipboardUnavailableError: 503,
    CaptureUnavailableError: 503,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        photos = app.state.container.photo_store.load()
        logger.info("Loaded stored photos: count=%s", len(photos))
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(photos_router)

    @app.exception_handler(InstantCameraError)
    async def handle_camera_error(
        request: Request, exc: InstantCameraError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed: path=%s", request.url.path, exc_info=exc)
        else:
            logger.warning("Request rejected: path=%s error=%s", request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
