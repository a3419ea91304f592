"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from nutri_snap.app_logging import configure_logging
from nutri_snap.config import parse_allowed_origins
from nutri_snap.containers import AppContainer

NO_FILE_MESSAGE = "No file uploaded."
TOO_LARGE_MESSAGE = "File too large."
ANALYSIS_FAILED_MESSAGE = "Error analyzing image. See console for details."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/analyze_meal", response_model=None)
    async def analyze_meal(
        request: Request, file: UploadFile | None = File(default=None)
    ) -> dict[str, object] | PlainTextResponse:
        """Analyze an uploaded meal photo and return the provider's JSON."""
        state_container: AppContainer = request.app.state.container
        if file is None:
            return PlainTextResponse(
                NO_FILE_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
            )
        max_bytes = state_container.settings.max_upload_bytes
        image_bytes = await file.read(max_bytes + 1)
        if not image_bytes:
            return PlainTextResponse(
                NO_FILE_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST
            )
        if len(image_bytes) > max_bytes:
            return PlainTextResponse(
                TOO_LARGE_MESSAGE,
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

        try:
            analysis = await state_container.analysis_service.analyze(
                image_bytes, file.content_type
            )
        except Exception as exc:
            logger.exception(
                "Error analyzing image",
                extra={"upload_filename": file.filename, "size": len(image_bytes)},
            )
            return PlainTextResponse(
                _format_analysis_error(state_container, exc),
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return analysis.model_dump()

    return app


def _format_analysis_error(state_container: AppContainer, exc: Exception) -> str:
    """Return the client-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{ANALYSIS_FAILED_MESSAGE} (debug: {detail})"
    return ANALYSIS_FAILED_MESSAGE
