"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from macro_tracker.api.routes import (
    analytics_router,
    foods_router,
    logs_router,
    meals_router,
)
from macro_tracker.app_logging import configure_logging
from macro_tracker.config import parse_allowed_origins
from macro_tracker.containers import AppContainer
from macro_tracker.domain.errors import (
    ConflictError,
    InvalidInputError,
    MacroTrackerError,
    NotFoundError,
)

_ERROR_STATUS: dict[type[MacroTrackerError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Macro tracker API starting (environment=%s)",
            app.state.container.settings.environment,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(logs_router)
    app.include_router(analytics_router)

    @app.exception_handler(MacroTrackerError)
    async def handle_app_error(
        request: Request, exc: MacroTrackerError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.exception(
                "Request failed: %s %s", request.method, request.url.path, exc_info=exc
            )
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": _validation_details(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    return app


def _status_for(exc: MacroTrackerError) -> int:
    """Map an application error to its HTTP status, 500 when unmapped."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _validation_details(exc: RequestValidationError) -> list[str]:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        details.append(f"{location}: {error.get('msg', 'invalid')}")
    return details
