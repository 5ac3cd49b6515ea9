"""Global error handlers mapping domain errors to JSON responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from moodmuse.activities.errors import (
    PersistenceError,
    UnknownActivityError,
    UnknownSeriesError,
    UnknownSessionError,
    ValidationError,
)
from moodmuse.reflection.client import ReflectionError

logger = structlog.get_logger()


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": "Validation error", "errors": exc.errors()},
        )

    # Handlers resolve along the MRO; these ValidationError subclasses map to 404.
    @app.exception_handler(UnknownActivityError)
    @app.exception_handler(UnknownSeriesError)
    async def not_found_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(UnknownSessionError)
    async def unknown_session_handler(_request: Request, exc: UnknownSessionError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": str(exc), "session_id": exc.session_id},
        )

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        logger.warning("persistence_failed", path=request.url.path, user_key=exc.user_key, error=str(exc))
        return JSONResponse(
            status_code=503,
            content={"detail": "Changes were applied but not saved yet", "unsynced": True},
        )

    @app.exception_handler(ReflectionError)
    async def reflection_handler(request: Request, exc: ReflectionError) -> JSONResponse:
        logger.warning("reflection_failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions; always returns JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
