"""FastAPI application factory."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from timesheet_tracker.api.admin import router as admin_router
from timesheet_tracker.api.auth import router as auth_router
from timesheet_tracker.api.jobs import router as jobs_router
from timesheet_tracker.api.timesheet import router as timesheet_router
from timesheet_tracker.app_logging import configure_logging
from timesheet_tracker.config import parse_allowed_origins
from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.errors import (
    AuthError,
    JobNotFoundError,
    PermissionDeniedError,
    StorageError,
    TimesheetError,
)

# Checked in order; the first matching class wins.
_ERROR_STATUS: list[tuple[type[TimesheetError], int]] = [
    (JobNotFoundError, 404),
    (PermissionDeniedError, 403),
    (AuthError, 401),
    (StorageError, 500),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    settings = container.settings

    app = FastAPI(title="Timesheet Tracker")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(
            settings.allowed_origins, settings.environment
        ),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth_router)
    app.include_router(timesheet_router)
    app.include_router(jobs_router)
    app.include_router(admin_router)

    @app.exception_handler(TimesheetError)
    async def timesheet_error_handler(
        request: Request, exc: TimesheetError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if isinstance(exc, StorageError):
            logger.error("Storage failure on %s", request.url.path, exc_info=exc)
            return JSONResponse(
                status_code=status_code, content={"error": "Internal server error"}
            )
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": _format_validation_errors(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "ok",
            "environment": settings.environment,
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    return app


def error_status(exc: TimesheetError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into a single human-readable message."""
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location)
        message = error.get("msg", "Invalid value")
        messages.append(f"{field}: {message}" if field else message)
    return "; ".join(messages) or "Invalid request"
