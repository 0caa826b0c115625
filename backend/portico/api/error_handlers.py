"""Error Handlers — global exception handlers for the Portico application.

Invariants:
    - PorticoError → structured JSON with error code, message, severity
      (plus Retry-After when the error knows it)
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details
"""

import logging
import math

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portico.core.errors import ErrorSeverity, PorticoError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_portico_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_portico_error_handler(app: FastAPI) -> None:
    """Register Portico domain/infrastructure error handler."""

    @app.exception_handler(PorticoError)
    async def portico_error_handler(request: Request, exc: PorticoError):
        """Handle all Portico errors raised while serving a request."""
        log = logger.warning if exc.severity == ErrorSeverity.WARNING else logger.error
        log(
            f"PorticoError on {request.url.path}: {exc.message}",
            extra={"error_code": exc.code},
        )
        headers = None
        if exc.context.retry_after_ms is not None:
            headers = {"Retry-After": str(math.ceil(exc.context.retry_after_ms / 1000))}
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
