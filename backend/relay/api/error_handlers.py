"""Error Handlers — global exception handlers for the relay API.

Invariants:
    - RelayError → structured JSON with error code, message, severity, details
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (RelayError), validation (Pydantic), catch-all (Exception)
    - Validation mapped to 400 (not FastAPI's default 422) to match the callers' contract
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from relay.core.errors import RelayError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_relay_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_relay_error_handler(app: FastAPI) -> None:
    """Register relay domain/upstream error handler."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        """Handle all relay errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"RelayError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status_code": exc.http_status,
                "upstream": exc.context.upstream,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
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


def _describe_first_error(errors: list[dict]) -> str:
    """Human message naming the first failing body field."""
    if not errors:
        return "Invalid request data"
    loc = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
    if not loc or loc[-1].isdigit():
        return "Invalid request data"
    field = ".".join(loc)
    if errors[0].get("type") in ("dict_type", "model_type", "missing") and len(loc) == 1:
        return f"Valid {field} object is required."
    return f"Valid {field} is required."


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": _describe_first_error(errors),
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }
