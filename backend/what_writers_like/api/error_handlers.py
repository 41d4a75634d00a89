"""Error Handlers — global exception handlers for the What Writers Like API.

Invariants:
    - WritersError → its own to_response() envelope and http_status; a
      self-opinion caught by the service or by the storage trigger renders the same
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details
    - Every handled error is logged with its entity context; the level follows
      the outcome: 5xx → ERROR, storage-caught invariant → WARNING, other 4xx → INFO
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from what_writers_like.core.errors import (
    ErrorSeverity, SelfOpinionViolationError, WritersError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(WritersError, writers_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


def _log_level(exc: WritersError) -> int:
    if exc.http_status >= 500:
        return logging.ERROR
    if isinstance(exc, SelfOpinionViolationError) and exc.source == "storage":
        return logging.WARNING
    return logging.INFO


def _log_extra(exc: WritersError, request: Request) -> dict:
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "entity": exc.context.entity,
        "entity_id": exc.context.entity_id,
    }
    if isinstance(exc, SelfOpinionViolationError):
        extra["source"] = exc.source
    return extra


async def writers_error_handler(request: Request, exc: WritersError) -> JSONResponse:
    """Render a domain/infrastructure error as its REST envelope."""
    logger.log(
        _log_level(exc), f"{exc.code}: {exc.message}",
        extra=_log_extra(exc, request),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Reject malformed bodies and query strings with 400 and per-field details."""
    logger.info(
        f"Request validation failed: {len(exc.errors())} error(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
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
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
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
