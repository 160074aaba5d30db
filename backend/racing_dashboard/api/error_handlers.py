"""Error Handlers — every failure leaves the gateway as a DashboardError envelope.

Invariants:
    - DashboardError → its own status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR with per-field details
    - Any other exception → 500 INTERNAL_ERROR, never leaks internal details
    - Client errors (< 500) log at WARNING, server errors at ERROR; upstream
      and database detail is logged here and nowhere returned

Design Decisions:
    - Validation and catch-all responses are built from DashboardError
      subclasses, so all three share one envelope (timestamp included)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from racing_dashboard.core.errors import (
    DashboardError, ErrorCategory, ErrorSeverity, RequestValidationFailed,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(DashboardError, _handle_dashboard_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def _respond(exc: DashboardError, extra: dict | None = None) -> JSONResponse:
    body = exc.to_response()
    if extra:
        body["error"].update(extra)
    return JSONResponse(status_code=exc.http_status, content=body)


async def _handle_dashboard_error(request: Request, exc: DashboardError):
    log = logger.warning if exc.http_status < 500 else logger.error
    detail = f" ({exc.context.debug_info})" if exc.context.debug_info else ""
    log(
        f"{type(exc).__name__}: {exc.message}{detail}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
            "upstream": exc.context.upstream,
            "user_id": exc.context.user_id,
        },
    )
    return _respond(exc)


async def _handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Invalid request: {[d['field'] for d in details]}",
        extra={"path": request.url.path, "status_code": 400},
    )
    first_field = details[0]["field"] if details else ""
    return _respond(
        RequestValidationFailed("Invalid request data", first_field),
        {"details": details},
    )


async def _handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}",
        exc_info=exc,
        extra={"path": request.url.path, "status_code": 500},
    )
    return _respond(DashboardError(
        "An unexpected error occurred", "INTERNAL_ERROR",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    ))
