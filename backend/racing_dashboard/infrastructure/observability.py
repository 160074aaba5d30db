"""Structured Logging — JSON log lines plus one access line per request.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Gateway extras (user_id, upstream, error_code, path, status_code,
      series, entries, method, duration_ms) appear only when set
    - setup_logging replaces its own handler, so calling it twice never
      duplicates output
    - Access lines never include query strings or request bodies

Design Decisions:
    - Record time taken from LogRecord.created, not the time of formatting
    - httpx/httpcore request logging silenced below WARNING: upstream calls are
      logged by the upstream clients with the capability name instead
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request

_HANDLER_NAME = "racing_dashboard"
_SERVICE = "racing-dashboard"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")

_EXTRA_FIELDS = (
    "user_id", "upstream", "error_code", "path", "status_code",
    "series", "entries", "method", "duration_ms",
)

access_logger = logging.getLogger("racing_dashboard.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": _SERVICE,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler for this service; safe to call repeatedly."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def register_access_logging(app: FastAPI) -> None:
    """Log method, path, status and duration for every request."""

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response
