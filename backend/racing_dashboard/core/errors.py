"""Error Hierarchy — typed, categorized exceptions for all gateway failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No upstream or database detail ever appears in user-facing messages

Design Decisions:
    - Single hierarchy with DashboardError base: one FastAPI handler catches all
    - A missing preference document is not an error: the store returns None
      and the Gateway substitutes defaults
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context carried for logging only; never serialized to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    upstream: str | None = None
    debug_info: str | None = None


class DashboardError(Exception):
    """Base exception for all gateway errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class RequestValidationFailed(DashboardError):
    """Missing or malformed request parameters."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UnauthorizedError(DashboardError):
    """No identity could be resolved for an identity-scoped route."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required", "UNAUTHORIZED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(DashboardError):
    """Preference persistence unreachable or failed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Preference store unavailable", "STORE_UNAVAILABLE",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class UpstreamUnavailableError(DashboardError):
    """External capability timed out, failed, or is not configured.

    `message` is the generic client-facing text; the cause goes in
    `context.debug_info` and is only logged.
    """
    def __init__(
        self,
        upstream: str,
        message: str,
        http_status: int = 502,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.upstream = upstream
        super().__init__(
            message, "UPSTREAM_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.upstream = upstream
