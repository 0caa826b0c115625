"""Error Hierarchy — typed, categorized exceptions for all Portico failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ConfigurationError is raised at startup only and is never recovered locally
    - Request-time errors (429) carry their HTTP status for the global handler
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with PorticoError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    container: str | None = None
    route_file: str | None = None
    version: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class PorticoError(Exception):
    """Base exception for all Portico errors."""

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
                "context": {
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Startup Errors ─────────────────────────────────────────────

class ConfigurationError(PorticoError):
    """Containers config or route wiring is wrong. Aborts application startup."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "WRONG_CONFIGURATION", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class RouteRegistrationError(PorticoError):
    """Route registration invoked outside its one-shot lifecycle."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ROUTE_REGISTRATION_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Request Errors ─────────────────────────────────────────────

class RateLimitExceededError(PorticoError):
    """Client exceeded the throttle window of a route group."""
    def __init__(
        self, limit: int, retry_after_ms: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"Rate limit of {limit} requests exceeded",
            "RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
        )
        self.limit = limit
