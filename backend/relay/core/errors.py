"""Error Hierarchy — typed, categorized exceptions for all relay failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are raised before any outbound call
    - UpstreamError mirrors the upstream status; upstream body travels in details
    - to_response() produces the single REST envelope used by every error

Design Decisions:
    - Single hierarchy with RelayError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
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
    FORBIDDEN = "forbidden"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    upstream: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class RelayError(Exception):
    """Base exception for all relay errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingParameterError(RelayError):
    """Required path or body parameter absent or blank."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{name} is required.", "MISSING_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.name = name


class InvalidProxyTargetError(RelayError):
    """Proxy target is not an absolute http(s) URL."""
    def __init__(self, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"Proxy target must be an absolute http(s) URL: '{target}'",
            "INVALID_PROXY_TARGET", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.target = target


class ProxyTargetForbiddenError(RelayError):
    """Proxy target host is not in PROXY_ALLOWED_HOSTS."""
    def __init__(self, host: str, context: ErrorContext | None = None):
        super().__init__(
            f"Proxying to host '{host}' is not allowed",
            "PROXY_TARGET_FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )
        self.host = host


# ─── Configuration / Upstream Errors (500-level) ────────────────

class ServiceNotConfiguredError(RelayError):
    """Optional upstream has no credentials configured."""
    def __init__(self, service: str, context: ErrorContext | None = None):
        super().__init__(
            f"{service} integration is not configured",
            "SERVICE_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, context, 503,
        )
        self.service = service


class UpstreamError(RelayError):
    """Upstream answered with a non-2xx status (or an unreadable 2xx body)."""
    def __init__(
        self,
        operation: str,
        status_code: int | None,
        details: Any = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Failed to {operation}.", "UPSTREAM_ERROR",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, ctx,
            status_code or 500, details,
        )
        self.operation = operation
        self.status_code = status_code


class UpstreamUnavailableError(RelayError):
    """Transport failure: connection refused, timeout, protocol error."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "Internal Server Error", "UPSTREAM_UNAVAILABLE",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.CRITICAL, ctx, 500,
            {"message": "Internal Server Error"},
        )
        self.operation = operation
