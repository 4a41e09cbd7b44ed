"""Error Hierarchy — typed, categorized exceptions for all RouteSaver failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {success: false, message} envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RouteSaverError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Cross-user access raises NotFound, never a 403: existence of other users'
      routes must not be observable
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from routesaver.core import messages


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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    route_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RouteSaverError(Exception):
    """Base exception for all RouteSaver errors."""

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
        """Convert to the standard REST error envelope."""
        return {"success": False, "message": self.message}

    def log_extra(self) -> dict:
        """Structured fields for the JSON log formatter."""
        return {
            "error_code": self.code,
            "user_id": self.context.user_id,
            "route_id": self.context.route_id,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(RouteSaverError):
    """Bad or missing input. Multiple field messages are joined with '. '."""
    def __init__(
        self, message: str | list[str], context: ErrorContext | None = None,
    ):
        if isinstance(message, list):
            message = ". ".join(message)
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class Unauthorized(RouteSaverError):
    """Missing/invalid/expired token, unknown user, or bad credentials."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class NotFound(RouteSaverError):
    """Resource absent or not owned by the requesting user."""
    def __init__(
        self, message: str = messages.ROUTE_NOT_FOUND,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class Conflict(RouteSaverError):
    """Unique constraint would be violated (duplicate email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(RouteSaverError):
    """Unexpected failure. Message is always the generic one."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            messages.INTERNAL_ERROR, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(RouteSaverError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"success": False, "message": messages.INTERNAL_ERROR}


class ExternalServiceError(RouteSaverError):
    """Road-routing or geocoding service call failed."""
    def __init__(self, service: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"{service} error: {message}",
            "EXTERNAL_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.service = service
