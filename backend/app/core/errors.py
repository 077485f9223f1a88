"""Error Hierarchy: typed exceptions for every HealthJobs failure mode.

Invariants:
    - Every error has a message (str), code (str), http_status (int), severity (ErrorSeverity)
    - to_response() produces the failure envelope: success=False, error, message, code, details?, correlationId
    - `error` is the taxonomy name (class name unless overridden), `code` is machine-readable
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AppError base: the global handler catches all (ADR: uniform error shape)
    - Token failures subclass UnauthorizedError and only differ by code, so clients can
      tell TOKEN_EXPIRED from INVALID_TOKEN while both stay 401
    - DatabaseError carries whatever status the error taxonomy decided (ADR: taxonomy is the
      single source of truth for persistence failures)
"""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AppError(Exception):
    """Base exception for all HealthJobs API errors."""

    name: str | None = None

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.severity = severity
        self.details = details

    @property
    def error_name(self) -> str:
        return self.name or type(self).__name__

    def to_response(self, correlation_id: str) -> dict:
        """Convert to the standard failure envelope."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.error_name,
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            body["details"] = self.details
        body["correlationId"] = correlation_id
        return body


# --- Client errors (400-level) ------------------------------------------------

class BadRequestError(AppError):
    """Request is syntactically fine but cannot be served as sent."""
    def __init__(self, message: str = "Bad request"):
        super().__init__(message, "BAD_REQUEST", 400, ErrorSeverity.WARNING)


class ValidationError(AppError):
    """Payload failed schema validation."""
    def __init__(
        self,
        message: str = "Invalid request data",
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", 400, ErrorSeverity.WARNING, details,
        )


class UnauthorizedError(AppError):
    """Caller could not be authenticated."""
    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHORIZED"):
        super().__init__(message, code, 401, ErrorSeverity.WARNING)


class TokenExpiredError(UnauthorizedError):
    """Bearer credential signature is valid but expired."""
    name = "UnauthorizedError"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, "TOKEN_EXPIRED")


class InvalidTokenError(UnauthorizedError):
    """Bearer credential is malformed or its signature does not verify."""
    name = "UnauthorizedError"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, "INVALID_TOKEN")


class ForbiddenError(AppError):
    """Authenticated caller is not allowed to touch this resource."""
    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message, "FORBIDDEN", 403, ErrorSeverity.WARNING)


class NotFoundError(AppError):
    """Requested resource does not exist."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, "NOT_FOUND", 404, ErrorSeverity.INFO)


class ConflictError(AppError):
    """Resource already exists."""
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, "CONFLICT", 409, ErrorSeverity.WARNING)


# --- Server errors (500-level) ------------------------------------------------

class DatabaseError(AppError):
    """Persistence operation failed; status comes from the error taxonomy."""
    def __init__(self, message: str = "Database operation failed", http_status: int = 500):
        severity = ErrorSeverity.CRITICAL if http_status >= 500 else ErrorSeverity.ERROR
        super().__init__(message, "DATABASE_ERROR", http_status, severity)


class InternalServerError(AppError):
    """Unexpected server-side failure."""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, "INTERNAL_SERVER_ERROR", 500, ErrorSeverity.CRITICAL)


class ServerMisconfiguredError(AppError):
    """Process is missing configuration it needs to serve this request."""
    name = "Server Configuration Error"

    def __init__(self, message: str = "Authentication is not configured on this server"):
        super().__init__(message, "SERVER_MISCONFIGURED", 500, ErrorSeverity.CRITICAL)
