"""Error Hierarchy — typed, categorized exceptions for all ATS failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AtsError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    team_id: str | None = None
    entity: str | None = None
    details: dict[str, Any] | None = None


class AtsError(Exception):
    """Base exception for all ATS errors."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.details:
            body["details"] = self.context.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(AtsError):
    """Input passed schema validation but violates a field-level rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class BusinessRuleError(AtsError):
    """Operation is well-formed but not allowed in the current state."""
    def __init__(self, message: str, code: str = "BUSINESS_RULE_VIOLATION", context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(AtsError):
    """Missing, invalid or expired credentials, or no user record."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(AtsError):
    """Caller lacks the permission key required by the operation."""
    def __init__(self, permission: str | None = None, message: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message or f"Forbidden: missing permission '{permission}'",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.permission = permission


class TeamAccessDeniedError(AtsError):
    """Caller tried to reach data belonging to another tenant."""
    def __init__(self, message: str = "Access denied: you do not have permission to access this resource", context: ErrorContext | None = None):
        super().__init__(
            message, "TEAM_ACCESS_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(AtsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(AtsError):
    """Unique constraint or state conflict."""
    def __init__(self, message: str, code: str = "CONFLICT", context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DuplicateRecordError(ConflictError):
    """Create blocked by deduplication — carries the matches for user decision."""
    def __init__(
        self,
        entity: str,
        matches: list[dict],
        match_type: str,
        confidence: float | None = None,
    ):
        ctx = ErrorContext(
            entity=entity,
            details={
                "matches": matches,
                "match_type": match_type,
                "confidence": confidence,
            },
        )
        super().__init__(
            f"Possible duplicate {entity} found ({match_type} match)",
            "DUPLICATE_RECORD", ctx,
        )
        self.matches = matches
        self.match_type = match_type
        self.confidence = confidence


# ─── Invariant Breaches (500-level) ─────────────────────────────

class InvalidUserStateError(AtsError):
    """User row violates the master-admin / team-user shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_USER_STATE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class InvalidMembershipStateError(AtsError):
    """Access request row violates status/timestamp invariants."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_MEMBERSHIP_STATE", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AtsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
