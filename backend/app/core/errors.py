"""Error Hierarchy — typed, categorized exceptions for all API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it maps to at the handler boundary
    - to_response() produces the {"error": message, "code": ...} wire envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ExerciseTrackerError base: one FastAPI handler catches all
    - Store failures are 400 and query failures 404, as the public API has always answered
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Diagnostic context, logged but never returned to the client."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    username: str | None = None
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class ExerciseTrackerError(Exception):
    """Base exception for all exercise tracker errors."""

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
        """Convert to the REST error body."""
        return {"error": self.message, "code": self.code}


# ─── Input Errors ────────────────────────────────────────────────

class MissingFieldError(ExerciseTrackerError):
    """A required body field is absent or empty."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"No {field} found", "MISSING_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class FieldValidationError(ExerciseTrackerError):
    """One or more fields failed length/format rules."""
    def __init__(
        self, fields: list[str], message: str = "Invalid input data",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.fields = fields

    def to_response(self) -> dict:
        body = super().to_response()
        body["fields"] = self.fields
        return body


class InvalidDateError(ExerciseTrackerError):
    """A date, from or to value does not parse as a calendar date."""
    def __init__(
        self, field: str, message: str = "Invalid date",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_DATE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.field = field


class InvalidIdError(ExerciseTrackerError):
    """The userId path segment is not a non-negative integer."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid user ID", "INVALID_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.value = value


# ─── Authentication Errors ───────────────────────────────────────

class AuthMissingError(ExerciseTrackerError):
    """No Authorization header on a header-variant exercise request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authorization credentials not found", "AUTH_MISSING",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 400,
        )


class AuthInvalidError(ExerciseTrackerError):
    """Malformed credentials, unknown username or wrong password."""

    MALFORMED = "Malformed authorization credentials"
    UNKNOWN_USER = "Invalid username or user does not exist"
    WRONG_PASSWORD = "Wrong password for username"

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTH_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Persistence Errors ──────────────────────────────────────────

class DuplicateUsernameError(ExerciseTrackerError):
    """Registration rejected by the username uniqueness constraint."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"Could not create username {username}", "DUPLICATE_USERNAME",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 400,
        )
        self.username = username


class StoreError(ExerciseTrackerError):
    """Any other persistence failure. The message is client-safe."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 400,
        )
        self.operation = operation


class ExerciseQueryError(ExerciseTrackerError):
    """Listing exercises failed unexpectedly."""
    def __init__(self, owner_label: str, context: ErrorContext | None = None):
        super().__init__(
            f"Exercises for user {owner_label} not found.",
            "EXERCISES_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
