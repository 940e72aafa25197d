"""Error Hierarchy — typed, categorized exceptions for every Fleet API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it maps to at the API boundary
    - to_response() produces the public envelope {"Error": message}
    - Messages are fixed strings; no internal details leak into user-facing text

Design Decisions:
    - Single hierarchy with FleetError base: one FastAPI handler catches all
    - AlreadyAssignedError is a conflict but answers 403 to keep the established client contract
    - NotAssociatedError uses one combined message: callers cannot tell
      "wrong truck" from "wrong load" from "not linked"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PROTOCOL = "protocol"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs only, never rendered to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    truck_id: int | None = None
    load_id: int | None = None
    debug_info: dict[str, Any] | None = None


MESSAGES = {
    400: "The request object is missing at least one of the required attributes",
    401: "Invalid token.",
    403: {
        "unauthorized": "You do not have access to this truck",
        "load_already_assigned": "The load is already loaded on another truck",
    },
    404: {
        "truck": "No truck with this truck_id exists",
        "load": "No load with this load_id exists",
        "user": "No user with this user_id exists",
        "either": "No truck with this truck_id is loaded with the load with this load_id",
    },
    405: "This endpoint is not supported",
    406: "This application only supports JSON responses",
    415: "Server only accepts application/json data.",
    503: "The request could not be completed because of a storage failure",
}


class FleetError(Exception):
    """Base exception for all Fleet API errors."""

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
        """Convert to the public REST error body."""
        return {"Error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for the JSON log formatter."""
        return {
            "error_code": self.code,
            "truck_id": self.context.truck_id,
            "load_id": self.context.load_id,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class ValidationError(FleetError):
    """Body is missing a required attribute or carries an invalid one."""
    def __init__(
        self, message: str = MESSAGES[400], field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class UnauthorizedError(FleetError):
    """Bearer token missing, malformed, expired or not issued by the configured provider."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[401], "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(FleetError):
    """Authenticated principal does not own the resource."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[403]["unauthorized"], "FORBIDDEN",
            ErrorCategory.AUTHORIZATION, ErrorSeverity.WARNING, context, 403,
        )


class AlreadyAssignedError(FleetError):
    """Load already has a carrier, or the truck already lists it."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[403]["load_already_assigned"], "LOAD_ALREADY_ASSIGNED",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 403,
        )


class NotFoundError(FleetError):
    """Entity id unknown for its kind."""
    def __init__(self, resource: str, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[404][resource], "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, context, 404,
        )
        self.resource = resource


class NotAssociatedError(FleetError):
    """Truck/load pair is not currently linked."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[404]["either"], "NOT_ASSOCIATED",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, context, 404,
        )


class MethodNotAllowedError(FleetError):
    """Collection-level verb that is never supported."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[405], "METHOD_NOT_ALLOWED", ErrorCategory.PROTOCOL,
            ErrorSeverity.INFO, context, 405,
        )


class NotAcceptableError(FleetError):
    """Client's Accept header excludes JSON."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[406], "NOT_ACCEPTABLE", ErrorCategory.PROTOCOL,
            ErrorSeverity.INFO, context, 406,
        )


class UnsupportedMediaTypeError(FleetError):
    """Request body is not application/json."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            MESSAGES[415], "UNSUPPORTED_MEDIA_TYPE", ErrorCategory.PROTOCOL,
            ErrorSeverity.INFO, context, 415,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(FleetError):
    """Document store operation failed. detail goes to logs, never to the client."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        context.debug_info = {**(context.debug_info or {}), "operation": operation, "detail": detail}
        super().__init__(
            MESSAGES[503], "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
        self.detail = detail

    def log_extra(self) -> dict:
        return {**super().log_extra(), "operation": self.operation, "detail": self.detail}
