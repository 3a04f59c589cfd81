"""Error Hierarchy — typed, categorized exceptions for all task board failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised at detection and never retried in the core
    - to_response() produces the error envelope used by any boundary layer
    - Every error names the ids involved so callers can build a precise message

Design Decisions:
    - Single hierarchy with TaskBoardError base: one handler at the boundary catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - http_status kept on the error: boundary layers map it without a lookup table
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
    ACCESS = "access"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PARTIAL_FAILURE = "partial_failure"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskBoardError(Exception):
    """Base exception for all task board errors."""

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
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "actor_id": self.context.actor_id,
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(TaskBoardError):
    """Command input failed validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(TaskBoardError):
    """Referenced project/board/column/card/user does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AccessDeniedError(TaskBoardError):
    """Access guard check failed."""
    def __init__(
        self,
        message: str,
        resource_type: str,
        resource_id: object,
        actor_id: object = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        ctx.actor_id = str(actor_id) if actor_id is not None else None
        super().__init__(
            message, "ACCESS_DENIED", ErrorCategory.ACCESS,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.actor_id = actor_id


class ConflictError(TaskBoardError):
    """Operation would violate an invariant."""
    def __init__(
        self, message: str, code: str = "CONFLICT", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class OwnerRemovalError(ConflictError):
    """Owner cannot be removed from the members of the aggregate they own."""
    def __init__(
        self,
        resource_type: str,
        resource_id: object,
        user_id: object,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"Cannot remove owner '{user_id}' from {resource_type.lower()} '{resource_id}'",
            "OWNER_REMOVAL_FORBIDDEN", ctx,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.user_id = user_id


class DuplicateEmailError(ConflictError):
    """Email already belongs to another user."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email '{email}' is already in use", "EMAIL_IN_USE", context,
        )
        self.email = email


# ─── Propagation / Infrastructure Errors (500-level) ────────────

class PartialFailureError(TaskBoardError):
    """Membership propagation could not update one or more boards."""
    def __init__(
        self,
        board_ids: list,
        cause: Exception | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = "Board"
        ctx.debug_info = {"board_ids": [str(b) for b in board_ids]}
        super().__init__(
            "Membership propagation failed for board(s): "
            + ", ".join(str(b) for b in board_ids),
            "PARTIAL_FAILURE", ErrorCategory.PARTIAL_FAILURE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.board_ids = list(board_ids)
        self.cause = cause


class DatabaseError(TaskBoardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
