"""Error Hierarchy — typed, categorized exceptions for every failure the core can report.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are recoverable by the caller; DatabaseError (5xx) is not
    - SelfOpinionViolationError is never folded into ValidationError or DatabaseError,
      whichever layer (application or storage) detected it
    - to_response() produces the REST envelope; no internal details leak into it

Design Decisions:
    - Single hierarchy with WritersError base: one FastAPI handler renders all of them
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
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class WritersError(Exception):
    """Base exception for all What Writers Like errors."""

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
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(WritersError):
    """A required field is empty or a year is not positive."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(WritersError):
    """Requested resource does not exist."""
    code = "RESOURCE_NOT_FOUND"
    resource_type = "Resource"

    def __init__(self, resource_id: Any, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = self.resource_type.lower()
        ctx.entity_id = str(resource_id)
        super().__init__(
            f"{self.resource_type} '{resource_id}' not found",
            self.code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_id = resource_id


class WriterNotFoundError(ResourceNotFoundError):
    code = "WRITER_NOT_FOUND"
    resource_type = "Writer"


class WorkNotFoundError(ResourceNotFoundError):
    code = "WORK_NOT_FOUND"
    resource_type = "Work"


class OpinionNotFoundError(ResourceNotFoundError):
    code = "OPINION_NOT_FOUND"
    resource_type = "Opinion"

    def __init__(self, writer_id: int, work_id: int, context: ErrorContext | None = None):
        super().__init__(f"{writer_id}/{work_id}", context)
        self.writer_id = writer_id
        self.work_id = work_id


class SelfOpinionViolationError(WritersError):
    """A writer tried to hold an opinion about a work they authored.

    `source` tells which layer caught it: "application" (service pre-check)
    or "storage" (database trigger). Both render identically.
    """
    def __init__(
        self,
        writer_id: int,
        work_id: int,
        source: str = "application",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = "opinion"
        ctx.entity_id = f"{writer_id}/{work_id}"
        super().__init__(
            "Writer cannot express opinion about their own work",
            "SELF_OPINION_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.writer_id = writer_id
        self.work_id = work_id
        self.source = source


class ReferentialConflictError(WritersError):
    """An operation would leave a dangling reference."""
    def __init__(self, message: str, code: str = "REFERENTIAL_CONFLICT",
                 context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class WriterHasWorksError(ReferentialConflictError):
    """Writer still authors at least one work."""
    def __init__(self, writer_id: int, work_count: int | None = None,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = "writer"
        ctx.entity_id = str(writer_id)
        if work_count:
            message = f"Cannot delete writer {writer_id}: {work_count} work(s) still reference it"
        else:
            message = f"Cannot delete writer {writer_id}: works still reference it"
        super().__init__(message, "WRITER_HAS_WORKS", ctx)
        self.writer_id = writer_id
        self.work_count = work_count


class DuplicateOpinionError(WritersError):
    """An opinion for this (writer, work) pair already exists."""
    def __init__(self, writer_id: int, work_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = "opinion"
        ctx.entity_id = f"{writer_id}/{work_id}"
        super().__init__(
            f"Writer {writer_id} already has an opinion about work {work_id}",
            "DUPLICATE_OPINION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.writer_id = writer_id
        self.work_id = work_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(WritersError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
