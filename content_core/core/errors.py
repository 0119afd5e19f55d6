"""Error Hierarchy — typed, categorized exceptions for all content-core failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation failures are data (ValidationResult), never raised by validators
    - Configuration errors surface at construction time, never as runtime defaults
    - to_response() produces the envelope an API layer can return verbatim

Design Decisions:
    - Single hierarchy with ContentCoreError base: callers catch one type at the boundary
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
    CONFIGURATION = "configuration"
    MISUSE = "misuse"
    ACCESS_DENIED = "access_denied"
    RESOURCE_NOT_FOUND = "resource_not_found"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    content_id: str | None = None
    content_kind: str | None = None
    role: str | None = None
    operation: str | None = None
    version: int | None = None
    debug_info: dict[str, Any] | None = None


class ContentCoreError(Exception):
    """Base exception for all content-core errors."""

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
                    "content_id": self.context.content_id,
                    "content_kind": self.context.content_kind,
                    "role": self.context.role,
                    "operation": self.context.operation,
                    "version": self.context.version,
                },
            }
        }


# ─── Validation ─────────────────────────────────────────────────

class ContentValidationError(ContentCoreError):
    """A write was refused because the content failed validation."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Content failed validation: {'; '.join(errors)}",
            "CONTENT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.errors = errors


# ─── Configuration (construction time) ──────────────────────────

class IncompletePermissionMatrixError(ContentCoreError):
    """Access control matrix is missing one or more (role, operation) cells."""
    def __init__(self, missing: list[tuple[str, str]], context: ErrorContext | None = None):
        cells = ", ".join(f"{role}.{operation}" for role, operation in missing)
        super().__init__(
            f"Permission matrix is incomplete; missing: {cells}",
            "MATRIX_INCOMPLETE", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.missing = missing


class InvalidPermissionMatrixError(ContentCoreError):
    """Access control matrix has unknown keys or non-boolean cells."""
    def __init__(self, problems: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Permission matrix is malformed: {'; '.join(problems)}",
            "MATRIX_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.problems = problems


class EmptyCompositeValidatorError(ContentCoreError):
    """Composite validator constructed without constituents."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A composite validator requires at least one validator.",
            "COMPOSITE_EMPTY", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Misuse (caller-contract violations) ────────────────────────

class ImmutableFieldError(ContentCoreError):
    """Patch attempted to overwrite an immutable field (id, created_at)."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Immutable field(s) cannot be patched: {', '.join(fields)}",
            "IMMUTABLE_FIELD", ErrorCategory.MISUSE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields


class UnknownFieldError(ContentCoreError):
    """Patch names fields the content type does not have."""
    def __init__(self, fields: list[str], content_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{content_type} has no field(s): {', '.join(fields)}",
            "UNKNOWN_FIELD", ErrorCategory.MISUSE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields
        self.content_type = content_type


class InvalidFieldValueError(ContentCoreError):
    """Patch value lies outside a closed set (e.g. an unknown status)."""
    def __init__(self, field: str, value: object, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid value for '{field}': {value!r}",
            "INVALID_FIELD_VALUE", ErrorCategory.MISUSE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.value = value


class UnknownRoleError(ContentCoreError):
    """Role is not one of the closed set of roles."""
    def __init__(self, role: object, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown role '{role}'",
            "UNKNOWN_ROLE", ErrorCategory.MISUSE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.role = role


class UnknownOperationError(ContentCoreError):
    """Operation is not one of create/read/update/delete."""
    def __init__(self, operation: object, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown operation '{operation}'",
            "UNKNOWN_OPERATION", ErrorCategory.MISUSE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation = operation


class CorruptHistoryError(ContentCoreError):
    """Restored version history violates len(history) == version - 1."""
    def __init__(self, version: int, history_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Version {version} is inconsistent with {history_length} stored snapshot(s)",
            "HISTORY_CORRUPT", ErrorCategory.MISUSE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.version = version
        self.history_length = history_length


# ─── Access / lookup ────────────────────────────────────────────

class AccessDeniedError(ContentCoreError):
    """Role is not permitted to perform the operation on this content kind."""
    def __init__(self, role: str, operation: str, content_kind: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.role = role
        ctx.operation = operation
        ctx.content_kind = content_kind
        super().__init__(
            f"Role '{role}' may not {operation} {content_kind} content",
            "ACCESS_DENIED", ErrorCategory.ACCESS_DENIED,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.role = role
        self.operation = operation
        self.content_kind = content_kind


class VersionNotFoundError(ContentCoreError):
    """Requested version number is outside 1..current."""
    def __init__(self, requested: int, current: int, context: ErrorContext | None = None):
        super().__init__(
            f"Version {requested} not found (current version is {current})",
            "VERSION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.requested = requested
        self.current = current
