"""Content Workflow — permission check, validation, then versioned write.

Invariants:
    - Order is fixed: authorize -> validate -> mutate; a failure stops before mutation
    - Updates are validated on the MERGED value (preview), not on the patch alone
    - A rejected write leaves version and history untouched
    - Every denial, rejection, and accepted write is logged with structured extras
    - delete goes through a ContentRepository: a VersionedContent cannot remove itself

Design Decisions:
    - Imperative shell around the pure core: core/ never logs, this layer does
    - Explicit per-kind registry: every kind -> (matrix, validator) pair visible in one place
    - Raises ContentValidationError for request handlers; callers wanting data
      use check() and get the ValidationResult directly
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

from content_core.core.access_control import (
    ARTICLE_ACCESS_CONTROL,
    PRODUCT_ACCESS_CONTROL,
    AccessControlMatrix,
    coerce_role,
    require_permission,
)
from content_core.core.composite_validator import create_composite_validator
from content_core.core.content import ContentLike
from content_core.core.domain_types import ContentId, ContentKind, Operation, Role, utc_now
from content_core.core.errors import AccessDeniedError, ContentValidationError, ErrorContext
from content_core.core.repository_protocols import ContentRepository
from content_core.core.validation import (
    ARTICLE_VALIDATOR,
    PRODUCT_VALIDATOR,
    ValidationResult,
    Validator,
)
from content_core.core.versioning import Clock, Patch, Versioned, VersionedContent

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ContentLike)


class ContentWorkflow(Generic[T]):
    """Guards writes to one content kind with its matrix and validator."""

    def __init__(
        self, matrix: AccessControlMatrix, validator: Validator[T], clock: Clock = utc_now,
    ):
        self.matrix = matrix
        self.validator = validator
        self._clock = clock

    @property
    def kind(self) -> ContentKind:
        return self.matrix.kind

    def authorize(self, role: Role | str, operation: Operation) -> None:
        try:
            require_permission(self.matrix, role, operation)
        except AccessDeniedError as e:
            logger.warning(
                "Access denied", extra={
                    "role": e.role, "operation": e.operation,
                    "content_kind": e.content_kind, "error_code": e.code,
                },
            )
            raise

    def check(self, value: T) -> ValidationResult:
        return self.validator.validate(value)

    def create(self, role: Role | str, initial: T) -> VersionedContent[T]:
        self.authorize(role, Operation.CREATE)
        self._ensure_valid(initial, role, Operation.CREATE, version=None)
        manager = VersionedContent(initial, self._clock)
        logger.info(
            "Content created", extra={
                "content_id": manager.content_id, "content_kind": self.kind.value,
                "role": coerce_role(role).value, "version": manager.version,
            },
        )
        return manager

    def read(self, role: Role | str, manager: VersionedContent[T]) -> Versioned[T]:
        self.authorize(role, Operation.READ)
        return manager.get_content()

    def update(
        self, role: Role | str, manager: VersionedContent[T], patch: Patch,
    ) -> Versioned[T]:
        self.authorize(role, Operation.UPDATE)
        candidate = manager.preview(patch)
        self._ensure_valid(candidate, role, Operation.UPDATE, version=manager.version)
        manager.update_content(patch)
        logger.info(
            "Content updated", extra={
                "content_id": manager.content_id, "content_kind": self.kind.value,
                "role": coerce_role(role).value, "version": manager.version,
            },
        )
        return manager.get_content()

    def delete(
        self, role: Role | str, repository: ContentRepository[T], content_id: ContentId,
    ) -> None:
        """Remove content through the storage seam once the role may delete."""
        self.authorize(role, Operation.DELETE)
        repository.delete(content_id)
        logger.info(
            "Content deleted", extra={
                "content_id": content_id, "content_kind": self.kind.value,
                "role": coerce_role(role).value,
            },
        )

    def _ensure_valid(
        self, value: T, role: Role | str, operation: Operation, version: int | None,
    ) -> None:
        result = self.check(value)
        if result.is_valid:
            return
        logger.warning(
            "Content rejected by validation", extra={
                "content_id": value.id, "content_kind": self.kind.value,
                "operation": operation.value, "version": version,
                "error_count": len(result.errors), "error_code": "CONTENT_INVALID",
            },
        )
        raise ContentValidationError(
            list(result.errors),
            ErrorContext(
                content_id=value.id, content_kind=self.kind.value,
                role=coerce_role(role).value, operation=operation.value, version=version,
            ),
        )


WORKFLOWS_BY_KIND: Mapping[ContentKind, ContentWorkflow] = MappingProxyType({
    ContentKind.ARTICLE: ContentWorkflow(
        ARTICLE_ACCESS_CONTROL, create_composite_validator(ARTICLE_VALIDATOR),
    ),
    ContentKind.PRODUCT: ContentWorkflow(
        PRODUCT_ACCESS_CONTROL, create_composite_validator(PRODUCT_VALIDATOR),
    ),
})


def get_workflow(kind: ContentKind | str) -> ContentWorkflow:
    return WORKFLOWS_BY_KIND[ContentKind(kind)]
