"""Content Schemas — Pydantic patch models and outbound payloads.

Invariants:
    - Patch models have no id / created_at fields and forbid extras, so an
      immutable-field overwrite cannot even be expressed at the boundary
    - Only fields the caller set reach the core (model_dump(exclude_unset=True))
    - camelCase aliases accepted alongside snake_case names

Design Decisions:
    - Patches carry types only; business rules stay in core validators
    - updated_at omitted from patches: the versioning clock always sets it
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from content_core.core.domain_types import ContentStatus
from content_core.core.validation import ValidationResult


class _PatchBase(BaseModel):
    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True,
    )

    status: ContentStatus | None = None
    published_at: datetime | None = None


class ArticlePatch(_PatchBase):
    """Partial update for an Article."""
    title: str | None = None
    content: str | None = None
    author_id: str | None = None
    tags: list[str] | None = None


class ProductPatch(_PatchBase):
    """Partial update for a Product."""
    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    category: str | None = None


class ValidationResultResponse(BaseModel):
    """Wire shape of a ValidationResult."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    errors: list[str]

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResultResponse":
        return cls(is_valid=result.is_valid, errors=list(result.errors))
