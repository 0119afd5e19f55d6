"""Content Contract — the minimal shape every manageable entity exposes.

Invariants:
    - id and created_at never change after creation
    - updated_at is refreshed on every mutation (by VersionedContent, not here)
    - published_at is set only on a transition into PUBLISHED (see status_patch)
    - Concrete kinds only ADD fields; the core never reads them directly

Design Decisions:
    - Protocol for the contract, dataclasses for concrete kinds: callers may bring
      their own types as long as they are dataclasses satisfying ContentLike
    - kw_only dataclasses: base fields with defaults compose with subclass fields
"""

from dataclasses import dataclass, fields, is_dataclass
from datetime import datetime
from typing import Any, Protocol

from content_core.core.domain_types import ContentId, AuthorId, ContentStatus


class ContentLike(Protocol):
    """Structural contract for content values handled by the core."""
    id: ContentId
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None
    status: ContentStatus


@dataclass(kw_only=True)
class BaseContent:
    """Fields shared by every content kind."""
    id: ContentId
    created_at: datetime
    updated_at: datetime
    status: ContentStatus = ContentStatus.DRAFT
    published_at: datetime | None = None


@dataclass(kw_only=True)
class Article(BaseContent):
    title: str
    content: str
    author_id: AuthorId
    tags: list[str] | None = None


@dataclass(kw_only=True)
class Product(BaseContent):
    name: str
    description: str = ""
    price: float | None = None
    stock: int | None = None
    category: str = ""


def field_names(content_type: type) -> frozenset[str]:
    """Names of all dataclass fields on a content type."""
    if not is_dataclass(content_type):
        raise TypeError(f"{content_type.__name__} is not a dataclass content type")
    return frozenset(f.name for f in fields(content_type))


def status_patch(
    current: ContentLike, new_status: ContentStatus, now: datetime,
) -> dict[str, Any]:
    """Build the patch for a status change.

    published_at is included only when moving INTO published from another
    status; re-publishing keeps the original publication time.
    """
    patch: dict[str, Any] = {"status": new_status}
    if new_status == ContentStatus.PUBLISHED and current.status != ContentStatus.PUBLISHED:
        patch["published_at"] = now
    return patch
