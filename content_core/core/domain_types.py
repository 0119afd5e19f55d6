"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ContentId wraps str — opaque, never parsed
    - Roles and operations are closed sets — no implicit members
    - All valid states encoded as Enums — no raw string matching in core logic

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import datetime, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ContentId = NewType("ContentId", str)
AuthorId = NewType("AuthorId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ContentStatus(str, Enum):
    """Publication status. No transition graph is enforced by the core."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Role(str, Enum):
    """Authorization roles — flat, no inheritance between roles."""
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


class Operation(str, Enum):
    """Content operations — mirrors ContentRepository method names."""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ContentKind(str, Enum):
    """Registered content kinds. Each kind has its own validator and matrix."""
    ARTICLE = "article"
    PRODUCT = "product"


# ─── Immutable fields ────────────────────────────────────────────

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def utc_now() -> datetime:
    """Default clock for content timestamps."""
    return datetime.now(timezone.utc)
