"""Content Snapshot — serialization / deserialization for content and version history.

Invariants:
    - content_to_snapshot produces a JSON-safe dict (no datetimes, no Enums)
    - content_from_snapshot reconstructs the dataclass for a registered ContentKind
    - Missing optional keys fall back to dataclass defaults (forward-compatible)
    - versioned_from_snapshot refuses histories where len != version - 1

Design Decisions:
    - Separate from versioning.py: persistence format is not a versioning concern
    - Only the contract timestamps and status are converted; kind fields pass through
"""

from dataclasses import fields
from datetime import datetime
from enum import Enum
from typing import Any

from content_core.core.content import Article, ContentLike, Product
from content_core.core.domain_types import ContentKind, ContentStatus, utc_now
from content_core.core.versioning import Clock, VersionedContent

CONTENT_TYPES: dict[ContentKind, type] = {
    ContentKind.ARTICLE: Article,
    ContentKind.PRODUCT: Product,
}

_DATETIME_FIELDS = frozenset({"created_at", "updated_at", "published_at"})


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_to_json_safe(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_json_safe(item) for key, item in value.items()}
    return value


def content_to_snapshot(content: ContentLike) -> dict:
    """Serialize a content dataclass to a JSON-safe dict. Pure, no IO."""
    return {f.name: _to_json_safe(getattr(content, f.name)) for f in fields(content)}


def content_from_snapshot(kind: ContentKind | str, data: dict) -> ContentLike:
    """Rebuild a content value from its snapshot dict. Pure, no IO.

    Keys absent from the snapshot use the dataclass default; a required key
    that is absent raises TypeError from the dataclass constructor.
    """
    content_type = CONTENT_TYPES[ContentKind(kind)]
    kwargs: dict[str, Any] = {}
    for f in fields(content_type):
        if f.name not in data:
            continue
        value = data[f.name]
        if f.name in _DATETIME_FIELDS and isinstance(value, str):
            value = datetime.fromisoformat(value)
        elif f.name == "status" and value is not None:
            value = ContentStatus(value)
        elif isinstance(value, list):
            value = list(value)
        kwargs[f.name] = value
    return content_type(**kwargs)


def versioned_to_snapshot(manager: VersionedContent) -> dict:
    """Serialize a whole VersionedContent (current, version, history)."""
    return {
        "version": manager.version,
        "content": content_to_snapshot(manager.current),
        "previous_versions": [
            content_to_snapshot(snapshot) for snapshot in manager.get_version_history()
        ],
    }


def versioned_from_snapshot(
    kind: ContentKind | str, data: dict, clock: Clock = utc_now,
) -> VersionedContent:
    """Restore a VersionedContent. Raises CorruptHistoryError on bad lengths."""
    current = content_from_snapshot(kind, data["content"])
    history = [content_from_snapshot(kind, item) for item in data.get("previous_versions", [])]
    return VersionedContent.from_history(current, data.get("version", 1), history, clock)

