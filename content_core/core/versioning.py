"""Versioned Content — owner of one entity's current value and its snapshot history.

Invariants:
    - version starts at 1 and increases by exactly 1 per successful update
    - len(previous_versions) == version - 1, always
    - previous_versions is append-only, oldest first
    - previous_versions[-1] equals the value immediately before the last update
    - Snapshots and returned values are deep copies: no aliasing of owned state
    - A rejected patch (immutable field, unknown field, bad status) leaves the instance untouched
    - preview() returns an independent value; mutating it never reaches owned state
    - updated_at is set from the clock on every update, patched or not

Design Decisions:
    - Mutable owner object, single writer: concurrent updates must be serialized
      by the owner (no lock here, the core stays free of threading concerns)
    - Patch checked before any mutation: history and version never move on error
    - dataclasses.replace over a deep copy of current: field-by-field overwrite,
      no field of the result shared with owned state
    - Clock injected: deterministic tests, no hidden time dependency
"""

import copy
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime
from typing import Any, Callable, Generic, Protocol, Sequence, TypeVar

from content_core.core.content import ContentLike, field_names
from content_core.core.domain_types import IMMUTABLE_FIELDS, ContentStatus, utc_now
from content_core.core.errors import (
    CorruptHistoryError,
    ErrorContext,
    ImmutableFieldError,
    InvalidFieldValueError,
    UnknownFieldError,
    VersionNotFoundError,
)

T = TypeVar("T", bound=ContentLike)

Clock = Callable[[], datetime]


class PatchModel(Protocol):
    """Anything that dumps only the fields the caller set (pydantic models do)."""
    def model_dump(self, *, exclude_unset: bool = ...) -> dict[str, Any]: ...


Patch = Mapping[str, Any] | PatchModel


@dataclass(frozen=True)
class Versioned(Generic[T]):
    """Read view of a versioned entity: current value plus prior snapshots."""
    content: T
    version: int
    previous_versions: tuple[T, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Flat dict: content fields + version + previous_versions."""
        return {
            **asdict(self.content),
            "version": self.version,
            "previous_versions": [asdict(snapshot) for snapshot in self.previous_versions],
        }


class VersionedContent(Generic[T]):
    """Tracks mutations of a single content value over time."""

    def __init__(self, initial: T, clock: Clock = utc_now):
        self._fields = field_names(type(initial))
        self._current: T = copy.deepcopy(initial)
        self._version = 1
        self._history: list[T] = []
        self._clock = clock

    @classmethod
    def from_history(
        cls, current: T, version: int, history: Sequence[T], clock: Clock = utc_now,
    ) -> "VersionedContent[T]":
        """Rebuild an instance from stored state. Checks the length invariant."""
        if version < 1 or len(history) != version - 1:
            raise CorruptHistoryError(
                version, len(history),
                ErrorContext(content_id=current.id, version=version),
            )
        instance = cls(current, clock)
        instance._version = version
        instance._history = [copy.deepcopy(snapshot) for snapshot in history]
        return instance

    # ─── Read ───────────────────────────────────────────────────

    @property
    def version(self) -> int:
        return self._version

    @property
    def content_id(self) -> str:
        return self._current.id

    @property
    def content_type(self) -> type:
        return type(self._current)

    @property
    def current(self) -> T:
        return copy.deepcopy(self._current)

    def get_content(self) -> Versioned[T]:
        return Versioned(
            content=copy.deepcopy(self._current),
            version=self._version,
            previous_versions=self.get_version_history(),
        )

    def get_version_history(self) -> tuple[T, ...]:
        return tuple(copy.deepcopy(snapshot) for snapshot in self._history)

    def get_version(self, number: int) -> T:
        """Value as it was at version `number` (1-based; current included)."""
        if number == self._version:
            return self.current
        if not 1 <= number < self._version:
            raise VersionNotFoundError(
                number, self._version, ErrorContext(content_id=self.content_id),
            )
        return copy.deepcopy(self._history[number - 1])

    # ─── Write ──────────────────────────────────────────────────

    def preview(self, patch: Patch) -> T:
        """Value update_content(patch) would produce, without mutating anything."""
        return self._merge(self._normalize_patch(patch))

    def update_content(self, patch: Patch) -> None:
        changes = self._normalize_patch(patch)
        updated = self._merge(changes)
        self._history.append(copy.deepcopy(self._current))
        self._current = updated
        self._version += 1

    def _merge(self, changes: dict[str, Any]) -> T:
        changes = copy.deepcopy(changes)
        changes["updated_at"] = self._clock()
        return replace(copy.deepcopy(self._current), **changes)

    def _normalize_patch(self, patch: Patch) -> dict[str, Any]:
        """Convert to a plain dict, reject immutable or unknown keys, coerce status."""
        if isinstance(patch, Mapping):
            changes = dict(patch)
        else:
            changes = patch.model_dump(exclude_unset=True)
        context = ErrorContext(content_id=self.content_id, version=self._version)
        immutable = sorted(IMMUTABLE_FIELDS.intersection(changes))
        if immutable:
            raise ImmutableFieldError(immutable, context)
        unknown = sorted(str(key) for key in set(changes) - self._fields)
        if unknown:
            raise UnknownFieldError(unknown, self.content_type.__name__, context)
        if "status" in changes:
            try:
                changes["status"] = ContentStatus(changes["status"])
            except ValueError:
                raise InvalidFieldValueError("status", changes["status"], context) from None
        return changes


def changed_fields(before: ContentLike, after: ContentLike) -> dict[str, tuple[Any, Any]]:
    """Field-level diff between two values of the same content type."""
    if type(before) is not type(after):
        raise TypeError(
            f"Cannot diff {type(before).__name__} against {type(after).__name__}",
        )
    return {
        f.name: (getattr(before, f.name), getattr(after, f.name))
        for f in fields(before)
        if getattr(before, f.name) != getattr(after, f.name)
    }
