"""Boundary Protocols — contracts between the core and external storage.

Invariants:
    - Core NEVER imports a storage implementation — dependency arrows point inward only
    - Method names match Operation values, so permission checks map 1:1 onto calls
    - Implementations are provided by the caller via dependency injection;
      ContentWorkflow.delete takes one and calls it after the DELETE permission check

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - runtime_checkable: hosts can assert a storage adapter fits at wiring time
    - Synchronous signatures: the core has no suspension points; async hosts wrap them
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from content_core.core.content import ContentLike
from content_core.core.domain_types import ContentId

T = TypeVar("T", bound=ContentLike)


@runtime_checkable
class ContentRepository(Protocol[T]):
    """CRUD contract for one content kind — implemented by the storage layer."""
    def create(self, content: T) -> T: ...
    def read(self, content_id: ContentId) -> T | None: ...
    def update(self, content_id: ContentId, patch: Mapping[str, Any]) -> T: ...
    def delete(self, content_id: ContentId) -> None: ...
