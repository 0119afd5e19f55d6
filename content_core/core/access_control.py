"""Access Control Matrix — total (role, operation) -> bool table per content kind.

Invariants:
    - Every role x operation cell is defined at construction — no implicit default
    - Cells are strictly bool; unknown role/operation keys are rejected
    - Matrices are immutable after construction and safe for concurrent reads
    - Lookups with a role/operation outside the closed sets raise, never deny

Design Decisions:
    - Flat table, no role hierarchy: one boolean per cell, nothing to resolve
    - Explicit per-kind registry over getattr lookups: every mapping visible in one place
    - str Enum coercion: callers may pass "viewer" or Role.VIEWER interchangeably
"""

from collections.abc import Mapping
from types import MappingProxyType

from content_core.core.domain_types import ContentKind, Operation, Role
from content_core.core.errors import (
    AccessDeniedError,
    IncompletePermissionMatrixError,
    InvalidPermissionMatrixError,
    UnknownOperationError,
    UnknownRoleError,
)

PermissionRules = Mapping[Role | str, Mapping[Operation | str, bool]]


def coerce_role(role: Role | str) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise UnknownRoleError(role) from None


def coerce_operation(operation: Operation | str) -> Operation:
    try:
        return Operation(operation)
    except ValueError:
        raise UnknownOperationError(operation) from None


def _normalize_rules(rules: PermissionRules) -> dict[Role, dict[Operation, bool]]:
    """Convert raw rules to enum-keyed dicts, collecting every malformed entry."""
    problems: list[str] = []
    table: dict[Role, dict[Operation, bool]] = {}
    for raw_role, cells in rules.items():
        try:
            role = Role(raw_role)
        except ValueError:
            problems.append(f"unknown role '{raw_role}'")
            continue
        row: dict[Operation, bool] = {}
        for raw_operation, allowed in cells.items():
            try:
                operation = Operation(raw_operation)
            except ValueError:
                problems.append(f"unknown operation '{raw_operation}' for role '{role.value}'")
                continue
            if not isinstance(allowed, bool):
                problems.append(f"{role.value}.{operation.value} must be a bool, got {allowed!r}")
                continue
            row[operation] = allowed
        table[role] = row
    if problems:
        raise InvalidPermissionMatrixError(problems)
    return table


def _missing_cells(table: dict[Role, dict[Operation, bool]]) -> list[tuple[str, str]]:
    return [
        (role.value, operation.value)
        for role in Role
        for operation in Operation
        if operation not in table.get(role, {})
    ]


class AccessControlMatrix:
    """Immutable permission table for one content kind."""

    def __init__(self, kind: ContentKind, rules: PermissionRules):
        table = _normalize_rules(rules)
        missing = _missing_cells(table)
        if missing:
            raise IncompletePermissionMatrixError(missing)
        self.kind = kind
        self._table = MappingProxyType({
            role: MappingProxyType(row) for role, row in table.items()
        })

    def permission(self, role: Role | str, operation: Operation | str) -> bool:
        return self._table[coerce_role(role)][coerce_operation(operation)]

    def allowed_operations(self, role: Role | str) -> list[Operation]:
        """Operations the role may perform, in Operation declaration order."""
        row = self._table[coerce_role(role)]
        return [operation for operation in Operation if row[operation]]

    def as_dict(self) -> dict[str, dict[str, bool]]:
        """Plain-string copy of the table, for audit output."""
        return {
            role.value: {operation.value: allowed for operation, allowed in row.items()}
            for role, row in self._table.items()
        }

    def __repr__(self) -> str:
        return f"AccessControlMatrix(kind={self.kind.value})"


def require_permission(
    matrix: AccessControlMatrix, role: Role | str, operation: Operation | str,
) -> None:
    """Raise AccessDeniedError if the cell is False."""
    if not matrix.permission(role, operation):
        raise AccessDeniedError(
            coerce_role(role).value, coerce_operation(operation).value, matrix.kind.value,
        )


# --- Per-kind matrices ---------------------------------------------------------

ARTICLE_ACCESS_CONTROL = AccessControlMatrix(ContentKind.ARTICLE, {
    Role.ADMIN: {
        Operation.CREATE: True, Operation.READ: True,
        Operation.UPDATE: True, Operation.DELETE: True,
    },
    Role.EDITOR: {
        Operation.CREATE: True, Operation.READ: True,
        Operation.UPDATE: True, Operation.DELETE: False,
    },
    Role.VIEWER: {
        Operation.CREATE: False, Operation.READ: True,
        Operation.UPDATE: False, Operation.DELETE: False,
    },
})

# Catalog entries are created and removed by admins only
PRODUCT_ACCESS_CONTROL = AccessControlMatrix(ContentKind.PRODUCT, {
    Role.ADMIN: {
        Operation.CREATE: True, Operation.READ: True,
        Operation.UPDATE: True, Operation.DELETE: True,
    },
    Role.EDITOR: {
        Operation.CREATE: False, Operation.READ: True,
        Operation.UPDATE: True, Operation.DELETE: False,
    },
    Role.VIEWER: {
        Operation.CREATE: False, Operation.READ: True,
        Operation.UPDATE: False, Operation.DELETE: False,
    },
})

ACCESS_CONTROL_BY_KIND: Mapping[ContentKind, AccessControlMatrix] = MappingProxyType({
    ContentKind.ARTICLE: ARTICLE_ACCESS_CONTROL,
    ContentKind.PRODUCT: PRODUCT_ACCESS_CONTROL,
})


def permission_for(
    kind: ContentKind | str, role: Role | str, operation: Operation | str,
) -> bool:
    """Resolve a permission through the per-kind registry."""
    return ACCESS_CONTROL_BY_KIND[ContentKind(kind)].permission(role, operation)
