"""Access Control tests — totality, immutability, per-kind lookups.

Tests cover:
    - Every (role, operation) cell defined for every registered matrix
    - Article matrix: viewer cannot delete, admin can
    - Missing cells, non-bool cells and unknown keys rejected at construction
    - Unknown roles/operations at lookup raise instead of defaulting
    - require_permission raises AccessDeniedError on False cells
    - Matrices differ per kind for the same role/operation
"""

import pytest

from content_core.core.access_control import (
    ACCESS_CONTROL_BY_KIND,
    ARTICLE_ACCESS_CONTROL,
    PRODUCT_ACCESS_CONTROL,
    AccessControlMatrix,
    permission_for,
    require_permission,
)
from content_core.core.domain_types import ContentKind, Operation, Role
from content_core.core.errors import (
    AccessDeniedError,
    IncompletePermissionMatrixError,
    InvalidPermissionMatrixError,
    UnknownOperationError,
    UnknownRoleError,
)


def _full_rules(value: bool = True) -> dict:
    return {role: {op: value for op in Operation} for role in Role}


# ─── Totality ────────────────────────────────────────────────────

def test_every_registered_matrix_is_total():
    for matrix in ACCESS_CONTROL_BY_KIND.values():
        for role in Role:
            for operation in Operation:
                assert isinstance(matrix.permission(role, operation), bool)


def test_registry_covers_every_kind():
    assert set(ACCESS_CONTROL_BY_KIND) == set(ContentKind)


# ─── Article matrix ──────────────────────────────────────────────

def test_viewer_cannot_delete_article():
    assert ARTICLE_ACCESS_CONTROL.permission("viewer", "delete") is False


def test_admin_can_delete_article():
    assert ARTICLE_ACCESS_CONTROL.permission("admin", "delete") is True


def test_article_matrix_matches_table():
    assert ARTICLE_ACCESS_CONTROL.as_dict() == {
        "admin": {"create": True, "read": True, "update": True, "delete": True},
        "editor": {"create": True, "read": True, "update": True, "delete": False},
        "viewer": {"create": False, "read": True, "update": False, "delete": False},
    }


def test_enum_and_string_lookups_agree():
    assert ARTICLE_ACCESS_CONTROL.permission(Role.EDITOR, Operation.CREATE) == \
        ARTICLE_ACCESS_CONTROL.permission("editor", "create")


def test_allowed_operations_in_declaration_order():
    assert ARTICLE_ACCESS_CONTROL.allowed_operations("editor") == [
        Operation.CREATE, Operation.READ, Operation.UPDATE,
    ]
    assert ARTICLE_ACCESS_CONTROL.allowed_operations(Role.VIEWER) == [Operation.READ]


# ─── Per-kind differences ────────────────────────────────────────

def test_editor_create_differs_between_articles_and_products():
    assert ARTICLE_ACCESS_CONTROL.permission("editor", "create") is True
    assert PRODUCT_ACCESS_CONTROL.permission("editor", "create") is False


def test_permission_for_resolves_through_registry():
    assert permission_for("article", "viewer", "read") is True
    assert permission_for(ContentKind.PRODUCT, Role.EDITOR, Operation.UPDATE) is True
    assert permission_for("product", "viewer", "delete") is False


# ─── Construction errors ─────────────────────────────────────────

def test_missing_cell_rejected_with_every_missing_pair():
    rules = _full_rules()
    del rules[Role.VIEWER][Operation.DELETE]
    del rules[Role.EDITOR]
    with pytest.raises(IncompletePermissionMatrixError) as exc_info:
        AccessControlMatrix(ContentKind.ARTICLE, rules)
    missing = exc_info.value.missing
    assert ("viewer", "delete") in missing
    assert [pair for pair in missing if pair[0] == "editor"] == [
        ("editor", "create"), ("editor", "read"), ("editor", "update"), ("editor", "delete"),
    ]


def test_empty_rules_rejected():
    with pytest.raises(IncompletePermissionMatrixError) as exc_info:
        AccessControlMatrix(ContentKind.ARTICLE, {})
    assert len(exc_info.value.missing) == len(Role) * len(Operation)


def test_non_bool_cell_rejected():
    rules = _full_rules()
    rules[Role.ADMIN][Operation.READ] = 1
    with pytest.raises(InvalidPermissionMatrixError) as exc_info:
        AccessControlMatrix(ContentKind.ARTICLE, rules)
    assert exc_info.value.code == "MATRIX_INVALID"


def test_unknown_role_and_operation_keys_rejected():
    rules = _full_rules()
    rules["owner"] = {op: True for op in Operation}
    rules[Role.ADMIN]["publish"] = True
    with pytest.raises(InvalidPermissionMatrixError) as exc_info:
        AccessControlMatrix(ContentKind.ARTICLE, rules)
    assert len(exc_info.value.problems) == 2


def test_string_keys_accepted():
    rules = {role.value: {op.value: False for op in Operation} for role in Role}
    matrix = AccessControlMatrix(ContentKind.PRODUCT, rules)
    assert matrix.permission("admin", "read") is False


# ─── Immutability ────────────────────────────────────────────────

def test_matrix_not_affected_by_later_changes_to_source_rules():
    rules = _full_rules(False)
    matrix = AccessControlMatrix(ContentKind.ARTICLE, rules)
    rules[Role.ADMIN][Operation.DELETE] = True
    assert matrix.permission("admin", "delete") is False


def test_internal_table_is_read_only():
    with pytest.raises(TypeError):
        ARTICLE_ACCESS_CONTROL._table[Role.VIEWER] = {}


# ─── Lookup misuse ───────────────────────────────────────────────

def test_unknown_role_raises():
    with pytest.raises(UnknownRoleError):
        ARTICLE_ACCESS_CONTROL.permission("owner", "read")


def test_unknown_operation_raises():
    with pytest.raises(UnknownOperationError):
        ARTICLE_ACCESS_CONTROL.permission("admin", "publish")


# ─── require_permission ──────────────────────────────────────────

def test_require_permission_passes_for_allowed_cell():
    assert require_permission(ARTICLE_ACCESS_CONTROL, "editor", "update") is None


def test_require_permission_raises_for_denied_cell():
    with pytest.raises(AccessDeniedError) as exc_info:
        require_permission(ARTICLE_ACCESS_CONTROL, Role.VIEWER, Operation.DELETE)
    error = exc_info.value
    assert error.http_status == 403
    assert (error.role, error.operation, error.content_kind) == ("viewer", "delete", "article")
    assert error.to_response()["error"]["context"]["role"] == "viewer"
