"""
Tests for core.permissions — role evaluation and action mapping.
"""

from __future__ import annotations

from core.entities import Role, User
from core.permissions import (
    InMemoryPermissionProvider,
    PERMISSION_POS_VOID_SALE,
    PERMISSION_REPORTS_VIEW,
    PERMISSION_SELL_POS,
    PermissionDenialCode,
    PermissionEvaluator,
    resolve_required_permission,
)
from core.permissions.constants import (
    PERMISSION_PRODUCTS_ADD,
    PERMISSION_PRODUCTS_BRANDS,
    PERMISSION_STOCK_ADJUSTMENT_MANAGE,
    PERMISSION_USERS_MANAGE,
)
from core.store.seed import build_demo_store


def _provider() -> InMemoryPermissionProvider:
    return InMemoryPermissionProvider(
        roles=(
            Role(id="admin", name="Administrator"),
            Role(id="cashier", name="Cashier", permissions=frozenset({PERMISSION_SELL_POS})),
        ),
        users=(
            User(id="U1", name="Alice", role_id="admin"),
            User(id="U2", name="Casey", role_id="cashier"),
            User(id="U3", name="Orphan", role_id="deleted-role"),
        ),
    )


class TestPermissionEvaluator:
    def test_role_grant_allows(self):
        result = PermissionEvaluator().evaluate(PERMISSION_SELL_POS, "U2", _provider())
        assert result.allowed
        assert bool(result) is True

    def test_missing_permission_denied(self):
        result = PermissionEvaluator().evaluate(PERMISSION_POS_VOID_SALE, "U2", _provider())
        assert not result.allowed
        assert result.rejection_code == PermissionDenialCode.PERMISSION_MISSING

    def test_admin_passes_with_empty_permission_list(self):
        result = PermissionEvaluator().evaluate(PERMISSION_USERS_MANAGE, "U1", _provider())
        assert result.allowed

    def test_admin_role_id_is_configurable(self):
        evaluator = PermissionEvaluator(admin_role_id="owner")
        result = evaluator.evaluate(PERMISSION_USERS_MANAGE, "U1", _provider())
        assert result.rejection_code == PermissionDenialCode.PERMISSION_MISSING

    def test_no_user(self):
        result = PermissionEvaluator().evaluate(PERMISSION_SELL_POS, None, _provider())
        assert result.rejection_code == PermissionDenialCode.NO_CURRENT_USER

    def test_unknown_user(self):
        result = PermissionEvaluator().evaluate(PERMISSION_SELL_POS, "U404", _provider())
        assert result.rejection_code == PermissionDenialCode.USER_NOT_FOUND

    def test_unknown_role(self):
        result = PermissionEvaluator().evaluate(PERMISSION_SELL_POS, "U3", _provider())
        assert result.rejection_code == PermissionDenialCode.ROLE_NOT_FOUND


class TestStorePermissions:
    def test_current_user_drives_checks(self):
        store = build_demo_store(current_user_id="USER003")
        assert store.has_permission(PERMISSION_SELL_POS)
        assert not store.has_permission(PERMISSION_REPORTS_VIEW)

    def test_explicit_user(self):
        store = build_demo_store(current_user_id="USER003")
        assert store.has_permission(PERMISSION_REPORTS_VIEW, user_id="USER002")

    def test_signed_out_has_nothing(self):
        store = build_demo_store(current_user_id=None)
        assert not store.has_permission(PERMISSION_SELL_POS)

    def test_admin_override_survives_permission_edit(self):
        store = build_demo_store()
        admin = store.get("roles", "admin")
        store.update_entity("roles", "admin", admin.replace(permissions=frozenset()))
        assert store.has_permission(PERMISSION_USERS_MANAGE)


class TestRequiredPermissionRegistry:
    def test_explicit_actions(self):
        assert resolve_required_permission("VOID_SALE") == PERMISSION_POS_VOID_SALE
        assert resolve_required_permission("ADD_PRODUCT") == PERMISSION_PRODUCTS_ADD

    def test_generic_fallback(self):
        assert resolve_required_permission("DELETE_BRAND") == PERMISSION_PRODUCTS_BRANDS
        assert (
            resolve_required_permission("ADD_STOCK_ADJUSTMENT")
            == PERMISSION_STOCK_ADJUSTMENT_MANAGE
        )

    def test_unknown(self):
        assert resolve_required_permission("LAUNCH_ROCKET") is None
