"""
POS Permissions - Public API
============================
"""

from core.permissions.constants import (
    ADMIN_ROLE_ID,
    ALL_PERMISSIONS,
    PERMISSION_DASHBOARD_VIEW,
    PERMISSION_POS_VOID_SALE,
    PERMISSION_PRODUCTS_VIEW,
    PERMISSION_REPORTS_VIEW,
    PERMISSION_SELL_POS,
    PERMISSION_USERS_MANAGE,
    PermissionDenialCode,
)
from core.permissions.evaluator import (
    PermissionEvaluationResult,
    PermissionEvaluator,
)
from core.permissions.provider import (
    InMemoryPermissionProvider,
    PermissionProvider,
)
from core.permissions.registry import resolve_required_permission

__all__ = [
    "ADMIN_ROLE_ID",
    "ALL_PERMISSIONS",
    "PERMISSION_DASHBOARD_VIEW",
    "PERMISSION_POS_VOID_SALE",
    "PERMISSION_PRODUCTS_VIEW",
    "PERMISSION_REPORTS_VIEW",
    "PERMISSION_SELL_POS",
    "PERMISSION_USERS_MANAGE",
    "PermissionDenialCode",
    "PermissionEvaluator",
    "PermissionEvaluationResult",
    "PermissionProvider",
    "InMemoryPermissionProvider",
    "resolve_required_permission",
]
