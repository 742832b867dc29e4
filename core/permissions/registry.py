"""
POS Permissions - Action to Permission Registry
===============================================
Maps mutation envelope types ("ADD_PRODUCT", "VOID_SALE", ...) to the
permission a caller needs. Generic ADD_/UPDATE_/DELETE_<KIND> types
fall back to the kind's manage permission.
"""

from __future__ import annotations

from core.permissions.constants import (
    PERMISSION_CONTACTS_MANAGE,
    PERMISSION_EXPENSE_MANAGE,
    PERMISSION_POS_PROCESS_RETURN,
    PERMISSION_POS_VOID_SALE,
    PERMISSION_PRODUCTS_ADD,
    PERMISSION_PRODUCTS_BRANDS,
    PERMISSION_PRODUCTS_CATEGORIES,
    PERMISSION_PRODUCTS_DELETE,
    PERMISSION_PRODUCTS_DOCUMENTS,
    PERMISSION_PRODUCTS_MANAGE,
    PERMISSION_PRODUCTS_UNITS,
    PERMISSION_PRODUCTS_UPDATE_PRICE,
    PERMISSION_PRODUCTS_VARIATIONS,
    PERMISSION_PURCHASES_MANAGE,
    PERMISSION_REPORTS_VIEW,
    PERMISSION_SELL_MANAGE,
    PERMISSION_SELL_POS,
    PERMISSION_SETTINGS_AGE_VERIFICATION,
    PERMISSION_SETTINGS_LOCATIONS,
    PERMISSION_SETTINGS_PAYMENT,
    PERMISSION_SETTINGS_VIEW,
    PERMISSION_SHIPPING_MANAGE,
    PERMISSION_STOCK_ADJUSTMENT_MANAGE,
    PERMISSION_STOCK_TRANSFER_MANAGE,
    PERMISSION_USERS_MANAGE,
)

KIND_MANAGE_PERMISSION = {
    "PRODUCT": PERMISSION_PRODUCTS_MANAGE,
    "BRAND": PERMISSION_PRODUCTS_BRANDS,
    "CATEGORY": PERMISSION_PRODUCTS_CATEGORIES,
    "UNIT": PERMISSION_PRODUCTS_UNITS,
    "VARIATION": PERMISSION_PRODUCTS_VARIATIONS,
    "VARIATION_VALUE": PERMISSION_PRODUCTS_VARIATIONS,
    "PRODUCT_DOCUMENT": PERMISSION_PRODUCTS_DOCUMENTS,
    "BUSINESS_LOCATION": PERMISSION_SETTINGS_LOCATIONS,
    "CUSTOMER": PERMISSION_CONTACTS_MANAGE,
    "CUSTOMER_GROUP": PERMISSION_CONTACTS_MANAGE,
    "SUPPLIER": PERMISSION_CONTACTS_MANAGE,
    "SALE": PERMISSION_SELL_MANAGE,
    "DRAFT": PERMISSION_SELL_POS,
    "QUOTATION": PERMISSION_SELL_MANAGE,
    "SHIPMENT": PERMISSION_SHIPPING_MANAGE,
    "CUSTOMER_RETURN": PERMISSION_POS_PROCESS_RETURN,
    "PURCHASE": PERMISSION_PURCHASES_MANAGE,
    "PURCHASE_RETURN": PERMISSION_PURCHASES_MANAGE,
    "STOCK_ADJUSTMENT": PERMISSION_STOCK_ADJUSTMENT_MANAGE,
    "STOCK_TRANSFER": PERMISSION_STOCK_TRANSFER_MANAGE,
    "STOCK_TRANSFER_REQUEST": PERMISSION_STOCK_TRANSFER_MANAGE,
    "CUSTOMER_REQUEST": PERMISSION_SELL_POS,
    "PAYMENT_METHOD": PERMISSION_SETTINGS_PAYMENT,
    "BANK_ACCOUNT": PERMISSION_SETTINGS_PAYMENT,
    "EXPENSE": PERMISSION_EXPENSE_MANAGE,
    "EXPENSE_CATEGORY": PERMISSION_EXPENSE_MANAGE,
    "ROLE": PERMISSION_USERS_MANAGE,
    "USER": PERMISSION_USERS_MANAGE,
}

ACTION_PERMISSION_MAP = {
    "ADD_PRODUCT": PERMISSION_PRODUCTS_ADD,
    "DELETE_PRODUCT": PERMISSION_PRODUCTS_DELETE,
    "ADD_VARIABLE_PRODUCT": PERMISSION_PRODUCTS_ADD,
    "UPDATE_PRODUCT_PRICES": PERMISSION_PRODUCTS_UPDATE_PRICE,
    "ADD_SALE": PERMISSION_SELL_POS,
    "VOID_SALE": PERMISSION_POS_VOID_SALE,
    "SET_SALE_EMAIL": PERMISSION_SELL_POS,
    "SET_TRANSFER_REQUEST_STATUS": PERMISSION_STOCK_TRANSFER_MANAGE,
    "UPDATE_BRANDING": PERMISSION_SETTINGS_VIEW,
    "RESET_BRANDING": PERMISSION_SETTINGS_VIEW,
    "UPDATE_AGE_VERIFICATION": PERMISSION_SETTINGS_AGE_VERIFICATION,
    "VIEW_REPORT": PERMISSION_REPORTS_VIEW,
}

_GENERIC_PREFIXES = ("ADD_", "UPDATE_", "DELETE_")


def resolve_required_permission(action_type: str) -> str | None:
    """Resolve the required permission for a mutation envelope type."""
    permission = ACTION_PERMISSION_MAP.get(action_type)
    if permission is not None:
        return permission
    for prefix in _GENERIC_PREFIXES:
        if action_type.startswith(prefix):
            return KIND_MANAGE_PERMISSION.get(action_type[len(prefix):])
    return None
