"""
POS Permissions - Constants
===========================
Flat, unscoped permission strings. A role holds a set of them and a
check is plain set membership, except for the admin role.
"""

from __future__ import annotations

ADMIN_ROLE_ID = "admin"

# Dashboard
PERMISSION_DASHBOARD_VIEW = "dashboard:view"

# Products
PERMISSION_PRODUCTS_VIEW = "products:view"
PERMISSION_PRODUCTS_MANAGE = "products:manage"
PERMISSION_PRODUCTS_ADD = "products:add"
PERMISSION_PRODUCTS_DELETE = "products:delete"
PERMISSION_PRODUCTS_UPDATE_PRICE = "products:update_price"
PERMISSION_PRODUCTS_VARIATIONS = "products:variations"
PERMISSION_PRODUCTS_UNITS = "products:units"
PERMISSION_PRODUCTS_CATEGORIES = "products:categories"
PERMISSION_PRODUCTS_BRANDS = "products:brands"
PERMISSION_PRODUCTS_DOCUMENTS = "products:documents"

# Contacts
PERMISSION_CONTACTS_VIEW = "contacts:view"
PERMISSION_CONTACTS_MANAGE = "contacts:manage"

# Purchases
PERMISSION_PURCHASES_VIEW = "purchases:view"
PERMISSION_PURCHASES_MANAGE = "purchases:manage"

# Sell
PERMISSION_SELL_POS = "sell:pos"
PERMISSION_SELL_MANAGE = "sell:manage"
PERMISSION_SHIPPING_MANAGE = "shipping:manage"
PERMISSION_RETURNS_MANAGE = "returns:manage"
PERMISSION_POS_VOID_SALE = "pos:void_sale"
PERMISSION_POS_PROCESS_RETURN = "pos:process_return"

# Stock
PERMISSION_STOCK_TRANSFER_MANAGE = "stock_transfer:manage"
PERMISSION_STOCK_ADJUSTMENT_MANAGE = "stock_adjustment:manage"

# Expenses
PERMISSION_EXPENSE_MANAGE = "expense:manage"

# Reports
PERMISSION_REPORTS_VIEW = "reports:view"

# Users
PERMISSION_USERS_MANAGE = "users:manage"

# Settings
PERMISSION_SETTINGS_VIEW = "settings:view"
PERMISSION_SETTINGS_PAYMENT = "settings:payment"
PERMISSION_SETTINGS_LOCATIONS = "settings:locations"
PERMISSION_SETTINGS_AGE_VERIFICATION = "settings:age_verification"

ALL_PERMISSIONS = frozenset({
    "dashboard:view",
    "products:view", "products:manage", "products:add", "products:delete",
    "products:update_price", "products:print_labels", "products:variations",
    "products:import", "products:import_stock", "products:import_units",
    "products:price_groups", "products:units", "products:categories",
    "products:brands", "products:documents",
    "contacts:view", "contacts:manage", "contacts:import",
    "purchases:view", "purchases:manage",
    "sell:view", "sell:pos", "sell:sales", "sell:manage",
    "shipping:view", "shipping:manage", "discounts:view",
    "returns:view", "returns:manage",
    "pos:apply_discount", "pos:change_price", "pos:process_return", "pos:void_sale",
    "stock_transfer:view", "stock_transfer:manage",
    "stock_adjustment:view", "stock_adjustment:manage",
    "expense:view", "expense:manage",
    "reports:view", "reports:customer_demand", "reports:return_analysis",
    "users:view", "users:manage",
    "notifications:manage",
    "settings:view", "settings:tax", "settings:product", "settings:contact",
    "settings:sale", "settings:pos", "settings:purchases", "settings:payment",
    "settings:dashboard", "settings:system", "settings:prefixes",
    "settings:email", "settings:sms", "settings:reward_points",
    "settings:modules", "settings:custom_labels", "settings:locations",
    "settings:age_verification",
})


class PermissionDenialCode:
    """Why a permission check came back false."""

    NO_CURRENT_USER = "NO_CURRENT_USER"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    PERMISSION_MISSING = "PERMISSION_MISSING"
