"""
POS Domain Store — Entity Kinds
=================================
One EntityKind per collection. KIND_SPECS records, per kind, the
record class, the id prefix new ids get, the field stamped with the
creation time (if any) and which mutations the kind allows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Type, Union

from core.entities import (
    BankAccount,
    Brand,
    BusinessLocation,
    Category,
    Customer,
    CustomerGroup,
    CustomerRequest,
    CustomerReturn,
    Draft,
    Expense,
    ExpenseCategory,
    PaymentMethod,
    Product,
    ProductDocument,
    Purchase,
    PurchaseReturn,
    Quotation,
    Record,
    Role,
    Sale,
    Shipment,
    StockAdjustment,
    StockTransfer,
    StockTransferRequest,
    Supplier,
    Unit,
    User,
    Variation,
    VariationValue,
)


class EntityKind(Enum):
    PRODUCT = "product"
    BRAND = "brand"
    CATEGORY = "category"
    UNIT = "unit"
    BUSINESS_LOCATION = "business_location"
    VARIATION = "variation"
    VARIATION_VALUE = "variation_value"
    PRODUCT_DOCUMENT = "product_document"
    CUSTOMER = "customer"
    CUSTOMER_GROUP = "customer_group"
    SUPPLIER = "supplier"
    SALE = "sale"
    DRAFT = "draft"
    QUOTATION = "quotation"
    SHIPMENT = "shipment"
    CUSTOMER_RETURN = "customer_return"
    PURCHASE = "purchase"
    PURCHASE_RETURN = "purchase_return"
    STOCK_ADJUSTMENT = "stock_adjustment"
    STOCK_TRANSFER = "stock_transfer"
    STOCK_TRANSFER_REQUEST = "stock_transfer_request"
    CUSTOMER_REQUEST = "customer_request"
    PAYMENT_METHOD = "payment_method"
    BANK_ACCOUNT = "bank_account"
    EXPENSE_CATEGORY = "expense_category"
    EXPENSE = "expense"
    ROLE = "role"
    USER = "user"


@dataclass(frozen=True)
class KindSpec:
    """
    Storage rules for one kind.

    collection:  key used in snapshots ("products", "sales", ...)
    date_field:  stamped from the store clock on creation
    updatable:   full-record replacement allowed
    deletable:   removal allowed (still subject to integrity guards)
    """

    record_type: Type[Record]
    id_prefix: str
    collection: str
    date_field: Optional[str] = None
    updatable: bool = True
    deletable: bool = True


KIND_SPECS: Dict[EntityKind, KindSpec] = {
    EntityKind.PRODUCT: KindSpec(Product, "PROD-", "products"),
    EntityKind.BRAND: KindSpec(Brand, "B-", "brands"),
    EntityKind.CATEGORY: KindSpec(Category, "C-", "categories"),
    EntityKind.UNIT: KindSpec(Unit, "U-", "units"),
    EntityKind.BUSINESS_LOCATION: KindSpec(BusinessLocation, "LOC-", "business_locations"),
    EntityKind.VARIATION: KindSpec(Variation, "V-", "variations"),
    EntityKind.VARIATION_VALUE: KindSpec(VariationValue, "VV-", "variation_values"),
    EntityKind.PRODUCT_DOCUMENT: KindSpec(
        ProductDocument, "DOC-", "product_documents", date_field="uploaded_date"
    ),
    EntityKind.CUSTOMER: KindSpec(Customer, "CUST-", "customers"),
    EntityKind.CUSTOMER_GROUP: KindSpec(CustomerGroup, "CG-", "customer_groups"),
    EntityKind.SUPPLIER: KindSpec(Supplier, "SUP-", "suppliers"),
    # sales are voided, never removed
    EntityKind.SALE: KindSpec(Sale, "SALE-", "sales", date_field="date", deletable=False),
    EntityKind.DRAFT: KindSpec(Draft, "DRAFT-", "drafts", date_field="date"),
    EntityKind.QUOTATION: KindSpec(Quotation, "QUOT-", "quotations", date_field="date"),
    EntityKind.SHIPMENT: KindSpec(Shipment, "SHIP-", "shipments"),
    EntityKind.CUSTOMER_RETURN: KindSpec(
        CustomerReturn, "CRN-", "customer_returns", date_field="date"
    ),
    EntityKind.PURCHASE: KindSpec(Purchase, "PO-", "purchases", date_field="date"),
    EntityKind.PURCHASE_RETURN: KindSpec(
        PurchaseReturn, "PR-", "purchase_returns", date_field="date"
    ),
    EntityKind.STOCK_ADJUSTMENT: KindSpec(
        StockAdjustment, "SA-", "stock_adjustments", date_field="date",
        updatable=False, deletable=False,
    ),
    EntityKind.STOCK_TRANSFER: KindSpec(
        StockTransfer, "ST-", "stock_transfers", date_field="date"
    ),
    EntityKind.STOCK_TRANSFER_REQUEST: KindSpec(
        StockTransferRequest, "STR-", "stock_transfer_requests", date_field="date"
    ),
    EntityKind.CUSTOMER_REQUEST: KindSpec(
        CustomerRequest, "CR-", "customer_requests", date_field="date"
    ),
    EntityKind.PAYMENT_METHOD: KindSpec(PaymentMethod, "pay-", "payment_methods"),
    EntityKind.BANK_ACCOUNT: KindSpec(BankAccount, "BA-", "bank_accounts"),
    EntityKind.EXPENSE_CATEGORY: KindSpec(ExpenseCategory, "EC-", "expense_categories"),
    EntityKind.EXPENSE: KindSpec(Expense, "EXP-", "expenses", date_field="date"),
    EntityKind.ROLE: KindSpec(Role, "role-", "roles"),
    EntityKind.USER: KindSpec(User, "USER-", "users"),
}


def spec_for(kind: EntityKind) -> KindSpec:
    return KIND_SPECS[kind]


def resolve_kind(value: Union[str, EntityKind]) -> EntityKind:
    """
    Accept an EntityKind, its value ("business_location"), its name
    ("BUSINESS_LOCATION") or its collection key ("business_locations").
    """
    if isinstance(value, EntityKind):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError("entity kind must be a non-empty string.")
    try:
        return EntityKind(value.lower())
    except ValueError:
        pass
    for kind, spec in KIND_SPECS.items():
        if spec.collection == value.lower():
            return kind
    raise ValueError(f"Unknown entity kind '{value}'.")
