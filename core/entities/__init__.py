"""
POS Entities — Public API
===========================
Typed, immutable records for every collection the DomainStore owns.
"""

from core.entities.access import Role, User
from core.entities.base import Record
from core.entities.catalog import (
    NO_TAX,
    Brand,
    BusinessLocation,
    Category,
    Product,
    ProductDocument,
    TaxTerms,
    Unit,
    Variation,
    VariationValue,
)
from core.entities.contacts import Customer, CustomerGroup, Supplier
from core.entities.enums import (
    AdjustmentType,
    DiscountType,
    DocumentType,
    ProductType,
    SaleStatus,
    ShipmentStatus,
    TaxType,
    TransferRequestStatus,
    TransferStatus,
)
from core.entities.finance import (
    BankAccount,
    Expense,
    ExpenseCategory,
    PaymentMethod,
)
from core.entities.transactions import (
    CustomerRequest,
    CustomerReturn,
    Discount,
    Draft,
    LineItem,
    PartyRef,
    Payment,
    Purchase,
    PurchaseReturn,
    Quotation,
    Sale,
    Shipment,
    StockAdjustment,
    StockTransfer,
    StockTransferRequest,
    items_subtotal,
)

__all__ = [
    "Record",
    # enums
    "AdjustmentType",
    "DiscountType",
    "DocumentType",
    "ProductType",
    "SaleStatus",
    "ShipmentStatus",
    "TaxType",
    "TransferRequestStatus",
    "TransferStatus",
    # catalog
    "NO_TAX",
    "Brand",
    "BusinessLocation",
    "Category",
    "Product",
    "ProductDocument",
    "TaxTerms",
    "Unit",
    "Variation",
    "VariationValue",
    # contacts
    "Customer",
    "CustomerGroup",
    "Supplier",
    # finance
    "BankAccount",
    "Expense",
    "ExpenseCategory",
    "PaymentMethod",
    # transactions
    "CustomerRequest",
    "CustomerReturn",
    "Discount",
    "Draft",
    "LineItem",
    "PartyRef",
    "Payment",
    "Purchase",
    "PurchaseReturn",
    "Quotation",
    "Sale",
    "Shipment",
    "StockAdjustment",
    "StockTransfer",
    "StockTransferRequest",
    "items_subtotal",
    # access
    "Role",
    "User",
]
