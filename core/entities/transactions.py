"""
POS Entities — Transactions
=============================
Sales, purchases, returns, drafts, quotations, shipments and the
stock movement records.

RULES:
- A LineItem is a snapshot of the product at transaction time.
  Later edits to the live Product never change recorded lines.
- A Sale is never deleted. Voiding flips its status and keeps it.
- StockAdjustment is an append-only ledger entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from core.entities.base import (
    Record,
    require_id,
    require_non_negative,
    require_positive_int,
)
from core.entities.catalog import NO_TAX, Product, TaxTerms
from core.entities.enums import (
    AdjustmentType,
    DiscountType,
    SaleStatus,
    ShipmentStatus,
    TransferRequestStatus,
    TransferStatus,
)


def _require_date(value) -> None:
    if not isinstance(value, datetime):
        raise ValueError("date must be datetime.")


def _require_items(items) -> None:
    if not isinstance(items, tuple):
        raise ValueError("items must be a tuple.")
    for item in items:
        if not isinstance(item, LineItem):
            raise ValueError("items must contain LineItem instances.")


# ══════════════════════════════════════════════════════════════
# VALUE RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PartyRef(Record):
    """{id, name} snapshot of the customer or supplier on a transaction."""

    id: str
    name: str = ""

    def __post_init__(self):
        require_id(self.id, "party id")


@dataclass(frozen=True)
class Payment(Record):
    method_id: str
    amount: float

    def __post_init__(self):
        require_id(self.method_id, "method_id")
        require_non_negative(self.amount, "payment amount")


@dataclass(frozen=True)
class Discount(Record):
    type: DiscountType
    value: float

    def __post_init__(self):
        if not isinstance(self.type, DiscountType):
            raise ValueError("discount type must be DiscountType enum.")
        require_non_negative(self.value, "discount value")

    def amount_off(self, subtotal: float) -> float:
        if self.type == DiscountType.PERCENTAGE:
            return subtotal * (self.value / 100)
        return self.value


@dataclass(frozen=True)
class LineItem(Record):
    """
    Product snapshot + quantity + price/tax terms at transaction time.

    On purchases, price is the unit price paid to the supplier.
    """

    product_id: str
    name: str
    quantity: int
    price: float
    cost_price: float = 0.0
    sku: str = ""
    category_id: str = ""
    tax: TaxTerms = NO_TAX

    def __post_init__(self):
        require_id(self.product_id, "product_id")
        require_positive_int(self.quantity, "quantity")
        require_non_negative(self.price, "price")
        require_non_negative(self.cost_price, "cost_price")
        if not isinstance(self.tax, TaxTerms):
            raise ValueError("tax must be TaxTerms.")

    @classmethod
    def from_product(
        cls,
        product: Product,
        quantity: int,
        price: Optional[float] = None,
    ) -> "LineItem":
        return cls(
            product_id=product.id,
            name=product.name,
            quantity=quantity,
            price=product.price if price is None else price,
            cost_price=product.cost_price,
            sku=product.sku,
            category_id=product.category_id,
            tax=product.tax,
        )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


def items_subtotal(items: Tuple[LineItem, ...]) -> float:
    return sum(item.line_total for item in items)


# ══════════════════════════════════════════════════════════════
# SALE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Sale(Record):
    """
    A completed checkout.

    The sum of payments is expected to match total but is not
    enforced here; reconciliation belongs to reporting.
    """

    id: str
    date: datetime
    customer: PartyRef
    items: Tuple[LineItem, ...] = ()
    payments: Tuple[Payment, ...] = ()
    total: float = 0.0
    status: SaleStatus = SaleStatus.COMPLETED
    discount: Optional[Discount] = None
    passport_number: Optional[str] = None
    nationality: Optional[str] = None
    customer_email_for_docs: Optional[str] = None

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        if not isinstance(self.customer, PartyRef):
            raise ValueError("customer must be PartyRef.")
        _require_items(self.items)
        if not isinstance(self.payments, tuple):
            raise ValueError("payments must be a tuple.")
        require_non_negative(self.total, "total")
        if not isinstance(self.status, SaleStatus):
            raise ValueError("status must be SaleStatus enum.")

    @property
    def subtotal(self) -> float:
        return items_subtotal(self.items)

    @property
    def is_completed(self) -> bool:
        return self.status == SaleStatus.COMPLETED


# ══════════════════════════════════════════════════════════════
# PURCHASES / RETURNS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Purchase(Record):
    id: str
    date: datetime
    supplier: PartyRef
    items: Tuple[LineItem, ...] = ()
    total: float = 0.0

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        if not isinstance(self.supplier, PartyRef):
            raise ValueError("supplier must be PartyRef.")
        _require_items(self.items)
        require_non_negative(self.total, "total")


@dataclass(frozen=True)
class PurchaseReturn(Record):
    id: str
    date: datetime
    supplier: PartyRef
    items: Tuple[LineItem, ...] = ()
    total: float = 0.0

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        if not isinstance(self.supplier, PartyRef):
            raise ValueError("supplier must be PartyRef.")
        _require_items(self.items)
        require_non_negative(self.total, "total")


@dataclass(frozen=True)
class CustomerReturn(Record):
    id: str
    date: datetime
    original_sale_id: str
    customer: PartyRef
    items: Tuple[LineItem, ...] = ()
    reason: str = ""
    total: float = 0.0

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        require_id(self.original_sale_id, "original_sale_id")
        if not isinstance(self.customer, PartyRef):
            raise ValueError("customer must be PartyRef.")
        _require_items(self.items)
        require_non_negative(self.total, "total")


# ══════════════════════════════════════════════════════════════
# DRAFTS / QUOTATIONS / SHIPMENTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Draft(Record):
    """A parked cart that has not been checked out."""

    id: str
    date: datetime
    customer: PartyRef
    items: Tuple[LineItem, ...] = ()
    total: float = 0.0

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        _require_items(self.items)


@dataclass(frozen=True)
class Quotation(Record):
    id: str
    date: datetime
    customer: PartyRef
    items: Tuple[LineItem, ...] = ()
    total: float = 0.0
    expiry_date: Optional[datetime] = None

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        _require_items(self.items)
        if self.expiry_date is not None and not isinstance(self.expiry_date, datetime):
            raise ValueError("expiry_date must be datetime.")


@dataclass(frozen=True)
class Shipment(Record):
    id: str
    sale_id: str
    customer_name: str = ""
    shipping_address: str = ""
    tracking_number: str = ""
    status: ShipmentStatus = ShipmentStatus.PROCESSING

    def __post_init__(self):
        require_id(self.id)
        require_id(self.sale_id, "sale_id")
        if not isinstance(self.status, ShipmentStatus):
            raise ValueError("status must be ShipmentStatus enum.")


# ══════════════════════════════════════════════════════════════
# STOCK MOVEMENT RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockAdjustment(Record):
    """Ledger entry. Never updated or deleted once recorded."""

    id: str
    date: datetime
    product_id: str
    type: AdjustmentType
    quantity: int
    reason: str = ""

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        require_id(self.product_id, "product_id")
        if not isinstance(self.type, AdjustmentType):
            raise ValueError("type must be AdjustmentType enum.")
        require_positive_int(self.quantity, "quantity")

    @property
    def signed_quantity(self) -> int:
        if self.type == AdjustmentType.SUBTRACTION:
            return -self.quantity
        return self.quantity


@dataclass(frozen=True)
class StockTransfer(Record):
    id: str
    date: datetime
    from_location_id: str
    to_location_id: str
    items: Tuple[LineItem, ...] = ()
    status: TransferStatus = TransferStatus.IN_TRANSIT

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        require_id(self.from_location_id, "from_location_id")
        require_id(self.to_location_id, "to_location_id")
        if self.from_location_id == self.to_location_id:
            raise ValueError("from_location_id and to_location_id must differ.")
        _require_items(self.items)
        if not isinstance(self.status, TransferStatus):
            raise ValueError("status must be TransferStatus enum.")


@dataclass(frozen=True)
class StockTransferRequest(Record):
    """A branch asking another location for stock; pending until decided."""

    id: str
    date: datetime
    from_location_id: str
    to_location_id: str
    product_id: str
    quantity: int
    requesting_user_id: str = ""
    status: TransferRequestStatus = TransferRequestStatus.PENDING

    def __post_init__(self):
        require_id(self.id)
        _require_date(self.date)
        require_id(self.from_location_id, "from_location_id")
        require_id(self.to_location_id, "to_location_id")
        require_id(self.product_id, "product_id")
        require_positive_int(self.quantity, "quantity")
        if not isinstance(self.status, TransferRequestStatus):
            raise ValueError("status must be TransferRequestStatus enum.")


@dataclass(frozen=True)
class CustomerRequest(Record):
    """An item a customer asked for that the shop could not supply."""

    id: str
    text: str
    date: datetime
    cashier_id: str = ""
    cashier_name: str = ""

    def __post_init__(self):
        require_id(self.id)
        if not self.text:
            raise ValueError("text must be non-empty string.")
        _require_date(self.date)
