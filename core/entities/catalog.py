"""
POS Entities — Catalog
========================
Products and the dimension tables they reference (brand, category,
unit, business location, variations).

A Product's foreign keys (category_id, brand_id, unit_id,
business_location_id) are plain ids. The DomainStore refuses to
delete a dimension record while any product still points at it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from core.entities.base import (
    Record,
    require_id,
    require_non_negative,
)
from core.entities.enums import DocumentType, ProductType, TaxType


def _require_name(value, field_name: str = "name") -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be non-empty string.")


# ══════════════════════════════════════════════════════════════
# TAX TERMS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxTerms(Record):
    """
    Per-unit tax attached to a product.

    PERCENTAGE: amount is a percent of the base price (5 → 5%)
    FIXED:      amount is charged per unit as-is
    """

    amount: float = 0.0
    type: TaxType = TaxType.PERCENTAGE

    def __post_init__(self):
        require_non_negative(self.amount, "tax amount")
        if not isinstance(self.type, TaxType):
            raise ValueError("tax type must be TaxType enum.")

    def per_unit(self, base_price: float) -> float:
        if self.type == TaxType.PERCENTAGE:
            return base_price * (self.amount / 100)
        return self.amount


NO_TAX = TaxTerms()


# ══════════════════════════════════════════════════════════════
# DIMENSIONS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Brand(Record):
    id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)


@dataclass(frozen=True)
class Category(Record):
    id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)


@dataclass(frozen=True)
class Unit(Record):
    id: str
    name: str
    short_name: str = ""

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)


@dataclass(frozen=True)
class BusinessLocation(Record):
    id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)


@dataclass(frozen=True)
class Variation(Record):
    """A variation axis such as Size or Color."""
    id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)


@dataclass(frozen=True)
class VariationValue(Record):
    """One value on a variation axis (Size → Small)."""
    id: str
    variation_id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        require_id(self.variation_id, "variation_id")
        _require_name(self.name)


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product(Record):
    """
    A sellable catalog item.

    stock is a signed integer: sales decrement it without a floor,
    so it can go negative when more is sold than was on hand.
    Variants of a variable product carry parent_product_id.
    """

    id: str
    name: str
    sku: str = ""
    category_id: str = ""
    brand_id: str = ""
    unit_id: str = ""
    business_location_id: str = ""
    cost_price: float = 0.0
    price: float = 0.0
    stock: int = 0
    reorder_point: int = 0
    tax: TaxTerms = NO_TAX
    is_age_restricted: bool = False
    is_not_for_sale: bool = False
    product_type: ProductType = ProductType.SINGLE
    description: str = ""
    image_url: str = ""
    barcode_type: str = "CODE128"
    parent_product_id: Optional[str] = None

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)
        require_non_negative(self.cost_price, "cost_price")
        require_non_negative(self.price, "price")
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValueError("stock must be an integer.")
        if isinstance(self.reorder_point, bool) or not isinstance(self.reorder_point, int):
            raise ValueError("reorder_point must be an integer.")
        if self.reorder_point < 0:
            raise ValueError("reorder_point cannot be negative.")
        if not isinstance(self.tax, TaxTerms):
            raise ValueError("tax must be TaxTerms.")
        if not isinstance(self.product_type, ProductType):
            raise ValueError("product_type must be ProductType enum.")

    @property
    def cost_value(self) -> float:
        return self.stock * self.cost_price

    @property
    def price_value(self) -> float:
        return self.stock * self.price


@dataclass(frozen=True)
class ProductDocument(Record):
    """A certificate of analysis or warranty linked to products."""

    id: str
    name: str
    file_type: DocumentType
    description: str = ""
    product_ids: Tuple[str, ...] = ()
    file_name: str = ""
    file_url: str = ""
    uploaded_date: Optional[datetime] = None

    def __post_init__(self):
        require_id(self.id)
        _require_name(self.name)
        if not isinstance(self.file_type, DocumentType):
            raise ValueError("file_type must be DocumentType enum.")
        if not isinstance(self.product_ids, tuple):
            raise ValueError("product_ids must be a tuple.")
