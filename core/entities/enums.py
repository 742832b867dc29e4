"""
POS Entities — Enumerations
=============================
Closed value sets used by entity records. Values are the lowercase
strings the HTTP adapter sends and receives.
"""

from __future__ import annotations

from enum import Enum


class TaxType(Enum):
    """How a product's tax amount is applied."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountType(Enum):
    """How a sale-level discount is applied."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class SaleStatus(Enum):
    """Sale lifecycle. completed → voided is the only transition."""
    COMPLETED = "completed"
    VOIDED = "voided"


class AdjustmentType(Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"


class ProductType(Enum):
    SINGLE = "single"
    VARIABLE = "variable"
    COMBO = "combo"


class TransferStatus(Enum):
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"


class TransferRequestStatus(Enum):
    """pending → approved | rejected."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ShipmentStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DocumentType(Enum):
    """Kind of document attached to products."""
    COA = "coa"
    WARRANTY = "warranty"
