"""
POS Entities — Contacts
=========================
Customers, customer groups and suppliers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.entities.base import Record, require_id, require_non_negative


@dataclass(frozen=True)
class CustomerGroup(Record):
    """Pricing tier; discount_percentage is 0–100."""

    id: str
    name: str
    discount_percentage: float = 0.0

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")
        require_non_negative(self.discount_percentage, "discount_percentage")
        if self.discount_percentage > 100:
            raise ValueError("discount_percentage cannot exceed 100.")


@dataclass(frozen=True)
class Customer(Record):
    id: str
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    customer_group_id: str = ""

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")


@dataclass(frozen=True)
class Supplier(Record):
    id: str
    name: str
    company_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")
