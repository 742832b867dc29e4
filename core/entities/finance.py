"""
POS Entities — Finance
========================
Payment methods, bank accounts and expenses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.entities.base import Record, require_id, require_non_negative


@dataclass(frozen=True)
class BankAccount(Record):
    id: str
    name: str
    bank_name: str = ""
    account_number: str = ""

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")


@dataclass(frozen=True)
class PaymentMethod(Record):
    """Tender type; may settle into a BankAccount via account_id."""

    id: str
    name: str
    account_id: Optional[str] = None

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")


@dataclass(frozen=True)
class ExpenseCategory(Record):
    id: str
    name: str

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")


@dataclass(frozen=True)
class Expense(Record):
    id: str
    date: datetime
    category_id: str
    amount: float
    description: str = ""

    def __post_init__(self):
        require_id(self.id)
        if not isinstance(self.date, datetime):
            raise ValueError("date must be datetime.")
        require_id(self.category_id, "category_id")
        require_non_negative(self.amount, "amount")
