"""
POS Domain Store — Referential Integrity Guards
=================================================
Before a record is removed, every collection that can point at it is
scanned. A single live reference rejects the delete with the guard's
IntegrityCode and message.

    Role              ← User.role_id
    Supplier          ← Purchase.supplier.id
    CustomerGroup     ← Customer.customer_group_id
    ExpenseCategory   ← Expense.category_id
    Brand             ← Product.brand_id
    Category          ← Product.category_id
    Unit              ← Product.unit_id
    BusinessLocation  ← User / Product .business_location_id
    BankAccount       ← PaymentMethod.account_id
    PaymentMethod     ← Sale.payments[].method_id
    Variation         ← VariationValue.variation_id
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Tuple

from core.entities import Record
from core.store.errors import IntegrityCode, ReferentialIntegrityError
from core.store.kinds import EntityKind


@dataclass(frozen=True)
class DeleteGuard:
    code: str
    message: str
    dependents: Tuple[EntityKind, ...]
    references: Callable[[Record, str], bool]


def _field_equals(field_name: str) -> Callable[[Record, str], bool]:
    def _check(record: Record, entity_id: str) -> bool:
        return getattr(record, field_name, None) == entity_id
    return _check


def _purchase_supplier(record: Record, entity_id: str) -> bool:
    return record.supplier.id == entity_id


def _sale_payment_method(record: Record, entity_id: str) -> bool:
    return any(p.method_id == entity_id for p in record.payments)


DELETE_GUARDS: Dict[EntityKind, Tuple[DeleteGuard, ...]] = {
    EntityKind.ROLE: (
        DeleteGuard(
            IntegrityCode.ROLE_IN_USE,
            "Cannot delete role while it is assigned to users.",
            (EntityKind.USER,),
            _field_equals("role_id"),
        ),
    ),
    EntityKind.SUPPLIER: (
        DeleteGuard(
            IntegrityCode.SUPPLIER_HAS_PURCHASES,
            "Cannot delete supplier with existing purchases.",
            (EntityKind.PURCHASE,),
            _purchase_supplier,
        ),
    ),
    EntityKind.CUSTOMER_GROUP: (
        DeleteGuard(
            IntegrityCode.CUSTOMER_GROUP_IN_USE,
            "Cannot delete customer group while it is in use by customers.",
            (EntityKind.CUSTOMER,),
            _field_equals("customer_group_id"),
        ),
    ),
    EntityKind.EXPENSE_CATEGORY: (
        DeleteGuard(
            IntegrityCode.EXPENSE_CATEGORY_IN_USE,
            "Cannot delete category with existing expenses.",
            (EntityKind.EXPENSE,),
            _field_equals("category_id"),
        ),
    ),
    EntityKind.BRAND: (
        DeleteGuard(
            IntegrityCode.BRAND_IN_USE,
            "Cannot delete brand with associated products.",
            (EntityKind.PRODUCT,),
            _field_equals("brand_id"),
        ),
    ),
    EntityKind.CATEGORY: (
        DeleteGuard(
            IntegrityCode.CATEGORY_IN_USE,
            "Cannot delete category with associated products.",
            (EntityKind.PRODUCT,),
            _field_equals("category_id"),
        ),
    ),
    EntityKind.UNIT: (
        DeleteGuard(
            IntegrityCode.UNIT_IN_USE,
            "Cannot delete unit with associated products.",
            (EntityKind.PRODUCT,),
            _field_equals("unit_id"),
        ),
    ),
    EntityKind.BUSINESS_LOCATION: (
        DeleteGuard(
            IntegrityCode.LOCATION_IN_USE,
            "Cannot delete location in use by users or products.",
            (EntityKind.USER, EntityKind.PRODUCT),
            _field_equals("business_location_id"),
        ),
    ),
    EntityKind.BANK_ACCOUNT: (
        DeleteGuard(
            IntegrityCode.BANK_ACCOUNT_LINKED,
            "Cannot delete bank account linked to a payment method.",
            (EntityKind.PAYMENT_METHOD,),
            _field_equals("account_id"),
        ),
    ),
    EntityKind.PAYMENT_METHOD: (
        DeleteGuard(
            IntegrityCode.PAYMENT_METHOD_IN_USE,
            "Cannot delete payment method with historical sales data.",
            (EntityKind.SALE,),
            _sale_payment_method,
        ),
    ),
    EntityKind.VARIATION: (
        DeleteGuard(
            IntegrityCode.VARIATION_HAS_VALUES,
            "Cannot delete variation with existing values.",
            (EntityKind.VARIATION_VALUE,),
            _field_equals("variation_id"),
        ),
    ),
}


def check_delete(
    kind: EntityKind,
    entity_id: str,
    collection_of: Callable[[EntityKind], Iterable[Record]],
) -> None:
    """Raise ReferentialIntegrityError if anything still references the record."""
    for guard in DELETE_GUARDS.get(kind, ()):
        for dependent in guard.dependents:
            if any(guard.references(r, entity_id) for r in collection_of(dependent)):
                raise ReferentialIntegrityError(
                    kind=kind.value,
                    entity_id=entity_id,
                    code=guard.code,
                    message=guard.message,
                )
