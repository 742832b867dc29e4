"""
POS Domain Store — Errors
===========================
Every store error is raised before anything is written, so a caller
that catches one can assume the store is unchanged.
"""

from __future__ import annotations


class IntegrityCode:
    """Which dependent collection blocked a delete."""

    ROLE_IN_USE = "ROLE_IN_USE"
    SUPPLIER_HAS_PURCHASES = "SUPPLIER_HAS_PURCHASES"
    CUSTOMER_GROUP_IN_USE = "CUSTOMER_GROUP_IN_USE"
    EXPENSE_CATEGORY_IN_USE = "EXPENSE_CATEGORY_IN_USE"
    BRAND_IN_USE = "BRAND_IN_USE"
    CATEGORY_IN_USE = "CATEGORY_IN_USE"
    UNIT_IN_USE = "UNIT_IN_USE"
    LOCATION_IN_USE = "LOCATION_IN_USE"
    BANK_ACCOUNT_LINKED = "BANK_ACCOUNT_LINKED"
    PAYMENT_METHOD_IN_USE = "PAYMENT_METHOD_IN_USE"
    VARIATION_HAS_VALUES = "VARIATION_HAS_VALUES"


class StoreError(Exception):
    """Base class for DomainStore failures."""


class ReferentialIntegrityError(StoreError):
    """Delete rejected because other records still reference the target."""

    def __init__(self, kind: str, entity_id: str, code: str, message: str):
        self.kind = kind
        self.entity_id = entity_id
        self.code = code
        self.message = message
        super().__init__(message)


class SelfDeletionError(StoreError):
    """The current user tried to delete their own account."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        self.message = "You cannot delete your own account."
        super().__init__(self.message)


class EntityNotFoundError(StoreError, LookupError):
    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        self.message = f"{kind} '{entity_id}' not found."
        super().__init__(self.message)


class ImmutableRecordError(StoreError):
    """Update or delete attempted on a kind that does not allow it."""

    def __init__(self, kind: str, operation: str):
        self.kind = kind
        self.operation = operation
        self.message = f"{kind} records cannot be {operation}."
        super().__init__(self.message)


class InvalidTransitionError(StoreError):
    """Status change not allowed from the record's current status."""

    def __init__(self, kind: str, entity_id: str, current: str, requested: str):
        self.kind = kind
        self.entity_id = entity_id
        self.current = current
        self.requested = requested
        self.message = (
            f"{kind} '{entity_id}' cannot move from '{current}' to '{requested}'."
        )
        super().__init__(self.message)
