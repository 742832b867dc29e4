"""
POS Domain Store — Public API
===============================
"""

from core.store.domain_store import DomainStore
from core.store.errors import (
    EntityNotFoundError,
    ImmutableRecordError,
    IntegrityCode,
    InvalidTransitionError,
    ReferentialIntegrityError,
    SelfDeletionError,
    StoreError,
)
from core.store.ids import IdProvider, SequentialIdProvider, UuidIdProvider
from core.store.kinds import KIND_SPECS, EntityKind, KindSpec, resolve_kind

__all__ = [
    "DomainStore",
    "EntityKind",
    "KindSpec",
    "KIND_SPECS",
    "resolve_kind",
    "IdProvider",
    "SequentialIdProvider",
    "UuidIdProvider",
    "StoreError",
    "ReferentialIntegrityError",
    "SelfDeletionError",
    "EntityNotFoundError",
    "ImmutableRecordError",
    "InvalidTransitionError",
    "IntegrityCode",
]
