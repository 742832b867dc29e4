"""
POS Domain Store — In-Memory Store
====================================
Owns every entity collection and the operations that change them.

RULES (NON-NEGOTIABLE):
- Validation precedes mutation. A failed operation leaves every
  collection exactly as it was.
- Collections keep insertion order.
- Records are immutable; an update swaps in a new record.
- One RLock serializes mutations; reads return tuple snapshots.
- Ids come from the IdProvider, creation times from the Clock.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from core.config.business import (
    DEFAULT_BRANDING,
    AgeVerificationSettings,
    BrandingSettings,
)
from core.entities import (
    CustomerRequest,
    Discount,
    LineItem,
    Product,
    ProductType,
    Record,
    Role,
    Sale,
    SaleStatus,
    StockAdjustment,
    StockTransferRequest,
    TransferRequestStatus,
    User,
    items_subtotal,
)
from core.permissions.constants import ADMIN_ROLE_ID
from core.permissions.evaluator import (
    PermissionEvaluationResult,
    PermissionEvaluator,
)
from core.store.errors import (
    EntityNotFoundError,
    ImmutableRecordError,
    InvalidTransitionError,
    SelfDeletionError,
    ReferentialIntegrityError,
)
from core.store.guards import check_delete
from core.store.ids import IdProvider, UuidIdProvider
from core.store.kinds import KIND_SPECS, EntityKind, resolve_kind, spec_for
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("pos.store")

KindRef = Union[EntityKind, str]
Payload = Union[Mapping[str, Any], Record]


def _as_payload(data: Payload) -> Dict[str, Any]:
    if isinstance(data, Record):
        return data.to_dict()
    if not isinstance(data, Mapping):
        raise ValueError("record data must be a mapping.")
    return dict(data)


class DomainStore:
    """
    In-memory owner of all POS collections.

    Usage:
        store = DomainStore(clock=FixedClock(...), id_provider=SequentialIdProvider())
        store.load(EntityKind.PRODUCT, products)
        store.set_current_user("USER001")
        sale = store.add_sale({"customer": {...}, "items": [...], "payments": [...]})
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        id_provider: Optional[IdProvider] = None,
        admin_role_id: str = ADMIN_ROLE_ID,
    ):
        self._clock = clock or SystemClock()
        self._ids = id_provider or UuidIdProvider()
        self._evaluator = PermissionEvaluator(admin_role_id)
        self._lock = threading.RLock()
        self._collections: Dict[EntityKind, List[Record]] = {
            kind: [] for kind in EntityKind
        }
        self._current_user_id: Optional[str] = None
        self._branding: BrandingSettings = DEFAULT_BRANDING
        self._age_verification = AgeVerificationSettings()

    # ── Internal helpers ──────────────────────────────────────

    def _index_of(self, kind: EntityKind, entity_id: str) -> int:
        for i, record in enumerate(self._collections[kind]):
            if record.id == entity_id:
                return i
        raise EntityNotFoundError(kind.value, entity_id)

    def _contains(self, kind: EntityKind, entity_id: str) -> bool:
        return any(r.id == entity_id for r in self._collections[kind])

    def _new_id(self, kind: EntityKind) -> str:
        spec = spec_for(kind)
        new_id = self._ids.next_id(spec.id_prefix)
        if self._contains(kind, new_id):
            raise ValueError(f"Id provider returned duplicate id '{new_id}'.")
        return new_id

    def _now(self) -> datetime:
        return self._clock.now_utc()

    def _build(self, kind: EntityKind, data: Payload) -> Record:
        """Validate a new record: fresh id, creation stamp, type checks."""
        spec = spec_for(kind)
        payload = _as_payload(data)
        payload["id"] = self._new_id(kind)
        if spec.date_field:
            payload[spec.date_field] = self._now()
        return spec.record_type.from_dict(payload)

    def _collection_view(self, kind: EntityKind) -> Tuple[Record, ...]:
        return tuple(self._collections[kind])

    # ══════════════════════════════════════════════════════════
    # SEEDING
    # ══════════════════════════════════════════════════════════

    def load(self, kind: KindRef, records: Iterable[Payload]) -> None:
        """
        Append records with their ids and dates as given.

        Used for seeding; no guards run and stock is not touched.
        """
        kind = resolve_kind(kind)
        record_type = spec_for(kind).record_type
        built = []
        seen = {r.id for r in self._collections[kind]}
        for data in records:
            record = data if isinstance(data, record_type) else record_type.from_dict(
                _as_payload(data)
            )
            if record.id in seen:
                raise ValueError(f"Duplicate {kind.value} id '{record.id}'.")
            seen.add(record.id)
            built.append(record)
        with self._lock:
            self._collections[kind].extend(built)

    # ══════════════════════════════════════════════════════════
    # READS
    # ══════════════════════════════════════════════════════════

    def list(self, kind: KindRef) -> Tuple[Record, ...]:
        kind = resolve_kind(kind)
        with self._lock:
            return self._collection_view(kind)

    def find(self, kind: KindRef, entity_id: str) -> Optional[Record]:
        kind = resolve_kind(kind)
        with self._lock:
            for record in self._collections[kind]:
                if record.id == entity_id:
                    return record
        return None

    def get(self, kind: KindRef, entity_id: str) -> Record:
        record = self.find(kind, entity_id)
        if record is None:
            raise EntityNotFoundError(resolve_kind(kind).value, entity_id)
        return record

    def find_user(self, user_id: str) -> Optional[User]:
        return self.find(EntityKind.USER, user_id)

    def find_role(self, role_id: str) -> Optional[Role]:
        return self.find(EntityKind.ROLE, role_id)

    @property
    def branding(self) -> BrandingSettings:
        return self._branding

    @property
    def age_verification(self) -> AgeVerificationSettings:
        return self._age_verification

    def snapshot(self) -> Dict[str, Any]:
        """Every collection as plain dicts, keyed by collection name."""
        with self._lock:
            data: Dict[str, Any] = {
                spec.collection: [r.to_dict() for r in self._collections[kind]]
                for kind, spec in KIND_SPECS.items()
            }
            data["branding"] = self._branding.to_dict()
            data["age_verification"] = self._age_verification.to_dict()
            data["current_user_id"] = self._current_user_id
        return data

    # ══════════════════════════════════════════════════════════
    # CURRENT USER / PERMISSIONS
    # ══════════════════════════════════════════════════════════

    @property
    def current_user(self) -> Optional[User]:
        if self._current_user_id is None:
            return None
        return self.find_user(self._current_user_id)

    def set_current_user(self, user_id: Optional[str]) -> None:
        with self._lock:
            if user_id is not None:
                self._index_of(EntityKind.USER, user_id)
            self._current_user_id = user_id
        logger.info(f"Current user set to {user_id}")

    def evaluate_permission(
        self,
        permission: str,
        user_id: Optional[str] = None,
    ) -> PermissionEvaluationResult:
        with self._lock:
            subject = user_id if user_id is not None else self._current_user_id
            return self._evaluator.evaluate(permission, subject, self)

    def has_permission(self, permission: str, user_id: Optional[str] = None) -> bool:
        """
        True when the user's role grants `permission`.

        The admin role passes every check. No resolvable user or role
        means False.
        """
        return self.evaluate_permission(permission, user_id).allowed

    # ══════════════════════════════════════════════════════════
    # GENERIC MUTATIONS
    # ══════════════════════════════════════════════════════════

    def add_entity(self, kind: KindRef, data: Payload) -> Record:
        """Assign a fresh id (and creation date for dated kinds), then append."""
        kind = resolve_kind(kind)
        if kind == EntityKind.SALE:
            return self.add_sale(data)
        if kind == EntityKind.STOCK_TRANSFER_REQUEST:
            payload = _as_payload(data)
            payload["status"] = TransferRequestStatus.PENDING.value
            data = payload

        with self._lock:
            record = self._build(kind, data)
            self._collections[kind].append(record)
        logger.info(f"Added {kind.value} {record.id}")
        return record

    def update_entity(self, kind: KindRef, entity_id: str, data: Payload) -> Record:
        """
        Replace the record with `entity_id` by a new one built from `data`.

        The id is preserved. Missing ids raise EntityNotFoundError.
        """
        kind = resolve_kind(kind)
        spec = spec_for(kind)
        if not spec.updatable:
            raise ImmutableRecordError(kind.value, "updated")

        payload = _as_payload(data)
        payload["id"] = entity_id
        with self._lock:
            index = self._index_of(kind, entity_id)
            current = self._collections[kind][index]
            if spec.date_field and payload.get(spec.date_field) is None:
                payload[spec.date_field] = getattr(current, spec.date_field)
            record = spec.record_type.from_dict(payload)
            if kind == EntityKind.SALE:
                self._check_sale_change(current, record)
            self._collections[kind][index] = record
        logger.info(f"Updated {kind.value} {entity_id}")
        return record

    def delete_entity(self, kind: KindRef, entity_id: str) -> None:
        """Remove a record after the referential-integrity guards pass."""
        kind = resolve_kind(kind)
        if not spec_for(kind).deletable:
            raise ImmutableRecordError(kind.value, "deleted")

        with self._lock:
            index = self._index_of(kind, entity_id)
            if kind == EntityKind.USER and entity_id == self._current_user_id:
                logger.warning(f"Rejected self-deletion of user {entity_id}")
                raise SelfDeletionError(entity_id)
            try:
                check_delete(kind, entity_id, self._collection_view)
            except ReferentialIntegrityError as exc:
                logger.warning(
                    f"Rejected delete of {kind.value} {entity_id}: {exc.code}"
                )
                raise
            del self._collections[kind][index]
        logger.info(f"Deleted {kind.value} {entity_id}")

    # ══════════════════════════════════════════════════════════
    # SALES
    # ══════════════════════════════════════════════════════════

    @staticmethod
    def _check_sale_change(current: Sale, new: Sale) -> None:
        # Stock already moved with the original lines.
        if (new.items, new.total, new.discount) != (current.items, current.total, current.discount):
            raise ValueError(
                "Sale items, discount and total cannot be changed; "
                "void the sale and record a new one."
            )
        if current.status == SaleStatus.VOIDED and new.status != SaleStatus.VOIDED:
            raise InvalidTransitionError(
                EntityKind.SALE.value, current.id,
                current.status.value, new.status.value,
            )

    def add_sale(self, data: Payload) -> Sale:
        """
        Record a completed sale and take its quantities off stock.

        total defaults to the discounted subtotal. Stock has no floor.
        Lines pointing at unknown products are kept but move nothing.
        """
        payload = _as_payload(data)
        payload["status"] = SaleStatus.COMPLETED.value
        if payload.get("total") is None:
            items = tuple(
                i if isinstance(i, LineItem) else LineItem.from_dict(i)
                for i in payload.get("items") or ()
            )
            subtotal = items_subtotal(items)
            discount = payload.get("discount")
            if discount is not None and not isinstance(discount, Discount):
                discount = Discount.from_dict(discount)
            off = discount.amount_off(subtotal) if discount else 0.0
            payload["total"] = max(subtotal - off, 0.0)

        with self._lock:
            sale = self._build(EntityKind.SALE, payload)
            products = self._collections[EntityKind.PRODUCT]
            updated: Dict[int, Product] = {}
            for item in sale.items:
                for i, product in enumerate(products):
                    if product.id == item.product_id:
                        base = updated.get(i, product)
                        updated[i] = base.replace(stock=base.stock - item.quantity)
                        break
            self._collections[EntityKind.SALE].append(sale)
            for i, product in updated.items():
                products[i] = product
                if product.stock < 0:
                    logger.warning(
                        f"Product {product.id} stock is negative ({product.stock})"
                    )
        logger.info(
            f"Added sale {sale.id} total={sale.total} items={len(sale.items)}"
        )
        return sale

    def void_sale(self, sale_id: str) -> Sale:
        """completed → voided. Voiding twice is a no-op; stock is not restored."""
        with self._lock:
            index = self._index_of(EntityKind.SALE, sale_id)
            sale = self._collections[EntityKind.SALE][index]
            if sale.status == SaleStatus.VOIDED:
                return sale
            voided = sale.replace(status=SaleStatus.VOIDED)
            self._collections[EntityKind.SALE][index] = voided
        logger.info(f"Voided sale {sale_id}")
        return voided

    def set_sale_email(self, sale_id: str, email: str) -> Sale:
        """Attach the address compliance documents are sent to."""
        with self._lock:
            index = self._index_of(EntityKind.SALE, sale_id)
            sale = self._collections[EntityKind.SALE][index]
            updated = sale.replace(customer_email_for_docs=email)
            self._collections[EntityKind.SALE][index] = updated
        return updated

    # ══════════════════════════════════════════════════════════
    # PRODUCTS / STOCK
    # ══════════════════════════════════════════════════════════

    def add_variable_product(
        self,
        parent_data: Payload,
        variants_data: Iterable[Payload],
    ) -> Tuple[Product, Tuple[Product, ...]]:
        """
        Create a parent product (stock forced to 0, type variable) and
        one child product per variant stamped with parent_product_id.
        """
        parent_payload = _as_payload(parent_data)
        parent_payload["stock"] = 0
        parent_payload["product_type"] = ProductType.VARIABLE.value

        with self._lock:
            parent = self._build(EntityKind.PRODUCT, parent_payload)
            variants = []
            taken = {parent.id}
            for variant_data in variants_data:
                payload = _as_payload(variant_data)
                payload["parent_product_id"] = parent.id
                variant = self._build(EntityKind.PRODUCT, payload)
                if variant.id in taken:
                    raise ValueError(f"Id provider returned duplicate id '{variant.id}'.")
                taken.add(variant.id)
                variants.append(variant)
            self._collections[EntityKind.PRODUCT].append(parent)
            self._collections[EntityKind.PRODUCT].extend(variants)
        logger.info(
            f"Added variable product {parent.id} with {len(variants)} variants"
        )
        return parent, tuple(variants)

    def add_stock_adjustment(self, data: Payload) -> StockAdjustment:
        """Append to the adjustment ledger. Product stock is left as is."""
        return self.add_entity(EntityKind.STOCK_ADJUSTMENT, data)

    def update_product_prices(
        self,
        updates: Iterable[Mapping[str, Any]],
    ) -> Tuple[Product, ...]:
        """Bulk price / cost_price change. Every id must exist."""
        updates = list(updates)
        with self._lock:
            products = self._collections[EntityKind.PRODUCT]
            staged: Dict[int, Product] = {}
            for update in updates:
                product_id = update.get("id")
                index = self._index_of(EntityKind.PRODUCT, product_id)
                base = staged.get(index, products[index])
                changes = {}
                if "price" in update:
                    changes["price"] = float(update["price"])
                if "cost_price" in update:
                    changes["cost_price"] = float(update["cost_price"])
                staged[index] = base.replace(**changes)
            for index, product in staged.items():
                products[index] = product
        logger.info(f"Updated prices for {len(staged)} products")
        return tuple(staged.values())

    def set_transfer_request_status(
        self,
        request_id: str,
        status: Union[TransferRequestStatus, str],
    ) -> StockTransferRequest:
        """pending → approved | rejected."""
        status = TransferRequestStatus(status)
        if status == TransferRequestStatus.PENDING:
            raise ValueError("status must be approved or rejected.")
        with self._lock:
            kind = EntityKind.STOCK_TRANSFER_REQUEST
            index = self._index_of(kind, request_id)
            request = self._collections[kind][index]
            if request.status != TransferRequestStatus.PENDING:
                raise InvalidTransitionError(
                    kind.value, request_id, request.status.value, status.value
                )
            decided = request.replace(status=status)
            self._collections[kind][index] = decided
        logger.info(f"Stock transfer request {request_id} {status.value}")
        return decided

    # ══════════════════════════════════════════════════════════
    # CUSTOMER REQUESTS / SETTINGS
    # ══════════════════════════════════════════════════════════

    def add_customer_request(
        self,
        text: str,
        cashier_id: Optional[str] = None,
    ) -> CustomerRequest:
        """Log an unmet customer request against a cashier (default: current user)."""
        cashier_id = cashier_id or self._current_user_id
        cashier = self.find_user(cashier_id) if cashier_id else None
        if cashier_id and cashier is None:
            raise EntityNotFoundError(EntityKind.USER.value, cashier_id)
        return self.add_entity(
            EntityKind.CUSTOMER_REQUEST,
            {
                "text": text,
                "cashier_id": cashier.id if cashier else "",
                "cashier_name": cashier.name if cashier else "",
            },
        )

    def update_branding(self, data: Payload) -> BrandingSettings:
        branding = (
            data if isinstance(data, BrandingSettings)
            else BrandingSettings.from_dict(_as_payload(data))
        )
        with self._lock:
            self._branding = branding
        logger.info("Branding settings updated")
        return branding

    def reset_branding(self) -> BrandingSettings:
        with self._lock:
            self._branding = DEFAULT_BRANDING
        logger.info("Branding settings reset to defaults")
        return DEFAULT_BRANDING

    def update_age_verification(
        self,
        settings: Payload,
        restricted_product_ids: Iterable[str],
    ) -> AgeVerificationSettings:
        """
        Replace age-gate settings and flag exactly the given products
        as age restricted; every other product is cleared.
        """
        new_settings = (
            settings if isinstance(settings, AgeVerificationSettings)
            else AgeVerificationSettings.from_dict(_as_payload(settings))
        )
        restricted = set(restricted_product_ids)
        with self._lock:
            products = self._collections[EntityKind.PRODUCT]
            self._collections[EntityKind.PRODUCT] = [
                p if p.is_age_restricted == (p.id in restricted)
                else p.replace(is_age_restricted=p.id in restricted)
                for p in products
            ]
            self._age_verification = new_settings
        logger.info(
            f"Age verification updated: minimum_age={new_settings.minimum_age} "
            f"restricted={len(restricted)}"
        )
        return new_settings
