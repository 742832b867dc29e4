"""
POS Reporting — Stock Reports
===============================
Stock valuation by product and the stock adjustment ledger view.

Status thresholds:
    stock <= 0                   → out_of_stock
    0 < stock <= reorder_point   → low_stock
    stock > reorder_point        → in_stock
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Tuple, Union

from core.entities import AdjustmentType, StockAdjustment
from core.store.kinds import EntityKind
from core.time.temporal import DateRange
from engines.reporting.filters import ReportSource, within

logger = logging.getLogger("pos.reports")


class StockStatus(Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def classify_stock(stock: int, reorder_point: int) -> StockStatus:
    if stock <= 0:
        return StockStatus.OUT_OF_STOCK
    if stock <= reorder_point:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


# ══════════════════════════════════════════════════════════════
# STOCK VALUATION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockRow:
    product_id: str
    sku: str
    name: str
    category_id: str
    business_location_id: str
    stock: int
    reorder_point: int
    cost_price: float
    price: float
    cost_value: float
    price_value: float
    status: StockStatus

    def to_dict(self) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["status"] = self.status.value
        return data


SORTABLE_COLUMNS = frozenset(f.name for f in fields(StockRow))


@dataclass(frozen=True)
class StockReport:
    rows: Tuple[StockRow, ...]
    total_units: int
    total_cost_value: float
    total_price_value: float
    low_stock_count: int
    out_of_stock_count: int

    def to_dict(self) -> dict:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "total_units": self.total_units,
            "total_cost_value": self.total_cost_value,
            "total_price_value": self.total_price_value,
            "low_stock_count": self.low_stock_count,
            "out_of_stock_count": self.out_of_stock_count,
        }


def _sort_key(column: str):
    if column == "status":
        return lambda row: row.status.value
    return lambda row: getattr(row, column)


def stock_report(
    source: ReportSource,
    location_id: Optional[str] = None,
    category_id: Optional[str] = None,
    sort_by: Optional[str] = None,
    descending: bool = False,
) -> StockReport:
    """
    Per-product valuation, optionally filtered and sorted.

    Sorting is stable: rows with equal values keep catalog order in
    both directions. No sort_by keeps catalog order.
    """
    if sort_by is not None and sort_by not in SORTABLE_COLUMNS:
        raise ValueError(f"Unknown stock report column '{sort_by}'.")

    rows = []
    for product in source.list(EntityKind.PRODUCT):
        if location_id and product.business_location_id != location_id:
            continue
        if category_id and product.category_id != category_id:
            continue
        rows.append(StockRow(
            product_id=product.id,
            sku=product.sku,
            name=product.name,
            category_id=product.category_id,
            business_location_id=product.business_location_id,
            stock=product.stock,
            reorder_point=product.reorder_point,
            cost_price=product.cost_price,
            price=product.price,
            cost_value=product.cost_value,
            price_value=product.price_value,
            status=classify_stock(product.stock, product.reorder_point),
        ))

    if sort_by is not None:
        rows = sorted(rows, key=_sort_key(sort_by), reverse=descending)

    logger.debug(f"stock_report: {len(rows)} rows")
    return StockReport(
        rows=tuple(rows),
        total_units=sum(r.stock for r in rows),
        total_cost_value=sum(r.cost_value for r in rows),
        total_price_value=sum(r.price_value for r in rows),
        low_stock_count=sum(1 for r in rows if r.status == StockStatus.LOW_STOCK),
        out_of_stock_count=sum(
            1 for r in rows if r.status == StockStatus.OUT_OF_STOCK
        ),
    )


# ══════════════════════════════════════════════════════════════
# STOCK ADJUSTMENT LEDGER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockAdjustmentReport:
    entries: Tuple[StockAdjustment, ...]
    total_added: int
    total_subtracted: int
    net: int

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "total_added": self.total_added,
            "total_subtracted": self.total_subtracted,
            "net": self.net,
        }


def stock_adjustment_report(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
    product_id: Optional[str] = None,
    adjustment_type: Union[AdjustmentType, str, None] = None,
) -> StockAdjustmentReport:
    if adjustment_type is not None:
        adjustment_type = AdjustmentType(adjustment_type)

    entries = tuple(
        e for e in within(source.list(EntityKind.STOCK_ADJUSTMENT), date_range)
        if (product_id is None or e.product_id == product_id)
        and (adjustment_type is None or e.type == adjustment_type)
    )
    added = sum(e.quantity for e in entries if e.type == AdjustmentType.ADDITION)
    subtracted = sum(
        e.quantity for e in entries if e.type == AdjustmentType.SUBTRACTION
    )
    return StockAdjustmentReport(
        entries=entries,
        total_added=added,
        total_subtracted=subtracted,
        net=added - subtracted,
    )
