"""
POS Reporting — Sales Reports
===============================
Revenue-side aggregations. Only completed sales count towards
revenue; voided sales are kept in the store but contribute nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from core.entities import Sale
from core.store.kinds import EntityKind
from core.time.temporal import DateRange
from engines.reporting.calculations import (
    safe_ratio,
    sale_net_subtotal,
    top_n,
)
from engines.reporting.filters import ReportSource, completed_sales, within
from engines.reporting.reports.stock import classify_stock, StockStatus

logger = logging.getLogger("pos.reports")

UNKNOWN_CATEGORY = "Unknown Category"
UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_METHOD = "Unknown"


# ══════════════════════════════════════════════════════════════
# RESULT TYPES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductPerformance:
    product_id: str
    name: str
    quantity: int
    revenue: float

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "revenue": self.revenue,
        }


@dataclass(frozen=True)
class GroupRevenue:
    """Revenue for one category or payment method."""
    id: str
    name: str
    revenue: float

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "revenue": self.revenue}


@dataclass(frozen=True)
class PurchaseSaleSummary:
    gross_sales: float
    gross_purchases: float
    sales_returns: float
    purchase_returns: float
    net_sales: float
    net_purchases: float

    def to_dict(self) -> dict:
        return {
            "gross_sales": self.gross_sales,
            "gross_purchases": self.gross_purchases,
            "sales_returns": self.sales_returns,
            "purchase_returns": self.purchase_returns,
            "net_sales": self.net_sales,
            "net_purchases": self.net_purchases,
        }


@dataclass(frozen=True)
class SalesAnalysis:
    total_revenue: float
    sale_count: int
    avg_sale_value: float
    total_items_sold: int
    top_products_by_quantity: Tuple[ProductPerformance, ...]
    top_products_by_revenue: Tuple[ProductPerformance, ...]
    revenue_by_category: Tuple[GroupRevenue, ...]
    revenue_by_payment_method: Tuple[GroupRevenue, ...]

    def to_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "sale_count": self.sale_count,
            "avg_sale_value": self.avg_sale_value,
            "total_items_sold": self.total_items_sold,
            "top_products_by_quantity": [p.to_dict() for p in self.top_products_by_quantity],
            "top_products_by_revenue": [p.to_dict() for p in self.top_products_by_revenue],
            "revenue_by_category": [g.to_dict() for g in self.revenue_by_category],
            "revenue_by_payment_method": [
                g.to_dict() for g in self.revenue_by_payment_method
            ],
        }


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: float
    sale_count: int
    product_count: int
    low_stock_count: int
    customer_count: int

    def to_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "sale_count": self.sale_count,
            "product_count": self.product_count,
            "low_stock_count": self.low_stock_count,
            "customer_count": self.customer_count,
        }


# ══════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════

def _product_performance(
    source: ReportSource,
    sales: Tuple[Sale, ...],
) -> List[ProductPerformance]:
    """Per-product quantity and revenue, in first-seen order."""
    names = {p.id: p.name for p in source.list(EntityKind.PRODUCT)}
    quantity: Dict[str, int] = {}
    revenue: Dict[str, float] = {}
    snapshot_names: Dict[str, str] = {}
    for sale in sales:
        for item in sale.items:
            quantity[item.product_id] = quantity.get(item.product_id, 0) + item.quantity
            revenue[item.product_id] = revenue.get(item.product_id, 0.0) + item.line_total
            snapshot_names.setdefault(item.product_id, item.name)
    return [
        ProductPerformance(
            product_id=pid,
            name=names.get(pid) or snapshot_names.get(pid) or UNKNOWN_PRODUCT,
            quantity=quantity[pid],
            revenue=revenue[pid],
        )
        for pid in quantity
    ]


# ══════════════════════════════════════════════════════════════
# REPORTS
# ══════════════════════════════════════════════════════════════

def purchase_sale_summary(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
) -> PurchaseSaleSummary:
    sales = completed_sales(source, date_range)
    purchases = within(source.list(EntityKind.PURCHASE), date_range)
    sales_returns = within(source.list(EntityKind.CUSTOMER_RETURN), date_range)
    purchase_returns = within(source.list(EntityKind.PURCHASE_RETURN), date_range)

    gross_sales = sum(sale_net_subtotal(s) for s in sales)
    gross_purchases = sum(p.total for p in purchases)
    returned_sales = sum(r.total for r in sales_returns)
    returned_purchases = sum(r.total for r in purchase_returns)

    logger.debug(
        f"purchase_sale_summary: {len(sales)} sales, {len(purchases)} purchases"
    )
    return PurchaseSaleSummary(
        gross_sales=gross_sales,
        gross_purchases=gross_purchases,
        sales_returns=returned_sales,
        purchase_returns=returned_purchases,
        net_sales=gross_sales - returned_sales,
        net_purchases=gross_purchases - returned_purchases,
    )


def sales_analysis(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
    top: int = 5,
) -> SalesAnalysis:
    """
    Revenue, counts, top products and revenue breakdowns.

    Category revenue is attributed through the live product record;
    lines whose product (or category) no longer resolves are grouped
    under "Unknown Category". Payment-method revenue is the sum of the
    payment amounts recorded against each method.
    """
    sales = completed_sales(source, date_range)
    total_revenue = sum(s.total for s in sales)
    total_items = sum(item.quantity for s in sales for item in s.items)

    performance = _product_performance(source, sales)

    products = {p.id: p for p in source.list(EntityKind.PRODUCT)}
    category_names = {c.id: c.name for c in source.list(EntityKind.CATEGORY)}
    by_category: Dict[str, float] = {}
    for sale in sales:
        for item in sale.items:
            product = products.get(item.product_id)
            category_id = product.category_id if product else ""
            by_category[category_id] = by_category.get(category_id, 0.0) + item.line_total

    method_names = {m.id: m.name for m in source.list(EntityKind.PAYMENT_METHOD)}
    by_method: Dict[str, float] = {}
    for sale in sales:
        for payment in sale.payments:
            by_method[payment.method_id] = (
                by_method.get(payment.method_id, 0.0) + payment.amount
            )

    category_rows = [
        GroupRevenue(cid, category_names.get(cid, UNKNOWN_CATEGORY), amount)
        for cid, amount in by_category.items()
    ]
    method_rows = [
        GroupRevenue(mid, method_names.get(mid, UNKNOWN_METHOD), amount)
        for mid, amount in by_method.items()
    ]

    logger.debug(f"sales_analysis: {len(sales)} completed sales")
    return SalesAnalysis(
        total_revenue=total_revenue,
        sale_count=len(sales),
        avg_sale_value=safe_ratio(total_revenue, len(sales)),
        total_items_sold=total_items,
        top_products_by_quantity=tuple(top_n(performance, lambda p: p.quantity, top)),
        top_products_by_revenue=tuple(top_n(performance, lambda p: p.revenue, top)),
        revenue_by_category=tuple(
            top_n(category_rows, lambda g: g.revenue, len(category_rows))
        ),
        revenue_by_payment_method=tuple(
            top_n(method_rows, lambda g: g.revenue, len(method_rows))
        ),
    )


def trending_products(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
    top: int = 10,
) -> Tuple[ProductPerformance, ...]:
    """Best sellers by quantity over the window."""
    sales = completed_sales(source, date_range)
    performance = _product_performance(source, sales)
    return tuple(top_n(performance, lambda p: p.quantity, top))


def dashboard_summary(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
) -> DashboardSummary:
    sales = completed_sales(source, date_range)
    products = source.list(EntityKind.PRODUCT)
    low = sum(
        1 for p in products
        if classify_stock(p.stock, p.reorder_point) == StockStatus.LOW_STOCK
    )
    return DashboardSummary(
        total_revenue=sum(s.total for s in sales),
        sale_count=len(sales),
        product_count=len(products),
        low_stock_count=low,
        customer_count=len(source.list(EntityKind.CUSTOMER)),
    )
