"""
POS Reporting — Report Registry
=================================
Maps public report names to their functions and the extra query
parameters each one accepts. Used by the HTTP layer to serve
GET reports/<name>.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from core.time.temporal import DateRange
from engines.reporting.filters import ReportSource
from engines.reporting.reports import (
    dashboard_summary,
    expense_report,
    profit_loss_report,
    purchase_sale_summary,
    sales_analysis,
    stock_adjustment_report,
    stock_report,
    tax_report,
    trending_products,
)


def _as_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc
    if number < 0:
        raise ValueError(f"{name} cannot be negative.")
    return number


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "desc")


@dataclass(frozen=True)
class ReportDefinition:
    name: str
    run: Callable[[ReportSource, DateRange, Mapping[str, Any]], Any]
    params: FrozenSet[str] = frozenset()
    dated: bool = True


# ══════════════════════════════════════════════════════════════
# ADAPTERS: (source, date_range, params) → result
# ══════════════════════════════════════════════════════════════

def _run_stock(source, date_range, params):
    return stock_report(
        source,
        location_id=params.get("location_id") or None,
        category_id=params.get("category_id") or None,
        sort_by=params.get("sort_by") or None,
        descending=_as_bool(params.get("descending", False)),
    )


def _run_stock_adjustment(source, date_range, params):
    return stock_adjustment_report(
        source,
        date_range,
        product_id=params.get("product_id") or None,
        adjustment_type=params.get("type") or None,
    )


def _run_sales_analysis(source, date_range, params):
    top = _as_int(params.get("top", 5), "top")
    return sales_analysis(source, date_range, top=top)


def _run_trending(source, date_range, params):
    top = _as_int(params.get("top", 10), "top")
    return {"products": [p.to_dict() for p in trending_products(source, date_range, top=top)]}


def _run_expenses(source, date_range, params):
    return expense_report(source, date_range, category_id=params.get("category_id") or None)


REPORT_REGISTRY: Dict[str, ReportDefinition] = {
    d.name: d for d in (
        ReportDefinition("purchase-sale", lambda s, r, p: purchase_sale_summary(s, r)),
        ReportDefinition(
            "sales-analysis", _run_sales_analysis, params=frozenset({"top"}),
        ),
        ReportDefinition(
            "stock", _run_stock,
            params=frozenset({"location_id", "category_id", "sort_by", "descending"}),
            dated=False,
        ),
        ReportDefinition(
            "stock-adjustment", _run_stock_adjustment,
            params=frozenset({"product_id", "type"}),
        ),
        ReportDefinition("tax", lambda s, r, p: tax_report(s, r)),
        ReportDefinition("profit-loss", lambda s, r, p: profit_loss_report(s, r)),
        ReportDefinition("expenses", _run_expenses, params=frozenset({"category_id"})),
        ReportDefinition("trending-products", _run_trending, params=frozenset({"top"})),
        ReportDefinition("dashboard", lambda s, r, p: dashboard_summary(s, r)),
    )
}


def resolve_report(name: str) -> Optional[ReportDefinition]:
    return REPORT_REGISTRY.get(name)


def run_report(
    name: str,
    source: ReportSource,
    date_range: DateRange,
    params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Run a registered report and return its plain-dict form.

    Unknown names raise LookupError; bad parameters raise ValueError.
    """
    definition = resolve_report(name)
    if definition is None:
        raise LookupError(f"Unknown report '{name}'.")
    params = dict(params or {})
    unknown = set(params) - definition.params
    if unknown:
        raise ValueError(
            f"Report '{name}' does not accept parameters: {sorted(unknown)}."
        )
    result = definition.run(source, date_range, params)
    return result if isinstance(result, dict) else result.to_dict()
