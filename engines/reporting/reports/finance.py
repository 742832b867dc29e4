"""
POS Reporting — Finance Reports
=================================
Tax liability, profit & loss and expense breakdowns.

    output_tax      = tax(completed sales) - tax(customer returns)   [price]
    input_tax       = tax(purchases) - tax(purchase returns)         [cost_price]
    net_tax_payable = output_tax - input_tax

    net_sales    = discounted sales subtotal - returned items at sale price
    net_cogs     = cost of sold items - cost of returned items
    gross_profit = net_sales - net_cogs
    net_profit   = gross_profit - expenses
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from core.entities import Expense
from core.store.kinds import EntityKind
from core.time.temporal import DateRange
from engines.reporting.calculations import (
    COST_BASE,
    PRICE_BASE,
    items_cost,
    items_tax,
    sale_net_subtotal,
)
from engines.reporting.filters import ReportSource, completed_sales, within

logger = logging.getLogger("pos.reports")

UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str
    name: str
    total: float

    def to_dict(self) -> dict:
        return {"category_id": self.category_id, "name": self.name, "total": self.total}


# ══════════════════════════════════════════════════════════════
# TAX
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaxReport:
    output_tax: float
    input_tax: float
    net_tax_payable: float

    def to_dict(self) -> dict:
        return {
            "output_tax": self.output_tax,
            "input_tax": self.input_tax,
            "net_tax_payable": self.net_tax_payable,
        }


def tax_report(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
) -> TaxReport:
    sales = completed_sales(source, date_range)
    sales_returns = within(source.list(EntityKind.CUSTOMER_RETURN), date_range)
    purchases = within(source.list(EntityKind.PURCHASE), date_range)
    purchase_returns = within(source.list(EntityKind.PURCHASE_RETURN), date_range)

    output_tax = (
        sum(items_tax(s.items, PRICE_BASE) for s in sales)
        - sum(items_tax(r.items, PRICE_BASE) for r in sales_returns)
    )
    input_tax = (
        sum(items_tax(p.items, COST_BASE) for p in purchases)
        - sum(items_tax(r.items, COST_BASE) for r in purchase_returns)
    )
    return TaxReport(
        output_tax=output_tax,
        input_tax=input_tax,
        net_tax_payable=output_tax - input_tax,
    )


# ══════════════════════════════════════════════════════════════
# EXPENSES
# ══════════════════════════════════════════════════════════════

def _category_totals(
    source: ReportSource,
    expenses: Tuple[Expense, ...],
) -> Tuple[CategoryTotal, ...]:
    names = {c.id: c.name for c in source.list(EntityKind.EXPENSE_CATEGORY)}
    totals: Dict[str, float] = {}
    for expense in expenses:
        totals[expense.category_id] = totals.get(expense.category_id, 0.0) + expense.amount
    rows = [
        CategoryTotal(cid, names.get(cid, UNCATEGORIZED), amount)
        for cid, amount in totals.items()
    ]
    return tuple(sorted(rows, key=lambda r: r.total, reverse=True))


@dataclass(frozen=True)
class ExpenseReport:
    entries: Tuple[Expense, ...]
    total: float
    by_category: Tuple[CategoryTotal, ...]

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "total": self.total,
            "by_category": [c.to_dict() for c in self.by_category],
        }


def expense_report(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
    category_id: Optional[str] = None,
) -> ExpenseReport:
    """Expenses in the window, newest first, with per-category totals."""
    expenses = tuple(
        e for e in within(source.list(EntityKind.EXPENSE), date_range)
        if not category_id or e.category_id == category_id
    )
    entries = tuple(sorted(expenses, key=lambda e: e.date, reverse=True))
    return ExpenseReport(
        entries=entries,
        total=sum(e.amount for e in entries),
        by_category=_category_totals(source, entries),
    )


# ══════════════════════════════════════════════════════════════
# PROFIT & LOSS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProfitLossReport:
    gross_sales: float
    sales_returns: float
    net_sales: float
    cost_of_goods_sold: float
    gross_profit: float
    expenses_by_category: Tuple[CategoryTotal, ...]
    total_expenses: float
    net_profit: float

    def to_dict(self) -> dict:
        return {
            "gross_sales": self.gross_sales,
            "sales_returns": self.sales_returns,
            "net_sales": self.net_sales,
            "cost_of_goods_sold": self.cost_of_goods_sold,
            "gross_profit": self.gross_profit,
            "expenses_by_category": [c.to_dict() for c in self.expenses_by_category],
            "total_expenses": self.total_expenses,
            "net_profit": self.net_profit,
        }


def profit_loss_report(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
) -> ProfitLossReport:
    sales = completed_sales(source, date_range)
    returns = within(source.list(EntityKind.CUSTOMER_RETURN), date_range)
    expenses = within(source.list(EntityKind.EXPENSE), date_range)

    gross_sales = sum(sale_net_subtotal(s) for s in sales)
    returned = sum(item.line_total for r in returns for item in r.items)
    net_sales = gross_sales - returned

    net_cogs = (
        sum(items_cost(s.items) for s in sales)
        - sum(items_cost(r.items) for r in returns)
    )
    gross_profit = net_sales - net_cogs
    total_expenses = sum(e.amount for e in expenses)

    logger.debug(
        f"profit_loss_report: {len(sales)} sales, {len(returns)} returns, "
        f"{len(expenses)} expenses"
    )
    return ProfitLossReport(
        gross_sales=gross_sales,
        sales_returns=returned,
        net_sales=net_sales,
        cost_of_goods_sold=net_cogs,
        gross_profit=gross_profit,
        expenses_by_category=_category_totals(source, expenses),
        total_expenses=total_expenses,
        net_profit=gross_profit - total_expenses,
    )
