"""
POS Reporting — Shared Arithmetic
===================================
Tax and discount formulas used by every report.

    tax_per_unit = base * amount / 100     (percentage)
                 = amount                  (fixed)
    line_tax     = tax_per_unit * quantity

    base = line price on the sales side,
           line cost_price on the purchase side

    discount     = subtotal * value / 100  (percentage)
                 = value                   (fixed)
    net          = subtotal - discount
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from core.entities import Discount, LineItem, Sale, items_subtotal

T = TypeVar("T")

PRICE_BASE = "price"
COST_BASE = "cost_price"


def line_tax(item: LineItem, base: str = PRICE_BASE) -> float:
    if base not in (PRICE_BASE, COST_BASE):
        raise ValueError(f"base must be '{PRICE_BASE}' or '{COST_BASE}'.")
    base_price = item.price if base == PRICE_BASE else item.cost_price
    return item.tax.per_unit(base_price) * item.quantity


def items_tax(items: Iterable[LineItem], base: str = PRICE_BASE) -> float:
    return sum(line_tax(item, base) for item in items)


def discount_amount(subtotal: float, discount: Optional[Discount]) -> float:
    if discount is None:
        return 0.0
    return discount.amount_off(subtotal)


def net_of_discount(subtotal: float, discount: Optional[Discount]) -> float:
    return subtotal - discount_amount(subtotal, discount)


def sale_net_subtotal(sale: Sale) -> float:
    """Sale subtotal after its discount (pre-tax)."""
    return net_of_discount(items_subtotal(sale.items), sale.discount)


def items_cost(items: Iterable[LineItem]) -> float:
    return sum(item.cost_price * item.quantity for item in items)


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def top_n(rows: Sequence[T], key: Callable[[T], float], n: int) -> List[T]:
    """Highest `key` first; equal keys keep their original order."""
    if n < 0:
        raise ValueError("n cannot be negative.")
    return sorted(rows, key=key, reverse=True)[:n]
