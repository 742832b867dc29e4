"""
POS Insights — Payload Builders
=================================
Reduce store records to the compact JSON the insights service reads.

Sales are sent as:
    {date, total, item_count, products_sold: [{name, quantity, category, price}]}
Low stock as:
    {name, sku, stock, reorder_point}
Chat history as:
    [{role, parts: [{text}]}]
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from core.entities import Product, Sale
from core.time.temporal import DateRange

NO_SALES_MESSAGE = (
    "There is no sales data for the selected period. Cannot generate analysis."
)

USER_ROLE = "user"
MODEL_ROLE = "model"
CHAT_ROLES = frozenset({USER_ROLE, MODEL_ROLE})


def simplify_sales(
    sales: Iterable[Sale],
    category_names: Mapping[str, str],
) -> List[Dict[str, Any]]:
    return [
        {
            "date": sale.date.isoformat(),
            "total": sale.total,
            "item_count": len(sale.items),
            "products_sold": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "category": category_names.get(item.category_id),
                    "price": item.price,
                }
                for item in sale.items
            ],
        }
        for sale in sales
    ]


def low_stock_summary(products: Iterable[Product]) -> List[Dict[str, Any]]:
    """Products at or under their reorder point."""
    return [
        {
            "name": p.name,
            "sku": p.sku,
            "stock": p.stock,
            "reorder_point": p.reorder_point,
        }
        for p in products
        if p.stock <= p.reorder_point
    ]


def chat_message(role: str, text: str) -> Dict[str, Any]:
    if role not in CHAT_ROLES:
        raise ValueError(f"Chat role must be one of {sorted(CHAT_ROLES)}, got '{role}'.")
    return {"role": role, "parts": [{"text": text}]}


def normalize_history(history: Optional[Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Accept either wire-format turns or (role, text) pairs.
    """
    turns: List[Dict[str, Any]] = []
    for turn in history or ():
        if isinstance(turn, Mapping):
            parts = turn.get("parts") or []
            text = "".join(str(p.get("text", "")) for p in parts if isinstance(p, Mapping))
            turns.append(chat_message(str(turn.get("role", "")), text))
        else:
            role, text = turn
            turns.append(chat_message(role, text))
    return turns


def business_insights_prompt(simplified_sales: List[Dict[str, Any]]) -> str:
    return (
        "Analyze the following recent sales data and provide actionable insights "
        "covering sales performance, top selling products, top categories and "
        "three concrete recommendations. Format the response in Markdown.\n\n"
        f"Sales Data (JSON format):\n{json.dumps(simplified_sales, indent=2)}"
    )


def sales_analysis_prompt(
    simplified_sales: List[Dict[str, Any]],
    date_range: Optional[DateRange] = None,
) -> str:
    start = date_range.start.isoformat() if date_range and date_range.start else "the beginning"
    end = date_range.end.isoformat() if date_range and date_range.end else "the end"
    return (
        f"Analyze the following sales data for the period from {start} to {end}, "
        "covering overall performance, product performance, category insights, "
        "peak times and three data-driven recommendations. "
        "Format the response in Markdown.\n\n"
        f"Sales Data (JSON format):\n{json.dumps(simplified_sales, indent=2)}"
    )
