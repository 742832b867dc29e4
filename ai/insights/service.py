"""
POS Insights — Store-Backed Requests
======================================
Pull the relevant slice out of the store, shape it, and ask the
insights client. Reads only; nothing here mutates the store.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ai.insights.client import InsightsClient
from ai.insights.payloads import (
    NO_SALES_MESSAGE,
    business_insights_prompt,
    low_stock_summary,
    sales_analysis_prompt,
    simplify_sales,
)
from core.store.kinds import EntityKind
from core.time.temporal import DateRange
from engines.reporting.filters import ReportSource, completed_sales

logger = logging.getLogger("pos.insights")

RECENT_SALES_LIMIT = 20


def _category_names(source: ReportSource):
    return {c.id: c.name for c in source.list(EntityKind.CATEGORY)}


def business_insights(source: ReportSource, client: InsightsClient) -> str:
    sales = completed_sales(source)
    if not sales:
        return NO_SALES_MESSAGE
    prompt = business_insights_prompt(simplify_sales(sales, _category_names(source)))
    return client.generate(prompt)


def sales_analysis_insights(
    source: ReportSource,
    client: InsightsClient,
    date_range: Optional[DateRange] = None,
) -> str:
    """Narrative analysis of completed sales in the window."""
    sales = completed_sales(source, date_range)
    if not sales:
        logger.info("Sales analysis insights skipped: no sales in window")
        return NO_SALES_MESSAGE
    prompt = sales_analysis_prompt(
        simplify_sales(sales, _category_names(source)), date_range
    )
    return client.generate(prompt)


def chat_about_business(
    source: ReportSource,
    client: InsightsClient,
    history: Optional[Sequence[Any]],
    message: str,
) -> str:
    recent = completed_sales(source)[-RECENT_SALES_LIMIT:]
    return client.chat(
        history,
        message,
        sales_summary=simplify_sales(recent, _category_names(source)),
        products_summary=low_stock_summary(source.list(EntityKind.PRODUCT)),
    )
