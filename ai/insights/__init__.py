"""
POS Insights — Public API
===========================
Advisory text from an external service. Never writes to the store.
"""

from ai.insights.client import InsightsClient
from ai.insights.errors import ExternalServiceError
from ai.insights.payloads import (
    NO_SALES_MESSAGE,
    chat_message,
    low_stock_summary,
    normalize_history,
    simplify_sales,
)
from ai.insights.service import (
    business_insights,
    chat_about_business,
    sales_analysis_insights,
)

__all__ = [
    "InsightsClient",
    "ExternalServiceError",
    "NO_SALES_MESSAGE",
    "chat_message",
    "low_stock_summary",
    "normalize_history",
    "simplify_sales",
    "business_insights",
    "chat_about_business",
    "sales_analysis_insights",
]
