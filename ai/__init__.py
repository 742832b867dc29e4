"""
POS AI Module — Advisory Only
================================
AI components are advisory only. They read store data and return
text; they never mutate the store.
"""

from ai.insights import ExternalServiceError, InsightsClient

__all__ = [
    "ExternalServiceError",
    "InsightsClient",
]
