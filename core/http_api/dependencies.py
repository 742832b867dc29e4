"""
POS HTTP API - Dependencies
===========================
Injected store, settings and insights client for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass

from ai.insights.client import InsightsClient
from core.config.settings import AppSettings
from core.store.domain_store import DomainStore


@dataclass(frozen=True)
class HttpApiDependencies:
    store: DomainStore
    settings: AppSettings
    insights_client: InsightsClient
