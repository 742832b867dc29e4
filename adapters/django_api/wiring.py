"""
POS Django Adapter Wiring
=========================
Constructs HttpApiDependencies for local/demo runs.

This module is adapter-only glue:
- one process-wide DomainStore seeded with the demo data
- settings read from django.conf.settings (POS_* keys)
- the demo admin is signed in so the back office opens unlocked
"""

from __future__ import annotations

import logging
import threading

from ai.insights.client import InsightsClient
from core.config.settings import AppSettings
from core.http_api.dependencies import HttpApiDependencies
from core.store.seed import DEMO_ADMIN_USER_ID, build_demo_store

logger = logging.getLogger("pos.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    settings = AppSettings.from_django()
    store = build_demo_store(
        admin_role_id=settings.admin_role_id,
        current_user_id=DEMO_ADMIN_USER_ID,
    )
    logger.info(
        f"Demo store ready; insights at {settings.insights_url}, "
        f"timeout {settings.insights_timeout}s"
    )
    return HttpApiDependencies(
        store=store,
        settings=settings,
        insights_client=InsightsClient.from_settings(settings),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the singleton so the next request gets a freshly seeded store."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
