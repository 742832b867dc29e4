"""
POS Core Config — Application Settings
========================================
Deployment knobs read once at start-up from Django settings or the
process environment. Nothing in the store or the reports reads
os.environ directly; they receive an AppSettings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_ADMIN_ROLE_ID = "admin"
DEFAULT_INSIGHTS_URL = "http://localhost:3000/api/generate-insights"
DEFAULT_CHAT_URL = "http://localhost:3000/api/chat"
DEFAULT_INSIGHTS_TIMEOUT = 30.0


# ══════════════════════════════════════════════════════════════
# APP SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AppSettings:
    """
    Runtime configuration.

    admin_role_id:    role whose holders pass every permission check
    insights_url:     POST target for {prompt} requests
    chat_url:         POST target for {history, message} requests
    insights_timeout: seconds before the outbound call is abandoned
    report_timezone:  zone report date windows are evaluated in
                      ("" = host local zone)
    """

    admin_role_id: str = DEFAULT_ADMIN_ROLE_ID
    insights_url: str = DEFAULT_INSIGHTS_URL
    chat_url: str = DEFAULT_CHAT_URL
    insights_timeout: float = DEFAULT_INSIGHTS_TIMEOUT
    report_timezone: str = ""

    def __post_init__(self) -> None:
        if not self.admin_role_id:
            raise ValueError("admin_role_id must be non-empty.")
        if not self.insights_url or not self.chat_url:
            raise ValueError("insights_url and chat_url must be non-empty.")
        if self.insights_timeout <= 0:
            raise ValueError(
                f"insights_timeout must be positive, got {self.insights_timeout}."
            )

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any]) -> "AppSettings":
        """
        Build settings from POS_* keys.

        Missing keys fall back to the defaults above.
        """
        timeout = source.get("POS_INSIGHTS_TIMEOUT", DEFAULT_INSIGHTS_TIMEOUT)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"POS_INSIGHTS_TIMEOUT must be a number, got {timeout!r}."
            ) from exc

        return cls(
            admin_role_id=source.get("POS_ADMIN_ROLE_ID") or DEFAULT_ADMIN_ROLE_ID,
            insights_url=source.get("POS_INSIGHTS_URL") or DEFAULT_INSIGHTS_URL,
            chat_url=source.get("POS_CHAT_URL") or DEFAULT_CHAT_URL,
            insights_timeout=timeout,
            report_timezone=source.get("POS_REPORT_TIMEZONE") or "",
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        return cls.from_mapping(os.environ if environ is None else environ)

    @classmethod
    def from_django(cls) -> "AppSettings":
        """Read POS_* attributes from django.conf.settings."""
        from django.conf import settings as django_settings

        keys = (
            "POS_ADMIN_ROLE_ID",
            "POS_INSIGHTS_URL",
            "POS_CHAT_URL",
            "POS_INSIGHTS_TIMEOUT",
            "POS_REPORT_TIMEZONE",
        )
        source = {
            key: getattr(django_settings, key)
            for key in keys
            if hasattr(django_settings, key)
        }
        return cls.from_mapping(source)
