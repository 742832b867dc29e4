"""
Tests for core.config — AppSettings and business settings records.
"""

import pytest

from core.config import (
    DEFAULT_BRANDING,
    AgeVerificationSettings,
    AppSettings,
    BrandingSettings,
)
from core.config.settings import DEFAULT_CHAT_URL, DEFAULT_INSIGHTS_URL


# ── AppSettings ──────────────────────────────────────────────

class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.admin_role_id == "admin"
        assert settings.insights_url == DEFAULT_INSIGHTS_URL
        assert settings.chat_url == DEFAULT_CHAT_URL
        assert settings.insights_timeout == 30.0

    def test_from_mapping(self):
        settings = AppSettings.from_mapping({
            "POS_ADMIN_ROLE_ID": "owner",
            "POS_INSIGHTS_URL": "http://insights.local/generate",
            "POS_INSIGHTS_TIMEOUT": "12.5",
            "POS_REPORT_TIMEZONE": "UTC",
        })
        assert settings.admin_role_id == "owner"
        assert settings.insights_url == "http://insights.local/generate"
        assert settings.chat_url == DEFAULT_CHAT_URL
        assert settings.insights_timeout == 12.5
        assert settings.report_timezone == "UTC"

    def test_from_env(self):
        settings = AppSettings.from_env({"POS_CHAT_URL": "http://chat.local"})
        assert settings.chat_url == "http://chat.local"

    def test_bad_timeout(self):
        with pytest.raises(ValueError, match="must be a number"):
            AppSettings.from_mapping({"POS_INSIGHTS_TIMEOUT": "soon"})

    def test_non_positive_timeout(self):
        with pytest.raises(ValueError, match="must be positive"):
            AppSettings(insights_timeout=0)

    def test_frozen(self):
        settings = AppSettings()
        with pytest.raises(AttributeError):
            settings.admin_role_id = "root"


# ── Business Settings ────────────────────────────────────────

class TestBusinessSettings:
    def test_default_branding(self):
        assert DEFAULT_BRANDING.business_name == "TranscendPOS"

    def test_branding_requires_name(self):
        with pytest.raises(ValueError):
            BrandingSettings(business_name="")

    def test_age_verification_defaults(self):
        settings = AgeVerificationSettings()
        assert settings.minimum_age == 21
        assert settings.is_id_scanning_enabled is True

    def test_age_verification_from_dict(self):
        settings = AgeVerificationSettings.from_dict({"minimum_age": "18"})
        assert settings.minimum_age == 18
