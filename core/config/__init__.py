"""
POS Core Config — Public API
===============================
Deployment settings (AppSettings) and back-office business
settings (branding, age verification).
"""

from core.config.business import (
    DEFAULT_BRANDING,
    AgeVerificationSettings,
    BrandingSettings,
)
from core.config.settings import AppSettings

__all__ = [
    "AppSettings",
    "AgeVerificationSettings",
    "BrandingSettings",
    "DEFAULT_BRANDING",
]
