"""
POS Core Config — Business Settings
=====================================
Settings an administrator edits from the back office. They are held
by the DomainStore alongside the entity collections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.entities.base import Record


@dataclass(frozen=True)
class BrandingSettings(Record):
    """Receipt and header branding."""

    business_name: str = ""
    logo_url: str = ""
    address: str = ""
    phone: str = ""
    website: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.business_name:
            raise ValueError("business_name must be non-empty.")


DEFAULT_BRANDING = BrandingSettings(
    business_name="TranscendPOS",
    logo_url="",
    address="123 Business Rd, Suite 456, City, Country",
    phone="+1 (555) 123-4567",
    website="www.transcendpos.com",
)


@dataclass(frozen=True)
class AgeVerificationSettings(Record):
    """Checkout age gate for age-restricted products."""

    minimum_age: int = 21
    is_id_scanning_enabled: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.minimum_age, bool) or not isinstance(self.minimum_age, int):
            raise ValueError("minimum_age must be an integer.")
        if self.minimum_age < 0:
            raise ValueError("minimum_age cannot be negative.")
