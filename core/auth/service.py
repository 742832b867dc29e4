"""
POS Auth - Demo Session Service
===============================
The back office runs with a fabricated session: signing in picks a
seeded user by email and makes it the store's current user. Account
lifecycle flows (sign-up, password reset) are not available in demo
mode and raise NotImplementedError.
"""

from __future__ import annotations

import logging
from typing import Any

from core.entities.access import User
from core.store.domain_store import DomainStore
from core.store.errors import EntityNotFoundError
from core.store.kinds import EntityKind

logger = logging.getLogger("pos.auth")

VALID_LICENSE_KEY = "VALID-LICENSE-KEY"
DEMO_NOT_IMPLEMENTED = "Not implemented for demo"


class InvalidLicenseError(ValueError):
    def __init__(self, message: str = "Invalid license key"):
        self.message = message
        super().__init__(message)


def _ensure_string(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return stripped


def sign_in(store: DomainStore, email: str) -> User:
    normalized = _ensure_string(email, field_name="email").lower()
    for user in store.list(EntityKind.USER):
        if user.email.lower() == normalized:
            store.set_current_user(user.id)
            logger.info(f"Signed in {user.id}")
            return user
    raise EntityNotFoundError(EntityKind.USER.value, normalized)


def sign_out(store: DomainStore) -> None:
    store.set_current_user(None)


def sign_up(*args, **kwargs) -> None:
    raise NotImplementedError(DEMO_NOT_IMPLEMENTED)


def reset_password_for_email(*args, **kwargs) -> None:
    raise NotImplementedError(DEMO_NOT_IMPLEMENTED)


def update_user_password(*args, **kwargs) -> None:
    raise NotImplementedError(DEMO_NOT_IMPLEMENTED)


def verify_license(key: str) -> None:
    """Accept only the demo license key (case-insensitive)."""
    if not isinstance(key, str) or key.strip().upper() != VALID_LICENSE_KEY:
        raise InvalidLicenseError()
