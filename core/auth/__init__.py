"""
POS Auth - Public API
=====================
"""

from core.auth.service import (
    InvalidLicenseError,
    reset_password_for_email,
    sign_in,
    sign_out,
    sign_up,
    update_user_password,
    verify_license,
)

__all__ = [
    "InvalidLicenseError",
    "sign_in",
    "sign_out",
    "sign_up",
    "reset_password_for_email",
    "update_user_password",
    "verify_license",
]
