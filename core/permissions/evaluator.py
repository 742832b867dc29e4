"""
POS Permissions - Permission Evaluator
======================================
Resolution order:

    no user id          → deny NO_CURRENT_USER
    user not found      → deny USER_NOT_FOUND
    role not found      → deny ROLE_NOT_FOUND
    role is admin role  → allow (listed permissions are ignored)
    permission in role  → allow
    otherwise           → deny PERMISSION_MISSING

An admin role with an empty permission list still passes every check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.permissions.constants import ADMIN_ROLE_ID, PermissionDenialCode
from core.permissions.provider import PermissionProvider

logger = logging.getLogger("pos.permissions")


@dataclass(frozen=True)
class PermissionEvaluationResult:
    allowed: bool
    rejection_code: Optional[str] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.allowed


class PermissionEvaluator:
    def __init__(self, admin_role_id: str = ADMIN_ROLE_ID):
        if not admin_role_id:
            raise ValueError("admin_role_id must be non-empty.")
        self._admin_role_id = admin_role_id

    @property
    def admin_role_id(self) -> str:
        return self._admin_role_id

    @staticmethod
    def _allow() -> PermissionEvaluationResult:
        return PermissionEvaluationResult(allowed=True)

    @staticmethod
    def _deny(code: str, message: str) -> PermissionEvaluationResult:
        logger.debug(f"Permission denied ({code}): {message}")
        return PermissionEvaluationResult(
            allowed=False,
            rejection_code=code,
            message=message,
        )

    def evaluate(
        self,
        permission: str,
        user_id: Optional[str],
        provider: PermissionProvider,
    ) -> PermissionEvaluationResult:
        if not user_id:
            return self._deny(
                PermissionDenialCode.NO_CURRENT_USER,
                "No user is signed in.",
            )

        user = provider.find_user(user_id)
        if user is None:
            return self._deny(
                PermissionDenialCode.USER_NOT_FOUND,
                f"User '{user_id}' does not exist.",
            )

        role = provider.find_role(user.role_id)
        if role is None:
            return self._deny(
                PermissionDenialCode.ROLE_NOT_FOUND,
                f"Role '{user.role_id}' for user '{user_id}' does not exist.",
            )

        if role.id == self._admin_role_id:
            return self._allow()

        if role.grants(permission):
            return self._allow()

        return self._deny(
            PermissionDenialCode.PERMISSION_MISSING,
            f"User '{user_id}' is missing permission '{permission}'.",
        )
