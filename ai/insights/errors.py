"""
POS Insights — Errors
=======================
"""

from __future__ import annotations

from typing import Optional


class ExternalServiceError(Exception):
    """
    The insights or chat service could not produce an answer.

    status_code is the HTTP status when the service responded,
    None when the request never completed.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)
