"""
POS HTTP API - Error Mapping
============================
Stable transport error mapping for store, permission and service failures.

    integrity / self-deletion /
    immutable / bad transition   → 409
    not found                    → 404
    invalid input                → 400
    permission denied            → 403
    insights service failure     → 502
    demo-disabled flow           → 501
"""

from __future__ import annotations

from typing import Any, Optional

from ai.insights.errors import ExternalServiceError
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse, HttpApiResult
from core.permissions.evaluator import PermissionEvaluationResult
from core.store.errors import (
    EntityNotFoundError,
    ImmutableRecordError,
    InvalidTransitionError,
    ReferentialIntegrityError,
    SelfDeletionError,
)


class ErrorCode:
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    UNKNOWN_REPORT = "UNKNOWN_REPORT"
    NOT_FOUND = "NOT_FOUND"
    SELF_DELETION = "SELF_DELETION"
    IMMUTABLE_RECORD = "IMMUTABLE_RECORD"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def ok(data: Any, status: int = 200) -> HttpApiResult:
    return HttpApiResult(status=status, body=success_response(data))


def fail(
    status: int,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> HttpApiResult:
    return HttpApiResult(
        status=status,
        body=error_response(code=code, message=message, details=details),
    )


def permission_denied(
    permission: str,
    result: PermissionEvaluationResult,
) -> HttpApiResult:
    return fail(
        403,
        ErrorCode.PERMISSION_DENIED,
        result.message or "Permission denied.",
        details={
            "permission": permission,
            "rejection_code": result.rejection_code,
        },
    )


def exception_result(exc: Exception) -> Optional[HttpApiResult]:
    """
    Map a known failure to its HTTP result.

    Returns None for exceptions this layer does not own, so the
    caller re-raises them.
    """
    if isinstance(exc, ReferentialIntegrityError):
        return fail(409, exc.code, exc.message, {"kind": exc.kind, "id": exc.entity_id})
    if isinstance(exc, SelfDeletionError):
        return fail(409, ErrorCode.SELF_DELETION, exc.message, {"id": exc.user_id})
    if isinstance(exc, ImmutableRecordError):
        return fail(409, ErrorCode.IMMUTABLE_RECORD, exc.message, {"kind": exc.kind})
    if isinstance(exc, InvalidTransitionError):
        return fail(
            409,
            ErrorCode.INVALID_TRANSITION,
            exc.message,
            {"kind": exc.kind, "id": exc.entity_id, "current": exc.current},
        )
    if isinstance(exc, EntityNotFoundError):
        return fail(404, ErrorCode.NOT_FOUND, exc.message, {"kind": exc.kind, "id": exc.entity_id})
    if isinstance(exc, ExternalServiceError):
        return fail(
            502,
            ErrorCode.EXTERNAL_SERVICE_ERROR,
            exc.message,
            {"status_code": exc.status_code},
        )
    if isinstance(exc, NotImplementedError):
        return fail(501, ErrorCode.NOT_IMPLEMENTED, str(exc))
    if isinstance(exc, KeyError):
        field_name = exc.args[0] if exc.args else ""
        return fail(400, ErrorCode.INVALID_REQUEST, f"{field_name} is required.")
    if isinstance(exc, ValueError):
        return fail(400, ErrorCode.INVALID_REQUEST, str(exc))
    return None
