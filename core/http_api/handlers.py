"""
POS HTTP API - Framework-Agnostic Handlers
==========================================
Pure handler functions over contracts and injected dependencies.

Every handler returns an HttpApiResult; nothing here knows about
Django. Mutations are permission-checked against the store's
current user before they reach the store.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ai.insights.service import chat_about_business, sales_analysis_insights
from core.auth.service import sign_in, sign_out, verify_license
from core.http_api.contracts import (
    HttpApiResult,
    InsightsRequest,
    MutationRequest,
    ReportRequest,
    SignInRequest,
)
from core.http_api.errors import (
    ErrorCode,
    exception_result,
    fail,
    ok,
    permission_denied,
)
from core.permissions.constants import PERMISSION_REPORTS_VIEW
from core.permissions.registry import resolve_required_permission
from core.store.domain_store import DomainStore
from core.store.kinds import resolve_kind
from core.time.temporal import DateRange, resolve_timezone
from engines.reporting.registry import resolve_report, run_report

logger = logging.getLogger("pos.http")

_GENERIC_PREFIXES = ("ADD_", "UPDATE_", "DELETE_")


def _require_id(payload: dict[str, Any]) -> str:
    entity_id = payload.get("id")
    if not entity_id or not isinstance(entity_id, str):
        raise ValueError("payload.id must be a non-empty string.")
    return entity_id


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


def _guarded(action: Callable[[], HttpApiResult], *, context: str) -> HttpApiResult:
    try:
        return action()
    except Exception as exc:
        mapped = exception_result(exc)
        if mapped is None:
            raise
        logger.info(f"{context} rejected: {mapped.body['error']['code']}")
        return mapped


def _check_permission(store: DomainStore, permission: str | None) -> HttpApiResult | None:
    if permission is None:
        return None
    result = store.evaluate_permission(permission)
    if result.allowed:
        return None
    return permission_denied(permission, result)


def _report_range(dependencies, start: str | None, end: str | None) -> DateRange:
    tz = resolve_timezone(dependencies.settings.report_timezone)
    return DateRange(start=start or None, end=end or None, tz=tz)


# ══════════════════════════════════════════════════════════════
# MUTATION DISPATCH
# ══════════════════════════════════════════════════════════════

def _add_variable_product(store: DomainStore, payload: dict[str, Any]):
    parent, variants = store.add_variable_product(
        payload["parent"], payload.get("variants") or ()
    )
    return {"parent": parent.to_dict(), "variants": [v.to_dict() for v in variants]}


_SPECIAL_ACTIONS: dict[str, Callable[[DomainStore, dict[str, Any]], Any]] = {
    "ADD_SALE": lambda store, p: store.add_sale(p),
    "VOID_SALE": lambda store, p: store.void_sale(_require_id(p)),
    "SET_SALE_EMAIL": lambda store, p: store.set_sale_email(_require_id(p), p["email"]),
    "ADD_VARIABLE_PRODUCT": _add_variable_product,
    "ADD_STOCK_ADJUSTMENT": lambda store, p: store.add_stock_adjustment(p),
    "UPDATE_PRODUCT_PRICES": lambda store, p: store.update_product_prices(p["updates"]),
    "SET_TRANSFER_REQUEST_STATUS": lambda store, p: store.set_transfer_request_status(
        _require_id(p), p["status"]
    ),
    "ADD_CUSTOMER_REQUEST": lambda store, p: store.add_customer_request(
        p["text"], p.get("cashier_id")
    ),
    "UPDATE_BRANDING": lambda store, p: store.update_branding(p),
    "RESET_BRANDING": lambda store, p: store.reset_branding(),
    "UPDATE_AGE_VERIFICATION": lambda store, p: store.update_age_verification(
        p["settings"], p.get("restricted_product_ids") or ()
    ),
}


def _resolve_action(action_type: str) -> Callable[[DomainStore, dict[str, Any]], Any] | None:
    special = _SPECIAL_ACTIONS.get(action_type)
    if special is not None:
        return special
    for prefix in _GENERIC_PREFIXES:
        if not action_type.startswith(prefix):
            continue
        try:
            kind = resolve_kind(action_type[len(prefix):])
        except ValueError:
            return None
        if prefix == "ADD_":
            return lambda store, p: store.add_entity(kind, p)
        if prefix == "UPDATE_":
            return lambda store, p: store.update_entity(kind, _require_id(p), p)
        return lambda store, p: store.delete_entity(kind, _require_id(p))
    return None


# ══════════════════════════════════════════════════════════════
# APP DATA
# ══════════════════════════════════════════════════════════════

def get_app_data(dependencies) -> HttpApiResult:
    return ok(dependencies.store.snapshot())


def post_app_data(request: MutationRequest, dependencies) -> HttpApiResult:
    """
    Apply one {type, payload} mutation.

    DELETE_* answers with the deleted id; everything else answers
    with the record(s) the store returned.
    """
    store = dependencies.store
    action = _resolve_action(request.type)
    if action is None:
        return fail(400, ErrorCode.UNKNOWN_ACTION, f"Unknown action type '{request.type}'.")

    denied = _check_permission(store, resolve_required_permission(request.type))
    if denied is not None:
        logger.warning(
            f"Denied {request.type} for user {store.current_user.id if store.current_user else None}"
        )
        return denied

    def _apply() -> HttpApiResult:
        result = action(store, request.payload)
        if request.type.startswith("DELETE_"):
            return ok({"id": request.payload["id"]})
        status = 201 if request.type.startswith("ADD_") else 200
        return ok(_serialize(result), status=status)

    return _guarded(_apply, context=request.type)


# ══════════════════════════════════════════════════════════════
# REPORTS
# ══════════════════════════════════════════════════════════════

def get_report(request: ReportRequest, dependencies) -> HttpApiResult:
    store = dependencies.store
    if resolve_report(request.name) is None:
        return fail(404, ErrorCode.UNKNOWN_REPORT, f"Unknown report '{request.name}'.")

    denied = _check_permission(store, PERMISSION_REPORTS_VIEW)
    if denied is not None:
        return denied

    def _run() -> HttpApiResult:
        date_range = _report_range(dependencies, request.start, request.end)
        data = run_report(request.name, store, date_range, request.params)
        data["range"] = date_range.to_dict()
        return ok(data)

    return _guarded(_run, context=f"report {request.name}")


# ══════════════════════════════════════════════════════════════
# INSIGHTS
# ══════════════════════════════════════════════════════════════

def post_sales_insights(request: InsightsRequest, dependencies) -> HttpApiResult:
    denied = _check_permission(dependencies.store, PERMISSION_REPORTS_VIEW)
    if denied is not None:
        return denied

    def _run() -> HttpApiResult:
        date_range = _report_range(dependencies, request.start, request.end)
        text = sales_analysis_insights(
            dependencies.store, dependencies.insights_client, date_range
        )
        return ok({"text": text})

    return _guarded(_run, context="sales insights")


def post_chat(request: InsightsRequest, dependencies) -> HttpApiResult:
    if not request.message:
        return fail(400, ErrorCode.INVALID_REQUEST, "Message is required")

    def _run() -> HttpApiResult:
        text = chat_about_business(
            dependencies.store,
            dependencies.insights_client,
            request.history,
            request.message,
        )
        return ok({"text": text})

    return _guarded(_run, context="chat")


# ══════════════════════════════════════════════════════════════
# SESSION
# ══════════════════════════════════════════════════════════════

def post_sign_in(request: SignInRequest, dependencies) -> HttpApiResult:
    def _run() -> HttpApiResult:
        user = sign_in(dependencies.store, request.email)
        return ok({"user": user.to_dict()})

    return _guarded(_run, context="sign-in")


def post_sign_out(dependencies) -> HttpApiResult:
    sign_out(dependencies.store)
    return ok({"user": None})


def get_session(dependencies) -> HttpApiResult:
    store = dependencies.store
    user = store.current_user
    role = store.find_role(user.role_id) if user else None
    return ok({
        "user": user.to_dict() if user else None,
        "permissions": sorted(role.permissions) if role else [],
    })


def post_verify_license(body: dict[str, Any]) -> HttpApiResult:
    def _run() -> HttpApiResult:
        verify_license(body.get("key"))
        return ok({"valid": True})

    return _guarded(_run, context="license")
