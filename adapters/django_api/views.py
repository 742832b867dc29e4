"""
POS Django Adapter Views
========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    HttpApiResult,
    InsightsRequest,
    MutationRequest,
    ReportRequest,
    SignInRequest,
)
from core.http_api.errors import error_response
from core.http_api.handlers import (
    get_app_data,
    get_report,
    get_session,
    post_app_data,
    post_chat,
    post_sales_insights,
    post_sign_in,
    post_sign_out,
    post_verify_license,
)

_RANGE_PARAMS = ("start", "end")


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _respond(result: HttpApiResult) -> JsonResponse:
    return JsonResponse(result.body, status=result.status)


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def app_data_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _respond(get_app_data(build_dependencies()))
    if request.method != "POST":
        return _method_not_allowed()
    try:
        contract = MutationRequest.from_body(_parse_json_body(request))
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(post_app_data(contract, build_dependencies()))


@csrf_exempt
def report_view(request: HttpRequest, name: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    params = {
        key: value for key, value in request.GET.items()
        if key not in _RANGE_PARAMS
    }
    contract = ReportRequest(
        name=name,
        start=request.GET.get("start"),
        end=request.GET.get("end"),
        params=params,
    )
    return _respond(get_report(contract, build_dependencies()))


@csrf_exempt
def sales_insights_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        contract = InsightsRequest(start=body.get("start"), end=body.get("end"))
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(post_sales_insights(contract, build_dependencies()))


@csrf_exempt
def chat_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        history = body.get("history") or []
        if not isinstance(history, list):
            raise ValueError("history must be a list.")
        contract = InsightsRequest(message=body.get("message"), history=tuple(history))
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(post_chat(contract, build_dependencies()))


@csrf_exempt
def session_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _respond(get_session(build_dependencies()))


@csrf_exempt
def sign_in_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        contract = SignInRequest(email=_parse_json_body(request).get("email"))
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(post_sign_in(contract, build_dependencies()))


@csrf_exempt
def sign_out_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _respond(post_sign_out(build_dependencies()))


@csrf_exempt
def verify_license_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _respond(post_verify_license(body))
