"""
Tests for core.http_api — handler status codes and envelopes.
"""

import pytest

from ai.insights.errors import ExternalServiceError
from ai.insights.payloads import NO_SALES_MESSAGE
from core.config.settings import AppSettings
from core.http_api import (
    HttpApiDependencies,
    InsightsRequest,
    MutationRequest,
    ReportRequest,
    SignInRequest,
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
from core.store.seed import build_demo_store


class FakeInsightsClient:
    def __init__(self, text="Sales look healthy.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate(self, prompt):
        self.calls.append(("generate", prompt))
        if self.error:
            raise self.error
        return self.text

    def chat(self, history, message, sales_summary=None, products_summary=None):
        self.calls.append(("chat", message))
        if self.error:
            raise self.error
        return self.text


def _deps(user_id="USER001", client=None) -> HttpApiDependencies:
    return HttpApiDependencies(
        store=build_demo_store(current_user_id=user_id),
        settings=AppSettings(report_timezone="UTC"),
        insights_client=client or FakeInsightsClient(),
    )


def _post(deps, action_type, payload=None):
    return post_app_data(MutationRequest(type=action_type, payload=payload or {}), deps)


def _error_code(result):
    assert result.body["ok"] is False
    return result.body["error"]["code"]


# ── App Data ─────────────────────────────────────────────────

class TestAppData:
    def test_snapshot(self):
        result = get_app_data(_deps())
        assert result.status == 200
        assert result.body["ok"] is True
        assert len(result.body["data"]["products"]) == 13
        assert result.body["data"]["current_user_id"] == "USER001"

    def test_add_sale_created(self):
        deps = _deps()
        result = _post(deps, "ADD_SALE", {
            "customer": {"id": "CUST003", "name": "Walk-in Customer"},
            "items": [{"product_id": "PROD002", "name": "Latte",
                       "quantity": 2, "price": 3.5}],
            "payments": [{"method_id": "pay_cash", "amount": 7}],
        })
        assert result.status == 201
        assert result.body["data"]["total"] == pytest.approx(7.0)
        assert deps.store.get("products", "PROD002").stock == 78

    def test_generic_update(self):
        deps = _deps()
        brand = deps.store.get("brands", "B01").to_dict()
        brand["name"] = "Morning Glory"
        result = _post(deps, "UPDATE_BRAND", brand)
        assert result.status == 200
        assert result.body["data"]["name"] == "Morning Glory"

    def test_delete_answers_with_id(self):
        result = _post(_deps(), "DELETE_PAYMENT_METHOD", {"id": "pay_stripe"})
        assert result.status == 200
        assert result.body["data"] == {"id": "pay_stripe"}

    def test_unknown_action(self):
        result = _post(_deps(), "LAUNCH_ROCKET")
        assert result.status == 400
        assert _error_code(result) == "UNKNOWN_ACTION"


# ── Error Mapping ────────────────────────────────────────────

class TestMutationErrors:
    def test_integrity_conflict(self):
        result = _post(_deps(), "DELETE_CATEGORY", {"id": "C01"})
        assert result.status == 409
        assert _error_code(result) == "CATEGORY_IN_USE"
        assert result.body["error"]["details"] == {"kind": "category", "id": "C01"}

    def test_self_deletion(self):
        result = _post(_deps(), "DELETE_USER", {"id": "USER001"})
        assert result.status == 409
        assert _error_code(result) == "SELF_DELETION"

    def test_sales_are_not_deletable(self):
        result = _post(_deps(), "DELETE_SALE", {"id": "SALE001"})
        assert result.status == 409
        assert _error_code(result) == "IMMUTABLE_RECORD"

    def test_missing_record(self):
        result = _post(_deps(), "VOID_SALE", {"id": "SALE999"})
        assert result.status == 404
        assert _error_code(result) == "NOT_FOUND"

    def test_missing_id(self):
        result = _post(_deps(), "UPDATE_BRAND", {"name": "No Id"})
        assert result.status == 400
        assert _error_code(result) == "INVALID_REQUEST"

    def test_missing_payload_field(self):
        result = _post(_deps(), "UPDATE_PRODUCT_PRICES", {})
        assert result.status == 400
        assert result.body["error"]["message"] == "updates is required."

    def test_cashier_cannot_void(self):
        deps = _deps(user_id="USER003")
        result = _post(deps, "VOID_SALE", {"id": "SALE001"})
        assert result.status == 403
        assert result.body["error"]["details"] == {
            "permission": "pos:void_sale",
            "rejection_code": "PERMISSION_MISSING",
        }
        assert deps.store.get("sales", "SALE001").is_completed

    def test_signed_out_is_denied(self):
        result = _post(_deps(user_id=None), "ADD_BRAND", {"name": "New"})
        assert result.status == 403
        assert result.body["error"]["details"]["rejection_code"] == "NO_CURRENT_USER"


# ── Reports ──────────────────────────────────────────────────

class TestReports:
    def test_purchase_sale_for_one_day(self):
        result = get_report(
            ReportRequest(name="purchase-sale", start="2023-10-27", end="2023-10-27"),
            _deps(),
        )
        assert result.status == 200
        data = result.body["data"]
        assert data["gross_sales"] == pytest.approx(19.25)
        assert data["gross_purchases"] == 0
        assert data["range"] == {"start": "2023-10-27", "end": "2023-10-27"}

    def test_params_forwarded(self):
        result = get_report(
            ReportRequest(name="stock", params={"category_id": "C02"}), _deps()
        )
        assert [r["product_id"] for r in result.body["data"]["rows"]] == [
            "PROD004", "PROD005",
        ]

    def test_unknown_report(self):
        result = get_report(ReportRequest(name="weather"), _deps())
        assert result.status == 404
        assert _error_code(result) == "UNKNOWN_REPORT"

    def test_unknown_param(self):
        result = get_report(ReportRequest(name="tax", params={"color": "red"}), _deps())
        assert result.status == 400

    def test_inverted_range(self):
        result = get_report(
            ReportRequest(name="tax", start="2023-10-28", end="2023-10-27"), _deps()
        )
        assert result.status == 400

    def test_cashier_denied(self):
        result = get_report(ReportRequest(name="dashboard"), _deps(user_id="USER003"))
        assert result.status == 403


# ── Insights ─────────────────────────────────────────────────

class TestInsights:
    def test_sales_analysis(self):
        client = FakeInsightsClient(text="## Summary")
        result = post_sales_insights(
            InsightsRequest(start="2023-10-27", end="2023-10-27"), _deps(client=client)
        )
        assert result.status == 200
        assert result.body["data"] == {"text": "## Summary"}
        assert client.calls[0][0] == "generate"

    def test_empty_window_skips_service(self):
        client = FakeInsightsClient()
        result = post_sales_insights(
            InsightsRequest(start="2020-01-01", end="2020-01-31"), _deps(client=client)
        )
        assert result.body["data"] == {"text": NO_SALES_MESSAGE}
        assert client.calls == []

    def test_service_failure(self):
        client = FakeInsightsClient(error=ExternalServiceError("Connection timeout"))
        result = post_chat(InsightsRequest(message="How are sales?"), _deps(client=client))
        assert result.status == 502
        assert result.body["error"]["message"] == "Connection timeout"

    def test_chat_requires_message(self):
        result = post_chat(InsightsRequest(message=""), _deps())
        assert result.status == 400


# ── Session ──────────────────────────────────────────────────

class TestSession:
    def test_sign_in_switches_user(self):
        deps = _deps(user_id=None)
        result = post_sign_in(SignInRequest(email="casey.cashier@example.com"), deps)
        assert result.status == 200
        assert result.body["data"]["user"]["id"] == "USER003"

        session = get_session(deps).body["data"]
        assert session["user"]["id"] == "USER003"
        assert "sell:pos" in session["permissions"]
        assert session["permissions"] == sorted(session["permissions"])

    def test_sign_in_unknown_email(self):
        result = post_sign_in(SignInRequest(email="ghost@example.com"), _deps())
        assert result.status == 404

    def test_sign_out(self):
        deps = _deps()
        assert post_sign_out(deps).body["data"] == {"user": None}
        assert get_session(deps).body["data"] == {"user": None, "permissions": []}

    def test_license(self):
        assert post_verify_license({"key": "VALID-LICENSE-KEY"}).status == 200
        result = post_verify_license({"key": "nope"})
        assert result.status == 400
        assert result.body["error"]["message"] == "Invalid license key"
