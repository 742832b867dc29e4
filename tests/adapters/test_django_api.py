"""
Tests for adapters.django_api — routing, JSON parsing and wiring.
"""

import json

import pytest

from adapters.django_api import build_dependencies, reset_dependencies


@pytest.fixture(autouse=True)
def fresh_store(settings):
    settings.POS_REPORT_TIMEZONE = "UTC"
    settings.POS_INSIGHTS_URL = "http://insights.test/generate"
    reset_dependencies()
    yield
    reset_dependencies()


def _post(client, url, body):
    return client.post(url, data=json.dumps(body), content_type="application/json")


# ── Wiring ───────────────────────────────────────────────────

class TestWiring:
    def test_singleton(self):
        assert build_dependencies() is build_dependencies()

    def test_reads_django_settings(self):
        deps = build_dependencies()
        assert deps.settings.report_timezone == "UTC"
        assert deps.insights_client.insights_url == "http://insights.test/generate"
        assert deps.store.current_user.id == "USER001"

    def test_reset_reseeds(self):
        first = build_dependencies()
        reset_dependencies()
        assert build_dependencies() is not first


# ── App Data ─────────────────────────────────────────────────

class TestAppDataView:
    def test_get(self, client):
        response = client.get("/v1/app-data")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert [s["id"] for s in body["data"]["sales"]] == [
            "SALE001", "SALE002", "SALE003", "SALE004",
        ]

    def test_post_mutation(self, client):
        response = _post(client, "/v1/app-data", {
            "type": "ADD_EXPENSE",
            "payload": {"category_id": "EC04", "amount": 75, "description": "Flyers"},
        })
        assert response.status_code == 201
        expense = response.json()["data"]
        assert expense["category_id"] == "EC04"
        assert len(client.get("/v1/app-data").json()["data"]["expenses"]) == 4

    def test_void(self, client):
        response = _post(client, "/v1/app-data", {"type": "VOID_SALE", "payload": {"id": "SALE002"}})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "voided"

    def test_conflict(self, client):
        response = _post(client, "/v1/app-data", {"type": "DELETE_ROLE", "payload": {"id": "cashier"}})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ROLE_IN_USE"

    def test_invalid_json(self, client):
        response = client.post("/v1/app-data", data="{not json", content_type="application/json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_missing_type(self, client):
        response = _post(client, "/v1/app-data", {"payload": {}})
        assert response.status_code == 400

    def test_method_not_allowed(self, client):
        assert client.delete("/v1/app-data").status_code == 405


# ── Reports ──────────────────────────────────────────────────

class TestReportView:
    def test_query_params(self, client):
        response = client.get("/v1/reports/stock", {"category_id": "C03", "sort_by": "stock"})
        assert response.status_code == 200
        rows = response.json()["data"]["rows"]
        assert [r["product_id"] for r in rows] == ["PROD006", "PROD007"]

    def test_date_window(self, client):
        response = client.get("/v1/reports/tax", {"start": "2023-10-27", "end": "2023-10-27"})
        data = response.json()["data"]
        assert data["output_tax"] == pytest.approx(0.425)
        assert data["input_tax"] == 0
        assert data["range"] == {"start": "2023-10-27", "end": "2023-10-27"}

    def test_unknown_report(self, client):
        assert client.get("/v1/reports/weather").status_code == 404

    def test_bad_date(self, client):
        assert client.get("/v1/reports/tax", {"start": "yesterday"}).status_code == 400


# ── Session ──────────────────────────────────────────────────

class TestSessionViews:
    def test_sign_in_then_denied(self, client):
        response = _post(client, "/v1/auth/sign-in", {"email": "casey.cashier@example.com"})
        assert response.status_code == 200

        session = client.get("/v1/auth/session").json()["data"]
        assert session["user"]["role_id"] == "cashier"

        response = client.get("/v1/reports/dashboard")
        assert response.status_code == 403

    def test_sign_in_requires_email(self, client):
        assert _post(client, "/v1/auth/sign-in", {}).status_code == 400

    def test_sign_out(self, client):
        response = client.post("/v1/auth/sign-out")
        assert response.json()["data"] == {"user": None}
        assert build_dependencies().store.current_user is None

    def test_verify_license(self, client):
        assert _post(client, "/v1/auth/verify-license", {"key": "valid-license-key"}).status_code == 200
        assert _post(client, "/v1/auth/verify-license", {"key": "x"}).status_code == 400


# ── Insights ─────────────────────────────────────────────────

class TestInsightsViews:
    def test_no_sales_in_window(self, client):
        response = _post(client, "/v1/insights/sales-analysis", {
            "start": "2020-01-01", "end": "2020-01-02",
        })
        assert response.status_code == 200
        assert response.json()["data"]["text"].startswith("There is no sales data")

    def test_chat_history_must_be_list(self, client):
        response = _post(client, "/v1/insights/chat", {"message": "Hi", "history": "nope"})
        assert response.status_code == 400

    def test_chat_forwards_to_service(self, client, monkeypatch):
        import requests

        class _Response:
            status_code = 200

            def json(self):
                return {"text": "Restock salad."}

            def raise_for_status(self):
                return None

        monkeypatch.setattr(requests, "post", lambda url, json=None, timeout=None: _Response())
        response = _post(client, "/v1/insights/chat", {"message": "What should I reorder?"})
        assert response.status_code == 200
        assert response.json()["data"] == {"text": "Restock salad."}
