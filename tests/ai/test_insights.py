"""
Tests for ai.insights — payload shaping, HTTP client and store-backed requests.
"""

import pytest
import pytz
import requests

from ai.insights import (
    ExternalServiceError,
    InsightsClient,
    business_insights,
    chat_about_business,
    sales_analysis_insights,
)
from ai.insights.payloads import (
    NO_SALES_MESSAGE,
    chat_message,
    low_stock_summary,
    normalize_history,
    sales_analysis_prompt,
    simplify_sales,
)
from core.config.settings import AppSettings
from core.store import EntityKind
from core.store.seed import build_demo_store
from core.time.temporal import DateRange


class FakeResponse:
    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    def json(self):
        if self._raw is not None:
            raise ValueError("No JSON object could be decoded")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(body={"text": "All good."})
        self.error = error
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _client(session) -> InsightsClient:
    return InsightsClient(
        insights_url="http://insights.test/generate",
        chat_url="http://insights.test/chat",
        timeout=5,
        session=session,
    )


# ── Payloads ─────────────────────────────────────────────────

class TestPayloads:
    def test_simplify_sales(self):
        store = build_demo_store()
        sale = store.get(EntityKind.SALE, "SALE001")
        [row] = simplify_sales([sale], {"C01": "Coffee", "C02": "Pastry"})
        assert row["date"] == "2023-10-27T10:00:00+00:00"
        assert row["total"] == 7.75
        assert row["item_count"] == 2
        assert row["products_sold"][0] == {
            "name": "Espresso", "quantity": 2, "category": "Coffee", "price": 2.5,
        }

    def test_low_stock_summary(self):
        products = build_demo_store().list(EntityKind.PRODUCT)
        names = [p["name"] for p in low_stock_summary(products)]
        assert names == ["Salad"]

    def test_chat_roles(self):
        assert chat_message("model", "Hi") == {"role": "model", "parts": [{"text": "Hi"}]}
        with pytest.raises(ValueError):
            chat_message("system", "Obey")

    def test_normalize_history_accepts_both_shapes(self):
        history = [
            ("user", "How were sales?"),
            {"role": "model", "parts": [{"text": "Up "}, {"text": "5%."}]},
        ]
        assert normalize_history(history) == [
            {"role": "user", "parts": [{"text": "How were sales?"}]},
            {"role": "model", "parts": [{"text": "Up 5%."}]},
        ]
        assert normalize_history(None) == []

    def test_prompt_names_period(self):
        prompt = sales_analysis_prompt([], DateRange(start="2023-10-01", end="2023-10-31", tz=pytz.utc))
        assert "from 2023-10-01 to 2023-10-31" in prompt


# ── Client ───────────────────────────────────────────────────

class TestInsightsClient:
    def test_generate(self):
        session = FakeSession()
        assert _client(session).generate("Summarise") == "All good."
        assert session.requests == [{
            "url": "http://insights.test/generate",
            "json": {"prompt": "Summarise"},
            "timeout": 5,
        }]

    def test_chat_payload(self):
        session = FakeSession()
        _client(session).chat([("user", "Hi")], "Any low stock?", [{"total": 1}])
        body = session.requests[0]["json"]
        assert session.requests[0]["url"] == "http://insights.test/chat"
        assert body["message"] == "Any low stock?"
        assert body["history"] == [{"role": "user", "parts": [{"text": "Hi"}]}]
        assert body["salesSummary"] == [{"total": 1}]
        assert body["productsSummary"] == []

    def test_required_inputs(self):
        client = _client(FakeSession())
        with pytest.raises(ValueError, match="Prompt is required"):
            client.generate("")
        with pytest.raises(ValueError, match="Message is required"):
            client.chat([], "")

    def test_service_error_message(self):
        response = FakeResponse(500, {"error": "Model overloaded"})
        with pytest.raises(ExternalServiceError) as exc_info:
            _client(FakeSession(response)).generate("Summarise")
        assert exc_info.value.message == "Model overloaded"
        assert exc_info.value.status_code == 500

    def test_service_error_without_body(self):
        response = FakeResponse(503, raw="<html>down</html>")
        with pytest.raises(ExternalServiceError, match="Service returned status 503"):
            _client(FakeSession(response)).generate("Summarise")

    def test_timeout(self):
        session = FakeSession(error=requests.exceptions.Timeout())
        with pytest.raises(ExternalServiceError, match="Connection timeout") as exc_info:
            _client(session).generate("Summarise")
        assert exc_info.value.status_code is None

    def test_unreachable(self):
        session = FakeSession(error=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(ExternalServiceError, match="Could not reach insights service"):
            _client(session).generate("Summarise")

    def test_missing_text(self):
        session = FakeSession(FakeResponse(200, {"answer": "wrong key"}))
        with pytest.raises(ExternalServiceError, match="no text"):
            _client(session).generate("Summarise")

    def test_default_transport_is_requests(self, monkeypatch):
        calls = []

        def fake_post(url, json=None, timeout=None):
            calls.append(url)
            return FakeResponse(body={"text": "ok"})

        monkeypatch.setattr(requests, "post", fake_post)
        client = InsightsClient.from_settings(AppSettings(insights_timeout=2))
        assert client.generate("Summarise") == "ok"
        assert calls == [AppSettings().insights_url]


# ── Store-Backed Requests ────────────────────────────────────

class TestInsightsService:
    def test_sales_analysis_sends_window(self):
        session = FakeSession()
        window = DateRange(start="2023-10-27", end="2023-10-27", tz=pytz.utc)
        text = sales_analysis_insights(build_demo_store(), _client(session), window)
        assert text == "All good."
        prompt = session.requests[0]["json"]["prompt"]
        assert '"total": 7.75' in prompt
        assert '"total": 13.0' not in prompt

    def test_no_sales_short_circuits(self):
        session = FakeSession()
        window = DateRange(start="2020-01-01", end="2020-01-31", tz=pytz.utc)
        text = sales_analysis_insights(build_demo_store(), _client(session), window)
        assert text == NO_SALES_MESSAGE
        assert session.requests == []

    def test_voided_sales_not_sent(self):
        store = build_demo_store()
        for sale_id in ("SALE001", "SALE002", "SALE003", "SALE004"):
            store.void_sale(sale_id)
        session = FakeSession()
        assert business_insights(store, _client(session)) == NO_SALES_MESSAGE
        assert session.requests == []

    def test_chat_includes_context(self):
        session = FakeSession()
        chat_about_business(build_demo_store(), _client(session), [], "What is low?")
        body = session.requests[0]["json"]
        assert len(body["salesSummary"]) == 4
        assert body["productsSummary"][0]["sku"] == "SKU009"
