"""
POS Insights — HTTP Client
============================
Blocking client for the external text-generation service.

    generate: POST {prompt}                                  → {text}
    chat:     POST {history, message, salesSummary,
                    productsSummary}                         → {text}

Any non-2xx status, transport failure or body without "text"
raises ExternalServiceError. No retries.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from ai.insights.errors import ExternalServiceError
from ai.insights.payloads import normalize_history
from core.config.settings import (
    DEFAULT_CHAT_URL,
    DEFAULT_INSIGHTS_TIMEOUT,
    DEFAULT_INSIGHTS_URL,
    AppSettings,
)

logger = logging.getLogger("pos.insights")


class InsightsClient:
    def __init__(
        self,
        insights_url: str = DEFAULT_INSIGHTS_URL,
        chat_url: str = DEFAULT_CHAT_URL,
        timeout: float = DEFAULT_INSIGHTS_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.insights_url = insights_url
        self.chat_url = chat_url
        self.timeout = timeout
        self._http = session if session is not None else requests

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "InsightsClient":
        return cls(
            insights_url=settings.insights_url,
            chat_url=settings.chat_url,
            timeout=settings.insights_timeout,
        )

    # ── Calls ─────────────────────────────────────────────────

    def generate(self, prompt: str) -> str:
        if not prompt:
            raise ValueError("Prompt is required")
        return self._post(self.insights_url, {"prompt": prompt})

    def chat(
        self,
        history: Optional[Sequence[Any]],
        message: str,
        sales_summary: Optional[List[Dict[str, Any]]] = None,
        products_summary: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        if not message:
            raise ValueError("Message is required")
        payload = {
            "history": normalize_history(history),
            "message": message,
            "salesSummary": sales_summary or [],
            "productsSummary": products_summary or [],
        }
        return self._post(self.chat_url, payload)

    # ── Transport ─────────────────────────────────────────────

    def _post(self, url: str, payload: Dict[str, Any]) -> str:
        try:
            response = self._http.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            logger.error(f"Insights request to {url} timed out after {self.timeout}s")
            raise ExternalServiceError("Connection timeout") from exc
        except requests.exceptions.RequestException as exc:
            logger.error(f"Insights request to {url} failed: {exc}")
            raise ExternalServiceError(f"Could not reach insights service: {exc}") from exc

        body = self._json_body(response)

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            message = body.get("error") or f"Service returned status {response.status_code}"
            logger.error(f"Insights service error {response.status_code}: {message}")
            raise ExternalServiceError(message, status_code=response.status_code) from exc

        text = body.get("text")
        if not isinstance(text, str):
            logger.error(f"Insights response from {url} has no text field")
            raise ExternalServiceError(
                "Insights service returned no text.",
                status_code=response.status_code,
            )
        return text

    @staticmethod
    def _json_body(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
