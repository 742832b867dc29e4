"""
POS HTTP API - Contracts
========================
Framework-agnostic request/response DTOs for the back-office endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class MutationRequest:
    """A {type, payload} envelope posted to app-data."""

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.type or not isinstance(self.type, str):
            raise ValueError("type must be a non-empty string.")
        if not isinstance(self.payload, dict):
            raise ValueError("payload must be an object.")

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "MutationRequest":
        payload = body.get("payload")
        return cls(type=body.get("type"), payload={} if payload is None else payload)


@dataclass(frozen=True)
class ReportRequest:
    name: str
    start: Optional[str] = None
    end: Optional[str] = None
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")


@dataclass(frozen=True)
class SignInRequest:
    email: str

    def __post_init__(self):
        if not self.email or not isinstance(self.email, str):
            raise ValueError("email must be a non-empty string.")


@dataclass(frozen=True)
class InsightsRequest:
    """Either a sales-analysis request (start/end) or a chat turn."""

    start: Optional[str] = None
    end: Optional[str] = None
    message: Optional[str] = None
    history: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.history, tuple):
            raise ValueError("history must be a tuple.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}


@dataclass(frozen=True)
class HttpApiResult:
    """Handler output: HTTP status plus the JSON envelope."""

    status: int
    body: dict[str, Any]
