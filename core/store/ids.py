"""
POS Domain Store — Id Providers
=================================
Ids only have to be unique. Production uses UUID4 hex; tests inject
a SequentialIdProvider to get predictable ids.
"""

from __future__ import annotations

import uuid
from typing import Dict, Protocol


class IdProvider(Protocol):
    def next_id(self, prefix: str) -> str:
        ...  # pragma: no cover


class UuidIdProvider:
    def next_id(self, prefix: str) -> str:
        return f"{prefix}{uuid.uuid4().hex}"


class SequentialIdProvider:
    """
    Per-prefix counters: PROD-0001, PROD-0002, SALE-0001, ...
    """

    def __init__(self, width: int = 4):
        self._width = width
        self._counters: Dict[str, int] = {}

    def next_id(self, prefix: str) -> str:
        n = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = n
        return f"{prefix}{n:0{self._width}d}"
