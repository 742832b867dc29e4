"""
POS Core Time — Injectable Clock
==================================
Store mutations stamp records with a creation time. That time comes
from an injected Clock so tests can pin it; nothing in the store or
the reports calls datetime.now() directly.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Wall-clock time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Pinned clock for tests and seeded demo data.

    Usage:
        clock = FixedClock(datetime(2023, 10, 27, 10, 0, tzinfo=timezone.utc))
        store = DomainStore(clock=clock)
        clock.advance(minutes=5)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, **delta) -> None:
        """Move the pinned time forward, e.g. advance(seconds=30)."""
        self._fixed_dt = self._fixed_dt + timedelta(**delta)

    def set(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt.astimezone(timezone.utc)
