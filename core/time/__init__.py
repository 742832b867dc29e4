"""
POS Core Time — Public API
============================
Injectable clock for record timestamps and calendar-date report windows.
"""

from core.time.clock import Clock, FixedClock, SystemClock
from core.time.temporal import (
    DateRange,
    ensure_aware,
    localize,
    parse_calendar_date,
    parse_timestamp,
    resolve_timezone,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "DateRange",
    "ensure_aware",
    "localize",
    "parse_calendar_date",
    "parse_timestamp",
    "resolve_timezone",
]
