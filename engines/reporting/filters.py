"""
POS Reporting — Record Filters
================================
Date-window and status filters applied before any aggregation.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple, TypeVar

from core.entities import Record, Sale
from core.store.kinds import EntityKind
from core.time.temporal import DateRange

R = TypeVar("R", bound=Record)


class ReportSource(Protocol):
    """Anything that lists a collection by kind. DomainStore satisfies it."""

    def list(self, kind: EntityKind) -> Tuple[Record, ...]:
        ...  # pragma: no cover


def within(
    records: Iterable[R],
    date_range: Optional[DateRange],
    field_name: str = "date",
) -> Tuple[R, ...]:
    """Records whose `field_name` falls inside the inclusive window."""
    if date_range is None or date_range.is_unbounded:
        return tuple(records)
    return tuple(r for r in records if date_range.contains(getattr(r, field_name)))


def completed(sales: Iterable[Sale]) -> Tuple[Sale, ...]:
    return tuple(s for s in sales if s.is_completed)


def completed_sales(
    source: ReportSource,
    date_range: Optional[DateRange] = None,
) -> Tuple[Sale, ...]:
    return completed(within(source.list(EntityKind.SALE), date_range))
