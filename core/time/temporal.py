"""
POS Core Time — Report Date Windows
=====================================
Reports are bounded by calendar dates picked by a person, not by
timestamps. A DateRange turns those dates into an inclusive local
window:

    start → 00:00:00.000 local on the start date
    end   → 23:59:59.999 local on the end date

A missing bound leaves that side open; a range with neither bound
matches every record.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional, Union

import pytz

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve a timezone name ("Africa/Blantyre", "UTC") to a tzinfo.

    None or "" resolves to None, the host's local zone. The host offset
    is looked up per datetime by localize(), so DST changes are honoured.
    """
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise ValueError(f"Unknown timezone '{name}'.") from exc


def localize(naive: datetime, zone: Optional[tzinfo]) -> datetime:
    """Attach a zone to a naive datetime (pytz zones need localize())."""
    if zone is None:
        return naive.astimezone()
    if hasattr(zone, "localize"):
        return zone.localize(naive)
    return naive.replace(tzinfo=zone)


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp ('Z' suffix accepted)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        raise ValueError("timestamp must be a non-empty ISO-8601 string.")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def ensure_aware(moment: datetime, zone: tzinfo = timezone.utc) -> datetime:
    """Naive datetimes are read as `zone` (UTC unless given)."""
    if moment.tzinfo is None:
        return localize(moment, zone)
    return moment


def parse_calendar_date(value: Union[str, date, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# ══════════════════════════════════════════════════════════════
# DATE RANGE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar-date window evaluated in a single timezone.

    tz None means the host's local zone. Moments are compared at
    millisecond precision, matching the END_OF_DAY bound.
    """

    start: Optional[date] = None
    end: Optional[date] = None
    tz: Optional[tzinfo] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", parse_calendar_date(self.start))
        object.__setattr__(self, "end", parse_calendar_date(self.end))
        if self.start and self.end and self.start > self.end:
            raise ValueError(
                f"DateRange start ({self.start}) must be <= end ({self.end})."
            )

    @classmethod
    def unbounded(cls, tz: Optional[tzinfo] = None) -> "DateRange":
        return cls(start=None, end=None, tz=tz)

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    @property
    def lower(self) -> Optional[datetime]:
        if self.start is None:
            return None
        return localize(datetime.combine(self.start, START_OF_DAY), self.tz)

    @property
    def upper(self) -> Optional[datetime]:
        if self.end is None:
            return None
        return localize(datetime.combine(self.end, END_OF_DAY), self.tz)

    def contains(self, value: Union[str, datetime]) -> bool:
        if self.is_unbounded:
            return True
        moment = parse_timestamp(value)
        if moment.tzinfo is None:
            moment = localize(moment, self.tz)
        moment = moment.replace(microsecond=moment.microsecond // 1000 * 1000)
        lower = self.lower
        if lower is not None and moment < lower:
            return False
        upper = self.upper
        if upper is not None and moment > upper:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }
