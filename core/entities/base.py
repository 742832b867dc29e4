"""
POS Entities — Record Base
============================
Every stored entity is a frozen dataclass keyed by a string id.

Records round-trip to plain dicts for seeding and for the HTTP
adapter. Conversion is driven by the dataclass type hints:

    datetime          ↔ ISO-8601 string
    Enum              ↔ its value
    nested Record     ↔ dict
    Tuple[Record,...] ↔ list of dicts
    FrozenSet[str]    ↔ sorted list

Records never hold mutable containers, so a record handed out by
the store cannot be changed behind the store's back.
"""

from __future__ import annotations

import dataclasses
import typing
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Type, TypeVar

from core.time.temporal import ensure_aware, parse_timestamp

R = TypeVar("R", bound="Record")

_HINT_CACHE: Dict[type, Dict[str, Any]] = {}


def _type_hints(cls: type) -> Dict[str, Any]:
    hints = _HINT_CACHE.get(cls)
    if hints is None:
        hints = typing.get_type_hints(cls)
        _HINT_CACHE[cls] = hints
    return hints


def _coerce(hint: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Union:
        # Optional[X] → coerce as X
        inner = [a for a in args if a is not type(None)]
        return _coerce(inner[0], value) if len(inner) == 1 else value

    if origin is tuple:
        item_hint = args[0] if args else Any
        return tuple(_coerce(item_hint, item) for item in value)

    if origin is frozenset:
        return frozenset(value)

    if isinstance(hint, type):
        if issubclass(hint, Record):
            return value if isinstance(value, hint) else hint.from_dict(value)
        if issubclass(hint, Enum):
            return value if isinstance(value, hint) else hint(value)
        if hint is datetime:
            return ensure_aware(parse_timestamp(value))
        if hint is float and isinstance(value, (int, str)) and not isinstance(value, bool):
            return float(value)
        if hint is int and isinstance(value, str):
            return int(value)
        if hint is int and isinstance(value, float) and value.is_integer():
            return int(value)

    return value


def _serialize(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, tuple):
        return [_serialize(item) for item in value]
    return value


# ══════════════════════════════════════════════════════════════
# RECORD
# ══════════════════════════════════════════════════════════════

@dataclasses.dataclass(frozen=True)
class Record:
    """Base for all entity and value records."""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_dict(cls: Type[R], payload: Mapping[str, Any]) -> R:
        if not isinstance(payload, Mapping):
            raise ValueError(f"{cls.__name__} payload must be a mapping.")
        hints = _type_hints(cls)
        kwargs = {}
        for f in dataclasses.fields(cls):
            if f.name in payload:
                kwargs[f.name] = _coerce(hints[f.name], payload[f.name])
        try:
            return cls(**kwargs)
        except TypeError as exc:
            # missing required fields
            raise ValueError(f"{cls.__name__}: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            f.name: _serialize(getattr(self, f.name))
            for f in dataclasses.fields(self)
        }

    def replace(self: R, **changes: Any) -> R:
        return dataclasses.replace(self, **changes)


def require_id(value: Any, field_name: str = "id") -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")


def require_non_negative(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number.")
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative.")


def require_positive_int(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{field_name} must be positive integer.")
