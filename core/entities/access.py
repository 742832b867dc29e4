"""
POS Entities — Access
=======================
Roles and users. A role's permissions are a flat set of strings
("products:view", "pos:void_sale", ...); see core.permissions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from core.entities.base import Record, require_id


@dataclass(frozen=True)
class Role(Record):
    id: str
    name: str
    description: str = ""
    permissions: FrozenSet[str] = frozenset()

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")
        if not isinstance(self.permissions, frozenset):
            raise ValueError("permissions must be a frozenset.")

    def grants(self, permission: str) -> bool:
        return permission in self.permissions


@dataclass(frozen=True)
class User(Record):
    id: str
    name: str
    role_id: str
    email: str = ""
    business_location_id: Optional[str] = None

    def __post_init__(self):
        require_id(self.id)
        if not self.name:
            raise ValueError("name must be non-empty string.")
        require_id(self.role_id, "role_id")
