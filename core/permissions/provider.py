"""
POS Permissions - Provider Protocol and In-Memory Provider
==========================================================
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from core.entities.access import Role, User


class PermissionProvider(Protocol):
    """Source of users and roles. DomainStore satisfies it."""

    def find_user(self, user_id: str) -> Optional[User]:
        ...

    def find_role(self, role_id: str) -> Optional[Role]:
        ...


class InMemoryPermissionProvider:
    """
    Deterministic in-memory provider used for tests.
    """

    def __init__(
        self,
        roles: Iterable[Role] | None = None,
        users: Iterable[User] | None = None,
    ):
        self._roles: dict[str, Role] = {}
        self._users: dict[str, User] = {}

        for role in roles or ():
            if role.id in self._roles:
                raise ValueError(f"Duplicate role id '{role.id}'.")
            self._roles[role.id] = role

        for user in users or ():
            if user.id in self._users:
                raise ValueError(f"Duplicate user id '{user.id}'.")
            self._users[user.id] = user

    def find_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def find_role(self, role_id: str) -> Optional[Role]:
        return self._roles.get(role_id)
