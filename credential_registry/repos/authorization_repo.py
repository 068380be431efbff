from __future__ import annotations

from typing import Protocol

from credential_registry.models.principal import Action


class AuthorizationRepo(Protocol):
    def get_owner(self) -> str: ...
    def set_owner(self, owner: str) -> None: ...
    def is_member(self, action: Action, principal: str) -> bool: ...
    def add_member(self, action: Action, principal: str) -> None: ...
    def remove_member(self, action: Action, principal: str) -> None: ...


class InMemoryAuthorizationRepo:
    """Owner value plus one principal set per delegable action.

    ADMIN has no set: it belongs to the owner alone.
    """

    _DELEGABLE = (Action.ISSUE, Action.REVOKE, Action.PROVIDE)

    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._members: dict[Action, set[str]] = {a: set() for a in self._DELEGABLE}

    def get_owner(self) -> str:
        return self._owner

    def set_owner(self, owner: str) -> None:
        self._owner = owner

    def is_member(self, action: Action, principal: str) -> bool:
        return principal in self._members.get(action, ())

    def add_member(self, action: Action, principal: str) -> None:
        if action not in self._members:
            raise ValueError(f"action {action.value!r} cannot be delegated")
        self._members[action].add(principal)

    def remove_member(self, action: Action, principal: str) -> None:
        if action not in self._members:
            raise ValueError(f"action {action.value!r} cannot be delegated")
        self._members[action].discard(principal)
