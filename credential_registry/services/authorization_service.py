"""Authorization gate shared by every contract.

The owner is implicitly allowed for ADMIN (owner management, granting
roles) and REVOKE.  It is NOT implicitly an issuer or a provider: those
must be granted explicitly, even to the owner.
"""

from __future__ import annotations

import logging

from credential_registry.core.errors import ErrorCode, NotOwnerError
from credential_registry.core.metrics import AUTHORIZATION_DENIALS
from credential_registry.models.principal import Action
from credential_registry.repos.authorization_repo import AuthorizationRepo

logger = logging.getLogger(__name__)

_OWNER_IMPLIED = frozenset({Action.ADMIN, Action.REVOKE})


class AuthorizationService:
    def __init__(self, repo: AuthorizationRepo) -> None:
        self._repo = repo

    @property
    def owner(self) -> str:
        return self._repo.get_owner()

    def is_owner(self, caller: str) -> bool:
        return caller == self._repo.get_owner()

    def is_allowed(self, caller: str, action: Action) -> bool:
        if action in _OWNER_IMPLIED and self.is_owner(caller):
            return True
        return self._repo.is_member(action, caller)

    def is_member(self, action: Action, principal: str) -> bool:
        """Explicit membership only, without the owner's implied rights."""
        return self._repo.is_member(action, principal)

    def record_denial(self, caller: str, action: Action) -> None:
        AUTHORIZATION_DENIALS.labels(action=action.value).inc()
        logger.warning(
            "Access denied: caller=%s action=%s",
            caller,
            action.value,
            extra={"caller": caller},
        )

    def require_owner(self, caller: str, code: ErrorCode) -> None:
        if not self.is_owner(caller):
            self.record_denial(caller, Action.ADMIN)
            raise NotOwnerError(code, "caller is not the contract owner")

    def set_owner(self, caller: str, new_owner: str, code: ErrorCode) -> None:
        self.require_owner(caller, code)
        previous = self._repo.get_owner()
        self._repo.set_owner(new_owner)
        logger.info(
            "Contract owner changed from=%s to=%s",
            previous,
            new_owner,
            extra={"caller": caller},
        )

    def grant(self, caller: str, action: Action, principal: str, code: ErrorCode) -> None:
        self.require_owner(caller, code)
        self._repo.add_member(action, principal)
        logger.info(
            "Authorized principal=%s action=%s",
            principal,
            action.value,
            extra={"caller": caller},
        )

    def revoke_grant(
        self, caller: str, action: Action, principal: str, code: ErrorCode
    ) -> None:
        self.require_owner(caller, code)
        self._repo.remove_member(action, principal)
        logger.info(
            "Deauthorized principal=%s action=%s",
            principal,
            action.value,
            extra={"caller": caller},
        )
