from __future__ import annotations

import logging

from credential_registry.core.errors import (
    CredentialNotFoundError,
    NotAuthorizedError,
    RevocationCode,
)
from credential_registry.core.metrics import CREDENTIAL_REVOCATIONS
from credential_registry.models.credential import Credential
from credential_registry.models.principal import Action
from credential_registry.services.authorization_service import AuthorizationService
from credential_registry.services.issuance_service import IssuanceService

logger = logging.getLogger(__name__)


class RevocationService:
    """revocation-registry contract.

    Revocations are forwarded to the issuance contract's mark-revoked hook
    with the registry's own contract principal as the caller.
    """

    def __init__(
        self,
        *,
        authz: AuthorizationService,
        issuance: IssuanceService,
        registry_principal: str,
    ) -> None:
        self._authz = authz
        self._issuance = issuance
        self._principal = registry_principal

    @property
    def principal(self) -> str:
        return self._principal

    def add_authorized_revoker(self, caller: str, revoker: str) -> None:
        self._authz.grant(caller, Action.REVOKE, revoker, RevocationCode.NOT_OWNER)

    def remove_authorized_revoker(self, caller: str, revoker: str) -> None:
        self._authz.revoke_grant(caller, Action.REVOKE, revoker, RevocationCode.NOT_OWNER)

    def is_authorized_revoker(self, revoker: str) -> bool:
        return self._authz.is_member(Action.REVOKE, revoker)

    def revoke_credential(
        self, caller: str, credential_id: str, recipient: str
    ) -> Credential:
        if not self._authz.is_allowed(caller, Action.REVOKE):
            self._authz.record_denial(caller, Action.REVOKE)
            raise NotAuthorizedError(
                RevocationCode.NOT_AUTHORIZED, "caller is not an authorized revoker"
            )

        existing = self._issuance.get_credential(credential_id, recipient)
        if existing is None:
            raise CredentialNotFoundError(RevocationCode.NOT_FOUND, "credential not found")

        revoked = self._issuance.mark_credential_revoked(
            self._principal, credential_id, recipient
        )
        outcome = "already_revoked" if existing.revoked else "revoked"
        CREDENTIAL_REVOCATIONS.labels(outcome=outcome).inc()
        logger.info(
            "Revocation %s id=%s recipient=%s",
            outcome,
            credential_id,
            recipient,
            extra={"caller": caller},
        )
        return revoked
