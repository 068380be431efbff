"""credential-issuance contract: owner, issuers, credentials.

Error codes are IssuanceCode values; see core/errors.py.
"""

from __future__ import annotations

import logging

from credential_registry.core.errors import (
    CredentialNotFoundError,
    DuplicateCredentialError,
    IssuanceCode,
    NotAuthorizedError,
)
from credential_registry.core.metrics import CREDENTIALS_ISSUED
from credential_registry.models.credential import Credential
from credential_registry.models.principal import Action
from credential_registry.repos.credential_repo import CredentialRepo
from credential_registry.services.authorization_service import AuthorizationService
from credential_registry.services.chain_clock import ChainClock

logger = logging.getLogger(__name__)


class IssuanceService:
    def __init__(
        self,
        *,
        authz: AuthorizationService,
        credentials: CredentialRepo,
        clock: ChainClock,
        revocation_registry: str,
    ) -> None:
        self._authz = authz
        self._credentials = credentials
        self._clock = clock
        self._revocation_registry = revocation_registry

    # ---- owner ----

    def get_contract_owner(self) -> str:
        return self._authz.owner

    def set_contract_owner(self, caller: str, new_owner: str) -> None:
        self._authz.set_owner(caller, new_owner, IssuanceCode.NOT_OWNER)

    # ---- issuers ----

    def add_authorized_issuer(self, caller: str, issuer: str) -> None:
        self._authz.grant(
            caller, Action.ISSUE, issuer, IssuanceCode.ISSUER_ADMIN_NOT_OWNER
        )

    def remove_authorized_issuer(self, caller: str, issuer: str) -> None:
        self._authz.revoke_grant(
            caller, Action.ISSUE, issuer, IssuanceCode.ISSUER_ADMIN_NOT_OWNER
        )

    def is_authorized_issuer(self, issuer: str) -> bool:
        return self._authz.is_allowed(issuer, Action.ISSUE)

    # ---- credentials ----

    def issue_credential(
        self,
        caller: str,
        credential_id: str,
        recipient: str,
        credential_type: str,
        expiry_date: int,
        metadata_uri: str,
    ) -> Credential:
        if not self._authz.is_allowed(caller, Action.ISSUE):
            self._authz.record_denial(caller, Action.ISSUE)
            raise NotAuthorizedError(
                IssuanceCode.NOT_AUTHORIZED_ISSUER, "caller is not an authorized issuer"
            )

        if self._credentials.get(credential_id, recipient) is not None:
            logger.warning(
                "Rejected duplicate credential id=%s recipient=%s",
                credential_id,
                recipient,
                extra={"caller": caller},
            )
            raise DuplicateCredentialError(
                IssuanceCode.ALREADY_ISSUED,
                "credential already issued to this recipient",
            )

        credential = Credential.new(
            issuer=caller,
            credential_type=credential_type,
            issue_date=self._clock.block_time,
            expiry_date=expiry_date,
            metadata_uri=metadata_uri,
        )
        self._credentials.add(credential_id, recipient, credential)
        CREDENTIALS_ISSUED.inc()
        logger.info(
            "Issued credential id=%s recipient=%s type=%s expiry=%d",
            credential_id,
            recipient,
            credential_type,
            expiry_date,
            extra={"caller": caller},
        )
        return credential

    def get_credential(self, credential_id: str, recipient: str) -> Credential | None:
        return self._credentials.get(credential_id, recipient)

    def mark_credential_revoked(
        self, caller: str, credential_id: str, recipient: str
    ) -> Credential:
        """Revocation hook.  Only the owner or the revocation registry may call it.

        Marking an already revoked credential leaves it revoked and succeeds.
        """
        credential = self._credentials.get(credential_id, recipient)
        if credential is None:
            raise CredentialNotFoundError(
                IssuanceCode.CREDENTIAL_NOT_FOUND, "credential not found"
            )

        if caller != self._authz.owner and caller != self._revocation_registry:
            self._authz.record_denial(caller, Action.REVOKE)
            raise NotAuthorizedError(
                IssuanceCode.REVOKE_CALLER_UNAUTHORIZED,
                "only the owner or the revocation registry can mark revocations",
            )

        if credential.revoked:
            logger.info(
                "Credential already revoked id=%s recipient=%s",
                credential_id,
                recipient,
                extra={"caller": caller},
            )
            return credential

        return self._credentials.mark_revoked(credential_id, recipient)
