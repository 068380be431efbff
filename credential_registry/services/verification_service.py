from __future__ import annotations

import logging

from credential_registry.core.errors import (
    CredentialExpiredError,
    CredentialNotFoundError,
    CredentialRevokedError,
    VerificationCode,
)
from credential_registry.core.metrics import VERIFICATIONS
from credential_registry.models.credential import Credential
from credential_registry.services.chain_clock import ChainClock
from credential_registry.services.issuance_service import IssuanceService

logger = logging.getLogger(__name__)


class VerificationService:
    def __init__(self, *, issuance: IssuanceService, clock: ChainClock) -> None:
        self._issuance = issuance
        self._clock = clock

    def verify_credential(self, credential_id: str, recipient: str) -> Credential:
        """Return the stored credential if it is present, unrevoked and unexpired.

        Checks run in order: existence (200), revocation (201), expiry (202).
        A credential that is both revoked and expired reports revoked.
        """
        credential = self._issuance.get_credential(credential_id, recipient)

        if credential is None:
            VERIFICATIONS.labels(result="not_found").inc()
            raise CredentialNotFoundError(
                VerificationCode.NOT_FOUND, "credential not found"
            )

        if credential.revoked:
            VERIFICATIONS.labels(result="revoked").inc()
            logger.info(
                "Verification failed: revoked id=%s recipient=%s",
                credential_id,
                recipient,
            )
            raise CredentialRevokedError(
                VerificationCode.REVOKED, "credential has been revoked"
            )

        now = self._clock.block_time
        if credential.is_expired(now):
            VERIFICATIONS.labels(result="expired").inc()
            logger.info(
                "Verification failed: expired id=%s recipient=%s expiry=%d now=%d",
                credential_id,
                recipient,
                credential.expiry_date,
                now,
            )
            raise CredentialExpiredError(
                VerificationCode.EXPIRED, "credential has expired"
            )

        VERIFICATIONS.labels(result="valid").inc()
        return credential
