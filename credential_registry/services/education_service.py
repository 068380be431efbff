"""continuing-education contract: providers, credit balances, credit history."""

from __future__ import annotations

import logging

from credential_registry.core.errors import (
    CredentialNotFoundError,
    CreditValidationError,
    EducationCode,
    NotAuthorizedError,
)
from credential_registry.core.metrics import EDUCATION_CREDITS_AWARDED
from credential_registry.models.education import CreditBalance, CreditHistoryEntry
from credential_registry.models.principal import Action
from credential_registry.repos.credit_repo import CreditRepo
from credential_registry.services.authorization_service import AuthorizationService
from credential_registry.services.chain_clock import ChainClock
from credential_registry.services.issuance_service import IssuanceService

logger = logging.getLogger(__name__)


class EducationService:
    def __init__(
        self,
        *,
        authz: AuthorizationService,
        issuance: IssuanceService,
        credits: CreditRepo,
        clock: ChainClock,
    ) -> None:
        self._authz = authz
        self._issuance = issuance
        self._credits = credits
        self._clock = clock

    def add_authorized_provider(self, caller: str, provider: str) -> None:
        self._authz.grant(caller, Action.PROVIDE, provider, EducationCode.NOT_OWNER)

    def remove_authorized_provider(self, caller: str, provider: str) -> None:
        self._authz.revoke_grant(caller, Action.PROVIDE, provider, EducationCode.NOT_OWNER)

    def is_authorized_provider(self, provider: str) -> bool:
        return self._authz.is_allowed(provider, Action.PROVIDE)

    def add_education_credits(
        self,
        caller: str,
        recipient: str,
        credential_id: str,
        credits: int,
        activity_type: str,
        metadata_uri: str,
    ) -> tuple[CreditBalance, int]:
        """Add credits against an issued credential.

        Returns the updated balance and the history index of the new entry.
        Revoked or expired credentials still accept credits; only existence
        is checked.
        """
        if credits < 0:
            raise CreditValidationError("credits must be non-negative")

        if not self._authz.is_allowed(caller, Action.PROVIDE):
            self._authz.record_denial(caller, Action.PROVIDE)
            raise NotAuthorizedError(
                EducationCode.NOT_AUTHORIZED_PROVIDER,
                "caller is not an authorized provider",
            )

        if self._issuance.get_credential(credential_id, recipient) is None:
            logger.warning(
                "Rejected credits for missing credential id=%s recipient=%s",
                credential_id,
                recipient,
                extra={"caller": caller},
            )
            raise CredentialNotFoundError(
                EducationCode.CREDENTIAL_NOT_FOUND, "credential not found"
            )

        entry = CreditHistoryEntry(
            provider=caller,
            credits=credits,
            activity_type=activity_type,
            date=self._clock.block_time,
            metadata_uri=metadata_uri,
        )
        balance, index = self._credits.record(recipient, credential_id, entry)
        EDUCATION_CREDITS_AWARDED.inc(credits)
        logger.info(
            "Added %d credit(s) recipient=%s id=%s entry=%d total=%d",
            credits,
            recipient,
            credential_id,
            index,
            balance.total_credits,
            extra={"caller": caller},
        )
        return balance, index

    def get_total_credits(self, recipient: str, credential_id: str) -> CreditBalance | None:
        return self._credits.get_balance(recipient, credential_id)

    def get_credit_history_entry(
        self, recipient: str, credential_id: str, entry_id: int
    ) -> CreditHistoryEntry | None:
        return self._credits.get_entry(recipient, credential_id, entry_id)

    def get_credit_history(
        self, recipient: str, credential_id: str
    ) -> list[CreditHistoryEntry]:
        return self._credits.list_entries(recipient, credential_id)

    def get_entry_count(self, recipient: str, credential_id: str) -> int:
        return self._credits.entry_count(recipient, credential_id)
