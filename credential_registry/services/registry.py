"""Wires the four contracts onto shared in-memory state.

One Registry is one simulated chain: a single owner, one clock and one
set of repos seen by every contract.
"""

from __future__ import annotations

from dataclasses import dataclass

from credential_registry.core.config import SETTINGS, Settings
from credential_registry.repos.authorization_repo import InMemoryAuthorizationRepo
from credential_registry.repos.credential_repo import InMemoryCredentialRepo
from credential_registry.repos.credit_repo import InMemoryCreditRepo
from credential_registry.services.authorization_service import AuthorizationService
from credential_registry.services.chain_clock import ChainClock
from credential_registry.services.education_service import EducationService
from credential_registry.services.issuance_service import IssuanceService
from credential_registry.services.revocation_service import RevocationService
from credential_registry.services.verification_service import VerificationService


@dataclass(frozen=True)
class Registry:
    clock: ChainClock
    authz: AuthorizationService
    credentials: InMemoryCredentialRepo
    issuance: IssuanceService
    verification: VerificationService
    revocation: RevocationService
    education: EducationService


def build_registry(settings: Settings) -> Registry:
    clock = ChainClock(
        block_height=settings.genesis_block_height,
        block_time=settings.genesis_block_time,
        block_interval=settings.block_interval_seconds,
    )
    authz = AuthorizationService(InMemoryAuthorizationRepo(settings.contract_owner))
    credentials = InMemoryCredentialRepo()

    issuance = IssuanceService(
        authz=authz,
        credentials=credentials,
        clock=clock,
        revocation_registry=settings.revocation_registry_principal,
    )
    return Registry(
        clock=clock,
        authz=authz,
        credentials=credentials,
        issuance=issuance,
        verification=VerificationService(issuance=issuance, clock=clock),
        revocation=RevocationService(
            authz=authz,
            issuance=issuance,
            registry_principal=settings.revocation_registry_principal,
        ),
        education=EducationService(
            authz=authz,
            issuance=issuance,
            credits=InMemoryCreditRepo(),
            clock=clock,
        ),
    )


# Process-wide registry used by the HTTP layer.
registry = build_registry(SETTINGS)


def get_registry() -> Registry:
    """FastAPI dependency; tests override it with a fresh registry."""
    return registry
