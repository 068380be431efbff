from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from credential_registry.core.config import SETTINGS, Settings
from credential_registry.main import app
from credential_registry.services import token_service
from credential_registry.services.registry import Registry, build_registry, get_registry

# Ensure repo root is on sys.path so `import credential_registry` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
ISSUER = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
REVOKER = "ST2REHHS5J3CERCRBEPMGH7921Q6PYKAADT7JP2VB"
PROVIDER = "ST2NEB84ASENDXKYGJPQW86YXQCEFEX2ZQPG87ND"
RECIPIENT = "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0"
REVOCATION_REGISTRY = f"{OWNER}.revocation-registry"

CERT_ID = "CERT-123"
CERT_TYPE = "Professional Engineer"
METADATA_URI = "ipfs://QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco"
GENESIS_HEIGHT = 100
GENESIS_TIME = 1648000000
EXPIRY = 1680000000


@pytest.fixture
def settings() -> Settings:
    return replace(
        SETTINGS,
        app_env="test",
        contract_owner=OWNER,
        genesis_block_height=GENESIS_HEIGHT,
        genesis_block_time=GENESIS_TIME,
        block_interval_seconds=600,
    )


@pytest.fixture
def registry(settings: Settings) -> Registry:
    """A fresh simulated chain per test."""
    return build_registry(settings)


@pytest.fixture
def issued(registry: Registry) -> Registry:
    """Registry with ISSUER authorized and CERT-123 issued to RECIPIENT."""
    registry.issuance.add_authorized_issuer(OWNER, ISSUER)
    registry.issuance.issue_credential(
        ISSUER, CERT_ID, RECIPIENT, CERT_TYPE, EXPIRY, METADATA_URI
    )
    return registry


@pytest.fixture
def client(registry: Registry) -> Iterator[TestClient]:
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def mint_token(principal: str = RECIPIENT) -> str:
    """Create a valid ES256 caller token for testing."""
    return token_service.create_access_token(sub=principal)


def auth(principal: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(principal)}"}
