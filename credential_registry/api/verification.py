"""Public credential verification.

GET /v1/credentials/{credential_id}/{recipient}/verify

A valid credential returns 200 with the stored fields.  Missing, revoked
and expired credentials are reported through the registry error handler
with their verification codes (200, 201, 202).
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from credential_registry.api.dependencies import RegistryDep
from credential_registry.api.schemas import CredentialOut

router = APIRouter(prefix="/v1/credentials", tags=["verification"])


class VerificationOut(BaseModel):
    valid: bool
    block_time: int
    credential: CredentialOut


@router.get("/{credential_id}/{recipient}/verify", response_model=VerificationOut)
async def verify_credential(
    credential_id: str, recipient: str, registry: RegistryDep
) -> VerificationOut:
    credential = registry.verification.verify_credential(credential_id, recipient)
    return VerificationOut(
        valid=True,
        block_time=registry.clock.block_time,
        credential=CredentialOut.from_model(credential_id, recipient, credential),
    )
