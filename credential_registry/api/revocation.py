"""revocation-registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from credential_registry.api.dependencies import CallerDep, RegistryDep
from credential_registry.api.schemas import (
    AuthorizationOut,
    CredentialOut,
    PrincipalIn,
    SuccessOut,
)

router = APIRouter(prefix="/v1", tags=["revocation"])


class RevocationIn(BaseModel):
    credential_id: str = Field(min_length=1)
    recipient: str = Field(min_length=1)


@router.post("/revokers", response_model=SuccessOut)
async def add_authorized_revoker(
    body: PrincipalIn, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.revocation.add_authorized_revoker(caller.address, body.principal)
    return SuccessOut()


@router.delete("/revokers/{principal}", response_model=SuccessOut)
async def remove_authorized_revoker(
    principal: str, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.revocation.remove_authorized_revoker(caller.address, principal)
    return SuccessOut()


@router.get("/revokers/{principal}", response_model=AuthorizationOut)
async def is_authorized_revoker(
    principal: str, registry: RegistryDep
) -> AuthorizationOut:
    return AuthorizationOut(
        principal=principal,
        authorized=registry.revocation.is_authorized_revoker(principal),
    )


@router.post("/revocations", response_model=CredentialOut)
async def revoke_credential(
    body: RevocationIn, caller: CallerDep, registry: RegistryDep
) -> CredentialOut:
    """Revoke a credential.  Revoking twice is a no-op success."""
    credential = registry.revocation.revoke_credential(
        caller.address, body.credential_id, body.recipient
    )
    return CredentialOut.from_model(body.credential_id, body.recipient, credential)
