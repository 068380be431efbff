"""credential-issuance endpoints.

- GET    /v1/owner                                  current owner (public)
- PUT    /v1/owner                                  transfer ownership
- POST   /v1/issuers                                authorize an issuer
- DELETE /v1/issuers/{principal}                    deauthorize an issuer
- GET    /v1/issuers/{principal}                    membership check (public)
- POST   /v1/credentials                            issue a credential
- GET    /v1/credentials/{credential_id}/{recipient} lookup (public)

Handlers are async with no awaits around registry calls, so each request
runs to completion on the event loop before the next one starts.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, StrictInt

from credential_registry.api.dependencies import CallerDep, RegistryDep
from credential_registry.api.schemas import (
    AuthorizationOut,
    CredentialOut,
    PATH_SEGMENT,
    PrincipalIn,
    SuccessOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["issuance"])


class OwnerOut(BaseModel):
    owner: str


class OwnerIn(BaseModel):
    new_owner: str = Field(pattern=PATH_SEGMENT)


class CredentialIssueIn(BaseModel):
    credential_id: str = Field(pattern=PATH_SEGMENT)
    recipient: str = Field(pattern=PATH_SEGMENT)
    credential_type: str
    expiry_date: StrictInt = Field(ge=0)
    metadata_uri: str = ""


@router.get("/owner", response_model=OwnerOut)
async def get_contract_owner(registry: RegistryDep) -> OwnerOut:
    return OwnerOut(owner=registry.issuance.get_contract_owner())


@router.put("/owner", response_model=OwnerOut)
async def set_contract_owner(
    body: OwnerIn, caller: CallerDep, registry: RegistryDep
) -> OwnerOut:
    registry.issuance.set_contract_owner(caller.address, body.new_owner)
    return OwnerOut(owner=registry.issuance.get_contract_owner())


@router.post("/issuers", response_model=SuccessOut)
async def add_authorized_issuer(
    body: PrincipalIn, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.issuance.add_authorized_issuer(caller.address, body.principal)
    return SuccessOut()


@router.delete("/issuers/{principal}", response_model=SuccessOut)
async def remove_authorized_issuer(
    principal: str, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.issuance.remove_authorized_issuer(caller.address, principal)
    return SuccessOut()


@router.get("/issuers/{principal}", response_model=AuthorizationOut)
async def is_authorized_issuer(principal: str, registry: RegistryDep) -> AuthorizationOut:
    return AuthorizationOut(
        principal=principal,
        authorized=registry.issuance.is_authorized_issuer(principal),
    )


@router.post(
    "/credentials",
    response_model=CredentialOut,
    status_code=status.HTTP_201_CREATED,
)
async def issue_credential(
    body: CredentialIssueIn, caller: CallerDep, registry: RegistryDep
) -> CredentialOut:
    credential = registry.issuance.issue_credential(
        caller.address,
        body.credential_id,
        body.recipient,
        body.credential_type,
        body.expiry_date,
        body.metadata_uri,
    )
    return CredentialOut.from_model(body.credential_id, body.recipient, credential)


@router.get("/credentials/{credential_id}/{recipient}", response_model=CredentialOut)
async def get_credential(
    credential_id: str, recipient: str, registry: RegistryDep
) -> CredentialOut:
    credential = registry.issuance.get_credential(credential_id, recipient)
    if credential is None:
        raise HTTPException(status_code=404, detail="credential not found")
    return CredentialOut.from_model(credential_id, recipient, credential)
