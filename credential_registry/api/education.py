"""continuing-education endpoints.

- POST/DELETE/GET /v1/providers[/{principal}]          provider registry
- POST /v1/education-credits                            add credits
- GET  /v1/education-credits/{recipient}/{credential_id}            balance
- GET  /v1/education-credits/{recipient}/{credential_id}/history    all entries
- GET  /v1/education-credits/{recipient}/{credential_id}/history/{index}
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, StrictInt

from credential_registry.api.dependencies import CallerDep, RegistryDep
from credential_registry.api.schemas import (
    PATH_SEGMENT,
    AuthorizationOut,
    PrincipalIn,
    SuccessOut,
)
from credential_registry.models.education import CreditHistoryEntry

router = APIRouter(prefix="/v1", tags=["education"])


class CreditsIn(BaseModel):
    recipient: str = Field(pattern=PATH_SEGMENT)
    credential_id: str = Field(pattern=PATH_SEGMENT)
    credits: StrictInt = Field(ge=0)
    activity_type: str
    metadata_uri: str = ""


class BalanceOut(BaseModel):
    recipient: str
    credential_id: str
    total_credits: int
    last_updated: int
    entry_count: int


class CreditsOut(BaseModel):
    entry_index: int
    balance: BalanceOut


class HistoryEntryOut(BaseModel):
    index: int
    provider: str
    credits: int
    activity_type: str
    date: int
    metadata_uri: str


def _entry_out(index: int, e: CreditHistoryEntry) -> HistoryEntryOut:
    return HistoryEntryOut(
        index=index,
        provider=e.provider,
        credits=e.credits,
        activity_type=e.activity_type,
        date=e.date,
        metadata_uri=e.metadata_uri,
    )


@router.post("/providers", response_model=SuccessOut)
async def add_authorized_provider(
    body: PrincipalIn, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.education.add_authorized_provider(caller.address, body.principal)
    return SuccessOut()


@router.delete("/providers/{principal}", response_model=SuccessOut)
async def remove_authorized_provider(
    principal: str, caller: CallerDep, registry: RegistryDep
) -> SuccessOut:
    registry.education.remove_authorized_provider(caller.address, principal)
    return SuccessOut()


@router.get("/providers/{principal}", response_model=AuthorizationOut)
async def is_authorized_provider(
    principal: str, registry: RegistryDep
) -> AuthorizationOut:
    return AuthorizationOut(
        principal=principal,
        authorized=registry.education.is_authorized_provider(principal),
    )


@router.post(
    "/education-credits",
    response_model=CreditsOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_education_credits(
    body: CreditsIn, caller: CallerDep, registry: RegistryDep
) -> CreditsOut:
    balance, index = registry.education.add_education_credits(
        caller.address,
        body.recipient,
        body.credential_id,
        body.credits,
        body.activity_type,
        body.metadata_uri,
    )
    return CreditsOut(
        entry_index=index,
        balance=BalanceOut(
            recipient=body.recipient,
            credential_id=body.credential_id,
            total_credits=balance.total_credits,
            last_updated=balance.last_updated,
            entry_count=index + 1,
        ),
    )


@router.get(
    "/education-credits/{recipient}/{credential_id}", response_model=BalanceOut
)
async def get_total_credits(
    recipient: str, credential_id: str, registry: RegistryDep
) -> BalanceOut:
    balance = registry.education.get_total_credits(recipient, credential_id)
    if balance is None:
        raise HTTPException(status_code=404, detail="no credits recorded")
    return BalanceOut(
        recipient=recipient,
        credential_id=credential_id,
        total_credits=balance.total_credits,
        last_updated=balance.last_updated,
        entry_count=registry.education.get_entry_count(recipient, credential_id),
    )


@router.get(
    "/education-credits/{recipient}/{credential_id}/history",
    response_model=list[HistoryEntryOut],
)
async def get_credit_history(
    recipient: str, credential_id: str, registry: RegistryDep
) -> list[HistoryEntryOut]:
    entries = registry.education.get_credit_history(recipient, credential_id)
    return [_entry_out(i, e) for i, e in enumerate(entries)]


@router.get(
    "/education-credits/{recipient}/{credential_id}/history/{index}",
    response_model=HistoryEntryOut,
)
async def get_credit_history_entry(
    recipient: str, credential_id: str, index: int, registry: RegistryDep
) -> HistoryEntryOut:
    entry = registry.education.get_credit_history_entry(recipient, credential_id, index)
    if entry is None:
        raise HTTPException(status_code=404, detail="history entry not found")
    return _entry_out(index, entry)
