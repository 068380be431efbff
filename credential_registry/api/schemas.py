"""Response/request models shared by several routers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from credential_registry.models.credential import Credential


class SuccessOut(BaseModel):
    success: bool = True


# Identifiers that are later addressed as a single URL path segment.
# Starlette decodes %2F before routing, so a stored "/" is unreachable.
PATH_SEGMENT = r"^[^/]+$"


class PrincipalIn(BaseModel):
    principal: str = Field(pattern=PATH_SEGMENT)


class AuthorizationOut(BaseModel):
    principal: str
    authorized: bool


class CredentialOut(BaseModel):
    credential_id: str
    recipient: str
    issuer: str
    credential_type: str
    issue_date: int
    expiry_date: int
    metadata_uri: str
    revoked: bool

    @staticmethod
    def from_model(credential_id: str, recipient: str, c: Credential) -> CredentialOut:
        return CredentialOut(
            credential_id=credential_id,
            recipient=recipient,
            issuer=c.issuer,
            credential_type=c.credential_type,
            issue_date=c.issue_date,
            expiry_date=c.expiry_date,
            metadata_uri=c.metadata_uri,
            revoked=c.revoked,
        )
