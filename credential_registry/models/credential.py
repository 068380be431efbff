from __future__ import annotations

from dataclasses import dataclass

# (credential_id, recipient)
CredentialKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class Credential:
    """Issued credential record, keyed by (credential_id, recipient).

    Lifecycle: active -> revoked (terminal).  Expiry is never stored; it is
    judged against the chain clock each time the credential is verified.
    """

    issuer: str
    credential_type: str
    issue_date: int
    expiry_date: int
    metadata_uri: str
    revoked: bool = False

    @staticmethod
    def new(
        *,
        issuer: str,
        credential_type: str,
        issue_date: int,
        expiry_date: int,
        metadata_uri: str,
    ) -> Credential:
        return Credential(
            issuer=issuer,
            credential_type=credential_type,
            issue_date=issue_date,
            expiry_date=expiry_date,
            metadata_uri=metadata_uri,
            revoked=False,
        )

    def is_expired(self, now: int) -> bool:
        return now > self.expiry_date
