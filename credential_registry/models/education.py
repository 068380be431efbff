from __future__ import annotations

from dataclasses import dataclass

# (recipient, credential_id), note the order differs from CredentialKey
CreditKey = tuple[str, str]


@dataclass(frozen=True, slots=True)
class CreditBalance:
    """Running total for one (recipient, credential_id).

    Only exists once credits have been added at least once.
    """

    total_credits: int
    last_updated: int


@dataclass(frozen=True, slots=True)
class CreditHistoryEntry:
    """Append-only ledger entry; the balance is derived from these."""

    provider: str
    credits: int
    activity_type: str
    date: int
    metadata_uri: str
