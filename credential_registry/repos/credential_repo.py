from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from credential_registry.models.credential import Credential, CredentialKey


class CredentialRepo(Protocol):
    def get(self, credential_id: str, recipient: str) -> Credential | None: ...
    def add(self, credential_id: str, recipient: str, credential: Credential) -> None: ...
    def mark_revoked(self, credential_id: str, recipient: str) -> Credential: ...
    def count(self) -> int: ...


class InMemoryCredentialRepo:
    def __init__(self) -> None:
        self._by_key: dict[CredentialKey, Credential] = {}

    def get(self, credential_id: str, recipient: str) -> Credential | None:
        return self._by_key.get((credential_id, recipient))

    def add(self, credential_id: str, recipient: str, credential: Credential) -> None:
        key = (credential_id, recipient)
        if key in self._by_key:
            raise ValueError("credential already exists")
        self._by_key[key] = credential

    def mark_revoked(self, credential_id: str, recipient: str) -> Credential:
        key = (credential_id, recipient)
        c = self._by_key.get(key)
        if c is None:
            raise KeyError("credential not found")

        updated = replace(c, revoked=True)
        self._by_key[key] = updated
        return updated

    def count(self) -> int:
        return len(self._by_key)
