from __future__ import annotations

from typing import Protocol

from credential_registry.models.education import (
    CreditBalance,
    CreditHistoryEntry,
    CreditKey,
)


class CreditRepo(Protocol):
    def get_balance(self, recipient: str, credential_id: str) -> CreditBalance | None: ...
    def get_entry(
        self, recipient: str, credential_id: str, index: int
    ) -> CreditHistoryEntry | None: ...
    def list_entries(self, recipient: str, credential_id: str) -> list[CreditHistoryEntry]: ...
    def entry_count(self, recipient: str, credential_id: str) -> int: ...
    def record(
        self, recipient: str, credential_id: str, entry: CreditHistoryEntry
    ) -> tuple[CreditBalance, int]: ...


class InMemoryCreditRepo:
    """Balances plus an append-only history list per (recipient, credential_id).

    The next entry index is the length of the history list, so the
    counter can never drift from the entries it numbers.
    """

    def __init__(self) -> None:
        self._balances: dict[CreditKey, CreditBalance] = {}
        self._history: dict[CreditKey, list[CreditHistoryEntry]] = {}

    def get_balance(self, recipient: str, credential_id: str) -> CreditBalance | None:
        return self._balances.get((recipient, credential_id))

    def get_entry(
        self, recipient: str, credential_id: str, index: int
    ) -> CreditHistoryEntry | None:
        entries = self._history.get((recipient, credential_id), [])
        if 0 <= index < len(entries):
            return entries[index]
        return None

    def list_entries(self, recipient: str, credential_id: str) -> list[CreditHistoryEntry]:
        return list(self._history.get((recipient, credential_id), []))

    def entry_count(self, recipient: str, credential_id: str) -> int:
        return len(self._history.get((recipient, credential_id), []))

    def record(
        self, recipient: str, credential_id: str, entry: CreditHistoryEntry
    ) -> tuple[CreditBalance, int]:
        """Add entry.credits to the balance and append the entry.

        Returns the new balance and the index the entry was stored at.
        """
        key = (recipient, credential_id)
        current = self._balances.get(key)
        total = (current.total_credits if current else 0) + entry.credits
        balance = CreditBalance(total_credits=total, last_updated=entry.date)
        self._balances[key] = balance

        entries = self._history.setdefault(key, [])
        entries.append(entry)
        return balance, len(entries) - 1
