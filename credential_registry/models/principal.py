from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    """Action categories checked by the authorization gate."""

    ISSUE = "issue"
    REVOKE = "revoke"
    PROVIDE = "provide"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller extracted from a validated JWT.

    Carried through the request via FastAPI's dependency system.  The
    address is opaque and compared by equality only; whether it may act
    is decided by the registry's authorization gate, not by token claims.
    """

    address: str

    def __str__(self) -> str:
        return self.address
