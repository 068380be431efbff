"""Registry error taxonomy.

Each contract numbers its own errors, and the numbers overlap between
contracts (102 is "not an authorized issuer" in credential-issuance but
"not owner" in revocation-registry).  An error is therefore identified by
the pair (contract, code): the code enums below are per contract and the
contract name is derived from the enum class.
"""

from __future__ import annotations

from enum import IntEnum


class IssuanceCode(IntEnum):
    NOT_OWNER = 100
    ISSUER_ADMIN_NOT_OWNER = 101
    NOT_AUTHORIZED_ISSUER = 102
    ALREADY_ISSUED = 103
    # mark-revoked hook, called by the revocation registry
    CREDENTIAL_NOT_FOUND = 400
    REVOKE_CALLER_UNAUTHORIZED = 401


class VerificationCode(IntEnum):
    NOT_FOUND = 200
    REVOKED = 201
    EXPIRED = 202


class RevocationCode(IntEnum):
    NOT_OWNER = 102
    NOT_AUTHORIZED = 300
    NOT_FOUND = 301


class EducationCode(IntEnum):
    NOT_OWNER = 102
    NOT_AUTHORIZED_PROVIDER = 400
    CREDENTIAL_NOT_FOUND = 401


ErrorCode = IssuanceCode | VerificationCode | RevocationCode | EducationCode

_CONTRACTS: dict[type[IntEnum], str] = {
    IssuanceCode: "credential-issuance",
    VerificationCode: "verification",
    RevocationCode: "revocation-registry",
    EducationCode: "continuing-education",
}


class RegistryError(Exception):
    """Base for every tagged registry failure.

    Raised before any mutation, so a caught RegistryError always means
    the registry state is unchanged.
    """

    def __init__(self, code: ErrorCode, detail: str) -> None:
        super().__init__(detail)
        self.code = code
        self.detail = detail

    @property
    def contract(self) -> str:
        return _CONTRACTS[type(self.code)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.contract}:{int(self.code)}, {self.detail!r})"


class NotOwnerError(RegistryError):
    pass


class NotAuthorizedError(RegistryError):
    pass


class CredentialNotFoundError(RegistryError):
    pass


class DuplicateCredentialError(RegistryError):
    pass


class CredentialRevokedError(RegistryError):
    pass


class CredentialExpiredError(RegistryError):
    pass


class CreditValidationError(ValueError):
    pass
