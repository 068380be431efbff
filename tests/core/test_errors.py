from __future__ import annotations

from credential_registry.core.errors import (
    CreditValidationError,
    EducationCode,
    IssuanceCode,
    NotOwnerError,
    RegistryError,
    RevocationCode,
    VerificationCode,
)


def test_codes_match_observed_contract_numbers() -> None:
    assert [int(c) for c in IssuanceCode] == [100, 101, 102, 103, 400, 401]
    assert [int(c) for c in VerificationCode] == [200, 201, 202]
    assert [int(c) for c in RevocationCode] == [102, 300, 301]
    assert [int(c) for c in EducationCode] == [102, 400, 401]


def test_overlapping_codes_stay_distinct_by_contract() -> None:
    a = RegistryError(IssuanceCode.NOT_AUTHORIZED_ISSUER, "x")
    b = RegistryError(RevocationCode.NOT_OWNER, "y")
    assert int(a.code) == int(b.code) == 102
    assert a.contract == "credential-issuance"
    assert b.contract == "revocation-registry"


def test_contract_names() -> None:
    assert RegistryError(VerificationCode.EXPIRED, "x").contract == "verification"
    assert RegistryError(EducationCode.NOT_OWNER, "x").contract == "continuing-education"


def test_registry_error_carries_detail_and_repr() -> None:
    err = NotOwnerError(IssuanceCode.NOT_OWNER, "caller is not the contract owner")
    assert str(err) == "caller is not the contract owner"
    assert isinstance(err, RegistryError)
    assert repr(err) == (
        "NotOwnerError(credential-issuance:100, 'caller is not the contract owner')"
    )


def test_credit_validation_error_is_value_error() -> None:
    assert issubclass(CreditValidationError, ValueError)
