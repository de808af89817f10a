import pytest

from credvault.errors import (
    AuthorizationError,
    ContractError,
    HostError,
    IssuanceErrorCode,
    VaultErrorCode,
)


def test_issuance_codes_match_source():
    messages = [str(ContractError(code)) for code in IssuanceErrorCode]
    assert messages == [
        "HostError: Error(Contract, #1)",
        "HostError: Error(Contract, #2)",
        "HostError: Error(Contract, #3)",
        "HostError: Error(Contract, #4)",
    ]
    assert ContractError(IssuanceErrorCode.VC_ALREADY_REVOKED).code == 3


def test_vault_codes_match_source():
    messages = [str(ContractError(code)) for code in VaultErrorCode]
    assert messages == [f"HostError: Error(Contract, #{n})" for n in range(1, 7)]
    assert ContractError(VaultErrorCode.VC_NOT_FOUND).code == 6


def test_contract_error_message():
    error = ContractError(IssuanceErrorCode.ALREADY_INITIALIZED)
    assert str(error) == "HostError: Error(Contract, #1)"
    assert error.code is IssuanceErrorCode.ALREADY_INITIALIZED


def test_contract_error_is_host_error():
    error = ContractError(VaultErrorCode.ISSUER_NOT_AUTHORIZED)
    assert isinstance(error, HostError)
    assert error.code is VaultErrorCode.ISSUER_NOT_AUTHORIZED
    assert str(error) == "HostError: Error(Contract, #2)"


def test_authorization_error_keeps_address():
    error = AuthorizationError("someone")
    assert error.address == "someone"
    assert isinstance(error, HostError) and "someone" in str(error)