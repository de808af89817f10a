"""Errors raised by the contract host and by the contracts themselves."""

from __future__ import annotations

from enum import IntEnum


class HostError(Exception):
    """A failure raised by the host while running a contract call."""


class AuthorizationError(HostError):
    """An address was required to authorise a call but did not."""

    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(f"HostError: Error(Auth, InvalidAction) for {address}")


class IssuanceErrorCode(IntEnum):
    """Error codes reported by the issuance contract."""

    ALREADY_INITIALIZED = 1
    VC_NOT_FOUND = 2
    VC_ALREADY_REVOKED = 3
    VCS_ALREADY_MIGRATED = 4


class VaultErrorCode(IntEnum):
    """Error codes reported by the vault contract."""

    ALREADY_INITIALIZED = 1
    ISSUER_NOT_AUTHORIZED = 2
    ISSUER_ALREADY_AUTHORIZED = 3
    VAULT_REVOKED = 4
    VCS_ALREADY_MIGRATED = 5
    VC_NOT_FOUND = 6


class ContractError(HostError):
    """A contract aborted the call with one of its own error codes."""

    def __init__(self, code: IntEnum) -> None:
        self.code = code
        super().__init__(f"HostError: Error(Contract, #{int(code)})")