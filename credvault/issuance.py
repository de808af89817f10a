"""Contract that issues, verifies and revokes verifiable credentials."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .env import Address, Contract
from .errors import ContractError, IssuanceErrorCode

VERSION = "0.20.0"
DESCRIPTION = (
    "Smart Contract to issue, transfer, verify, and revoke Verifiable Credentials (VCs)."
)


class VCStatusKind(Enum):
    VALID = "valid"
    INVALID = "invalid"
    REVOKED = "revoked"


@dataclass(frozen=True)
class VCStatus:
    """The status of a credential; revoked ones carry the revocation date."""

    kind: VCStatusKind
    since: str | None = None

    @classmethod
    def valid(cls) -> "VCStatus":
        return cls(VCStatusKind.VALID)

    @classmethod
    def invalid(cls) -> "VCStatus":
        return cls(VCStatusKind.INVALID)

    @classmethod
    def revoked(cls, date: str) -> "VCStatus":
        return cls(VCStatusKind.REVOKED, date)


@dataclass(frozen=True)
class Revocation:
    """A revocation record from the older storage layout."""

    vc_id: str
    date: str


class IssuanceKey(Enum):
    """Storage keys; VC and VC_OWNER are paired with a credential id."""

    ADMIN = "admin"
    ISSUER_DID = "issuer_did"
    VC = "vc"
    VC_OWNER = "vc_owner"
    REVOCATIONS = "revocations"
    VCS = "vcs"


class IssuanceContract(Contract):
    """Issues credentials into vaults and keeps their status."""

    def initialize(self, admin: Address, issuer_did: str) -> None:
        """Set the admin and the issuer DID; only allowed once."""
        if self.instance_storage.has(IssuanceKey.ADMIN):
            raise ContractError(IssuanceErrorCode.ALREADY_INITIALIZED)
        self.instance_storage.set(IssuanceKey.ADMIN, admin)
        self.instance_storage.set(IssuanceKey.ISSUER_DID, issuer_did)

    def issue(
        self,
        owner: Address,
        vc_id: str,
        vc_data: str,
        vault_contract: Address,
        issuer: Address,
        issuer_did: str,
    ) -> str:
        """Store a credential in the owner's vault and mark it valid."""
        self.env.require_auth(issuer)
        self.env.invoke_contract(
            vault_contract,
            "store_vc",
            owner,
            vc_id,
            vc_data,
            issuer,
            issuer_did,
            self.address,
        )
        self._write_vc(vc_id, VCStatus.valid())
        self.persistent_storage.set((IssuanceKey.VC_OWNER, vc_id), owner)
        return vc_id

    def verify(self, vc_id: str) -> Dict[str, str]:
        """Report the status of a credential, with the date if revoked."""
        status = self._read_vc(vc_id)
        result = {"status": status.kind.value}
        if status.kind is VCStatusKind.REVOKED:
            result["since"] = status.since
        return result

    def revoke(self, vc_id: str, date: str) -> None:
        """Revoke a valid credential; its owner, or else the admin, must authorise."""
        if self._read_vc(vc_id).kind is VCStatusKind.INVALID:
            raise ContractError(IssuanceErrorCode.VC_NOT_FOUND)
        owner = self.persistent_storage.get((IssuanceKey.VC_OWNER, vc_id), None)
        self.env.require_auth(owner if owner is not None else self._admin())
        if self._read_vc(vc_id).kind is not VCStatusKind.VALID:
            raise ContractError(IssuanceErrorCode.VC_ALREADY_REVOKED)
        self._write_vc(vc_id, VCStatus.revoked(date))

    def migrate(self) -> None:
        """Move credentials from the single-list layout to per-credential entries."""
        self._validate_admin()
        vc_ids = self.persistent_storage.get(IssuanceKey.VCS, None)
        if vc_ids is None:
            raise ContractError(IssuanceErrorCode.VCS_ALREADY_MIGRATED)
        revocations = self.persistent_storage.get(IssuanceKey.REVOCATIONS)
        for vc_id in vc_ids:
            revocation = revocations.get(vc_id)
            if revocation is not None:
                self._write_vc(vc_id, VCStatus.revoked(revocation.date))
            else:
                self._write_vc(vc_id, VCStatus.valid())
        self.persistent_storage.remove(IssuanceKey.VCS)
        self.persistent_storage.remove(IssuanceKey.REVOCATIONS)

    def upgrade(self, new_wasm_hash: bytes) -> None:
        self._validate_admin()
        self.update_current_contract_wasm(new_wasm_hash)

    def set_admin(self, new_admin: Address) -> None:
        self._validate_admin()
        self.instance_storage.set(IssuanceKey.ADMIN, new_admin)

    def version(self) -> str:
        return VERSION

    def _admin(self) -> Address:
        return self.instance_storage.get(IssuanceKey.ADMIN)

    def _validate_admin(self) -> Address:
        admin = self._admin()
        self.env.require_auth(admin)
        return admin

    def _read_vc(self, vc_id: str) -> VCStatus:
        return self.persistent_storage.get((IssuanceKey.VC, vc_id), VCStatus.invalid())

    def _write_vc(self, vc_id: str, status: VCStatus) -> None:
        self.persistent_storage.set((IssuanceKey.VC, vc_id), status)