"""Contract that keeps verifiable credentials in per-owner vaults."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .env import Address, Contract
from .errors import ContractError, VaultErrorCode

VERSION = "0.20.0"
DESCRIPTION = "Smart contract for Chaincerts Vault"


@dataclass(frozen=True)
class VerifiableCredential:
    """A credential as held in an owner's vault."""

    id: str
    data: str
    issuance_contract: Address
    issuer_did: str


class VaultKey(Enum):
    """Storage keys; per-owner keys are paired with the owner (and VC with an id)."""

    CONTRACT_ADMIN = "contract_admin"
    ADMIN = "admin"
    DID = "did"
    REVOKED = "revoked"
    ISSUERS = "issuers"
    VC = "vc"
    VCS = "vcs"
    VC_IDS = "vc_ids"
    FEE_ENABLED = "fee_enabled"
    FEE_TOKEN_CONTRACT = "fee_token_contract"
    FEE_DEST = "fee_dest"
    FEE_AMOUNT = "fee_amount"


class VaultContract(Contract):
    """Holds credentials for many owners, each with their own admin and issuers."""

    def initialize(self, owner: Address, did_uri: str) -> None:
        """Create the owner's vault; the owner becomes its admin."""
        if self.instance_storage.has((VaultKey.ADMIN, owner)):
            raise ContractError(VaultErrorCode.ALREADY_INITIALIZED)
        self.instance_storage.set((VaultKey.ADMIN, owner), owner)
        if not self.instance_storage.has(VaultKey.CONTRACT_ADMIN):
            self.instance_storage.set(VaultKey.CONTRACT_ADMIN, owner)
        self.instance_storage.set((VaultKey.DID, owner), did_uri)
        self.instance_storage.set((VaultKey.REVOKED, owner), False)
        self._write_issuers(owner, ())

    def authorize_issuers(self, owner: Address, issuers: Iterable[Address]) -> None:
        """Replace the owner's authorised issuers with the given list."""
        self._validate_admin(owner)
        self._validate_vault_active(owner)
        self._write_issuers(owner, tuple(issuers))

    def authorize_issuer(self, owner: Address, issuer: Address) -> None:
        """Add one issuer to the front of the owner's authorised issuers."""
        self._validate_admin(owner)
        self._validate_vault_active(owner)
        issuers = self._read_issuers(owner)
        if issuer in issuers:
            raise ContractError(VaultErrorCode.ISSUER_ALREADY_AUTHORIZED)
        self._write_issuers(owner, (issuer, *issuers))

    def revoke_issuer(self, owner: Address, issuer: Address) -> None:
        """Remove an issuer from the owner's authorised issuers."""
        self._validate_admin(owner)
        self._validate_vault_active(owner)
        issuers = list(self._read_issuers(owner))
        try:
            issuers.remove(issuer)
        except ValueError:
            raise ContractError(VaultErrorCode.ISSUER_NOT_AUTHORIZED) from None
        self._write_issuers(owner, tuple(issuers))

    def store_vc(
        self,
        owner: Address,
        vc_id: str,
        vc_data: str,
        issuer: Address,
        issuer_did: str,
        issuance_contract: Address,
    ) -> None:
        """Store a credential from an authorised issuer, charging the fee if enabled."""
        self._validate_vault_active(owner)
        self._validate_issuer(owner, issuer)
        self.env.require_auth(issuer)

        if self.instance_storage.get(VaultKey.FEE_ENABLED, False):
            fee_token = self.instance_storage.get(VaultKey.FEE_TOKEN_CONTRACT)
            fee_dest = self.instance_storage.get(VaultKey.FEE_DEST)
            fee_amount = self.instance_storage.get(VaultKey.FEE_AMOUNT)
            self.env.invoke_contract(fee_token, "transfer", issuer, fee_dest, fee_amount)

        self._store(owner, VerifiableCredential(vc_id, vc_data, issuance_contract, issuer_did))

    def list_vc_ids(self, owner: Address) -> List[str]:
        """Return the owner's credential ids, most recently added first."""
        return list(self._read_vc_ids(owner))

    def get_vc(self, owner: Address, vc_id: str) -> Optional[VerifiableCredential]:
        """Return a stored credential, or None; no signature is needed."""
        return self.persistent_storage.get((VaultKey.VC, owner, vc_id), None)

    def verify_vc(self, owner: Address, vc_id: str) -> Dict[str, str]:
        """Ask the credential's issuance contract for its status."""
        vc = self.get_vc(owner, vc_id)
        if vc is None:
            return {"status": "invalid"}
        return self.env.invoke_contract(vc.issuance_contract, "verify", vc_id)

    def push(
        self,
        from_owner: Address,
        to_owner: Address,
        vc_id: str,
        issuer: Address,
    ) -> None:
        """Move a credential from one owner's vault to another's."""
        self._validate_vault_active(from_owner)
        self._validate_vault_active(to_owner)
        self.env.require_auth(from_owner)
        self._validate_issuer(from_owner, issuer)

        vc = self.get_vc(from_owner, vc_id)
        if vc is None:
            raise ContractError(VaultErrorCode.VC_NOT_FOUND)

        self.persistent_storage.remove((VaultKey.VC, from_owner, vc_id))
        ids = list(self._read_vc_ids(from_owner))
        if vc_id in ids:
            ids.remove(vc_id)
            self._write_vc_ids(from_owner, tuple(ids))

        self.persistent_storage.set((VaultKey.VC, to_owner, vc_id), vc)
        self._append_vc_id(to_owner, vc_id)

    def revoke_vault(self, owner: Address) -> None:
        """Mark the owner's vault as revoked."""
        self._validate_admin(owner)
        self._validate_vault_active(owner)
        self.instance_storage.set((VaultKey.REVOKED, owner), True)

    def migrate(self, owner: Address) -> None:
        """Move the owner's credentials from the single-list layout to keyed entries."""
        self._validate_admin(owner)
        old_vcs = self.persistent_storage.get((VaultKey.VCS, owner), None)
        if old_vcs is None:
            raise ContractError(VaultErrorCode.VCS_ALREADY_MIGRATED)
        for vc in old_vcs:
            self._store(owner, vc)
        self.persistent_storage.remove((VaultKey.VCS, owner))

    def set_admin(self, owner: Address, new_admin: Address) -> None:
        """Hand the owner's vault to a new admin."""
        self._validate_admin(owner)
        self.instance_storage.set((VaultKey.ADMIN, owner), new_admin)

    def upgrade(self, new_wasm_hash: bytes) -> None:
        self.env.require_auth(self._contract_admin())
        self.update_current_contract_wasm(new_wasm_hash)

    def version(self) -> str:
        return VERSION

    def set_fee_config(self, token_contract: Address, fee_dest: Address, fee_amount: int) -> None:
        """Set the token, destination and amount of the storage fee."""
        self.env.require_auth(self._contract_admin())
        self.instance_storage.set(VaultKey.FEE_TOKEN_CONTRACT, token_contract)
        self.instance_storage.set(VaultKey.FEE_DEST, fee_dest)
        self.instance_storage.set(VaultKey.FEE_AMOUNT, fee_amount)

    def set_fee_enabled(self, enabled: bool) -> None:
        """Turn fee charging on or off."""
        self.env.require_auth(self._contract_admin())
        self.instance_storage.set(VaultKey.FEE_ENABLED, bool(enabled))

    def _contract_admin(self) -> Address:
        return self.instance_storage.get(VaultKey.CONTRACT_ADMIN)

    def _validate_admin(self, owner: Address) -> None:
        self.env.require_auth(self.instance_storage.get((VaultKey.ADMIN, owner)))

    def _validate_vault_active(self, owner: Address) -> None:
        if self.instance_storage.get((VaultKey.REVOKED, owner)):
            raise ContractError(VaultErrorCode.VAULT_REVOKED)

    def _validate_issuer(self, owner: Address, issuer: Address) -> None:
        if issuer not in self._read_issuers(owner):
            raise ContractError(VaultErrorCode.ISSUER_NOT_AUTHORIZED)

    def _read_issuers(self, owner: Address) -> Tuple[Address, ...]:
        return self.persistent_storage.get((VaultKey.ISSUERS, owner))

    def _write_issuers(self, owner: Address, issuers: Tuple[Address, ...]) -> None:
        self.persistent_storage.set((VaultKey.ISSUERS, owner), issuers)

    def _read_vc_ids(self, owner: Address) -> Tuple[str, ...]:
        return self.persistent_storage.get((VaultKey.VC_IDS, owner), ())

    def _write_vc_ids(self, owner: Address, ids: Tuple[str, ...]) -> None:
        self.persistent_storage.set((VaultKey.VC_IDS, owner), ids)

    def _append_vc_id(self, owner: Address, vc_id: str) -> None:
        ids = self._read_vc_ids(owner)
        if vc_id not in ids:
            self._write_vc_ids(owner, (vc_id, *ids))

    def _store(self, owner: Address, vc: VerifiableCredential) -> None:
        self.persistent_storage.set((VaultKey.VC, owner, vc.id), vc)
        self._append_vc_id(owner, vc.id)