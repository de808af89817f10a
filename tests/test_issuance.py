import pytest

from credvault.env import Contract, Env
from credvault.errors import AuthorizationError, ContractError, HostError, IssuanceErrorCode
from credvault.issuance import (
    IssuanceContract,
    IssuanceKey,
    Revocation,
    VCStatus,
    VCStatusKind,
)

DATE = "2023-12-05T21:37:44.389Z"
ISSUER_DID = "did:chaincerts:test-issuer"


class RecordingVault(Contract):
    def __init__(self, env, address):
        super().__init__(env, address)
        self.stored = []

    def store_vc(self, *args):
        self.stored.append(args)


def _fails_with(code, action, *args):
    with pytest.raises(ContractError) as info:
        action(*args)
    assert info.value.code == code
    return info.value


@pytest.fixture
def setup():
    env = Env()
    env.mock_all_auths()
    admin = env.generate_address()
    issuer = env.generate_address()
    contract = env.register_contract(IssuanceContract)
    return env, admin, issuer, ISSUER_DID, contract


@pytest.fixture
def initialized(setup):
    _env, admin, _issuer, issuer_did, contract = setup
    contract.initialize(admin, issuer_did)
    return setup


@pytest.fixture
def issued(initialized):
    env, admin, issuer, issuer_did, contract = initialized
    vault = env.register_contract(RecordingVault)
    owner = env.generate_address()
    contract.issue(owner, "vc-1", "vc-data-1", vault.address, issuer, issuer_did)
    return env, admin, owner, vault, contract


def test_initialize(setup):
    _env, admin, _issuer, issuer_did, contract = setup
    contract.initialize(admin, issuer_did)
    assert contract.instance_storage.get(IssuanceKey.ADMIN) == admin
    assert contract.instance_storage.get(IssuanceKey.ISSUER_DID) == issuer_did


def test_initialize_twice_should_fail(initialized):
    _env, admin, _issuer, issuer_did, contract = initialized
    err = _fails_with(
        IssuanceErrorCode.ALREADY_INITIALIZED, contract.initialize, admin, issuer_did
    )
    assert "HostError: Error(Contract, #1)" in str(err)


def test_issue_without_vault_fails(initialized):
    env, _admin, issuer, issuer_did, contract = initialized
    with pytest.raises(HostError):
        contract.issue(
            env.generate_address(), "vc-1", "vc-data-1",
            env.generate_address(), issuer, issuer_did,
        )
    assert contract.verify("vc-1") == {"status": "invalid"}


def test_issue_stores_in_vault(issued):
    _env, _admin, owner, vault, contract = issued
    assert len(vault.stored) == 1
    args = vault.stored[0]
    assert args[:3] == (owner, "vc-1", "vc-data-1")
    assert args[-1] == contract.address


def test_issue_returns_id(initialized):
    env, _admin, issuer, issuer_did, contract = initialized
    vault = env.register_contract(RecordingVault)
    result = contract.issue(env.generate_address(), "vc-9", "d", vault.address, issuer, issuer_did)
    assert result == "vc-9"


def test_verify_valid_vc(issued):
    assert issued[-1].verify("vc-1") == {"status": "valid"}


def test_revoke_vc(issued):
    contract = issued[-1]
    contract.revoke("vc-1", DATE)
    assert contract.verify("vc-1") == {"status": "revoked", "since": DATE}


def test_revoke_twice_should_fail(issued):
    contract = issued[-1]
    contract.revoke("vc-1", DATE)
    _fails_with(IssuanceErrorCode.VC_ALREADY_REVOKED, contract.revoke, "vc-1", DATE)


def test_revoke_invalid_vc_should_fail(initialized):
    contract = initialized[-1]
    err = _fails_with(IssuanceErrorCode.VC_NOT_FOUND, contract.revoke, "invalid-vc", DATE)
    assert "HostError: Error(Contract, #2)" in str(err)


def test_revoke_needs_owner_auth():
    env = Env()
    admin, issuer, owner = (env.generate_address() for _ in range(3))
    env.authorize(issuer)
    contract = env.register_contract(IssuanceContract)
    contract.initialize(admin, ISSUER_DID)
    vault = env.register_contract(RecordingVault)
    contract.issue(owner, "vc-1", "d", vault.address, issuer, ISSUER_DID)
    with pytest.raises(AuthorizationError):
        contract.revoke("vc-1", DATE)
    env.authorize(owner)
    contract.revoke("vc-1", DATE)
    assert contract.verify("vc-1")["status"] == "revoked"


def test_set_admin(initialized):
    env, admin, _issuer, _issuer_did, contract = initialized
    new_admin = env.generate_address()
    contract.set_admin(new_admin)
    assert contract.instance_storage.get(IssuanceKey.ADMIN) == new_admin
    assert env.auths[-1] == admin


def test_version(initialized):
    assert initialized[-1].version() == "0.20.0"


def test_upgrade(initialized):
    contract = initialized[-1]
    contract.upgrade(bytes(range(32)))
    assert contract.wasm_hash == bytes(range(32))


def test_migrate(initialized):
    contract = initialized[-1]
    storage = contract.persistent_storage
    storage.set(IssuanceKey.VCS, ("a", "b"))
    storage.set(IssuanceKey.REVOCATIONS, {"a": Revocation("a", DATE)})
    contract.migrate()
    assert contract.verify("a") == {"status": "revoked", "since": DATE}
    assert contract.verify("b") == {"status": "valid"}
    assert not any(storage.has(key) for key in (IssuanceKey.VCS, IssuanceKey.REVOCATIONS))


def test_migrate_twice_should_fail(initialized):
    _fails_with(IssuanceErrorCode.VCS_ALREADY_MIGRATED, initialized[-1].migrate)


def test_status_constructors():
    assert VCStatus.revoked(DATE) == VCStatus(VCStatusKind.REVOKED, DATE)
    assert VCStatus.valid().since is None
    assert VCStatus.invalid().kind is VCStatusKind.INVALID