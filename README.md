# credvault

An in-memory model of two cooperating contracts for verifiable credentials (VCs):

- **`IssuanceContract`** (`credvault.issuance`) issues credentials into an
  owner's vault. It records each credential's status: valid, revoked with a date,
  or invalid when the credential is unknown. It also verifies and revokes credentials.
- **`VaultContract`** (`credvault.vault`) keeps one vault per owner. Each vault
  has its own admin, DID and list of authorized issuers. The contract stores
  credentials from authorized issuers, lists and returns them, and moves them
  between vaults. A vault can be revoked as a whole. An optional fee can be
  charged for each stored credential through a token contract.

Both contracts run inside an `Env` (`credvault.env`). The `Env` holds each
contract's instance and persistent `Storage` and generates `Address` values. It
also tracks which addresses have authorized calls and routes calls between
registered contracts.

## Installation

```
pip install credvault
```

Python 3.10 or later; no third-party dependencies.

## Usage

```python
from credvault.env import Env
from credvault.issuance import IssuanceContract
from credvault.vault import VaultContract

env = Env()
env.mock_all_auths()  # treat every require_auth as satisfied

vault = env.register_contract(VaultContract)
issuance = env.register_contract(IssuanceContract)

owner = env.generate_address()
issuer = env.generate_address()
admin = env.generate_address()

vault.initialize(owner, "did:pkh:stellar:testnet:OWNER")
vault.authorize_issuer(owner, issuer)
issuance.initialize(admin, "did:example:issuer")

issuance.issue(owner, "vc-1", "vc-data-1", vault.address, issuer, "did:example:issuer")

vault.list_vc_ids(owner)             # ["vc-1"]
vault.get_vc(owner, "vc-1").data     # "vc-data-1"
vault.verify_vc(owner, "vc-1")       # {"status": "valid"}

issuance.revoke("vc-1", "2023-12-05T21:37:44.389Z")
issuance.verify("vc-1")              # {"status": "revoked", "since": "2023-12-05T21:37:44.389Z"}
```

`register_contract` takes a contract class, or any callable that accepts
`(env, address)`. It creates the contract at a fresh address and returns the
instance. `invoke_contract(address, function, *args)` calls a public method of
the contract registered at that address.

Without `mock_all_auths()`, an address counts as authorized only after
`env.authorize(address)`. A missing authorization raises `AuthorizationError`.
Every granted authorization is appended to `env.auths`.

## Vault operations

- `initialize(owner, did_uri)` creates the owner's vault with the owner as its
  admin. The first owner ever initialized also becomes the contract admin.
- `authorize_issuers(owner, issuers)` replaces the issuer list.
  `authorize_issuer(owner, issuer)` adds one issuer to the front of the list.
  `revoke_issuer(owner, issuer)` removes one issuer. All three need the vault
  admin's authorization and an active vault.
- `store_vc(...)` needs an active vault, an authorized issuer and the issuer's
  authorization.
- `list_vc_ids(owner)` returns ids with the most recently added first.
- `push(from_owner, to_owner, vc_id, issuer)` moves a credential between vaults.
  Only `from_owner` must authorize. The issuer must be authorized in the source
  vault, and both vaults must be active.
- `revoke_vault(owner)`, `set_admin(owner, new_admin)` and `migrate(owner)` need
  the vault admin's authorization. `migrate` moves credentials from the older
  single-list layout into keyed entries.
- `upgrade(new_wasm_hash)` needs the contract admin's authorization. It records
  a 32-byte hash, and any other length raises `ValueError`.
- `version()` returns `"0.20.0"`.

## Errors

A contract failure raises `ContractError`. Its `code` attribute holds the
numeric code of the contract that raised it:

| Issuance (`IssuanceErrorCode`) | Vault (`VaultErrorCode`) |
| --- | --- |
| 1 `ALREADY_INITIALIZED` | 1 `ALREADY_INITIALIZED` |
| 2 `VC_NOT_FOUND` | 2 `ISSUER_NOT_AUTHORIZED` |
| 3 `VC_ALREADY_REVOKED` | 3 `ISSUER_ALREADY_AUTHORIZED` |
| 4 `VCS_ALREADY_MIGRATED` | 4 `VAULT_REVOKED` |
| | 5 `VCS_ALREADY_MIGRATED` |
| | 6 `VC_NOT_FOUND` |

The message has the form `HostError: Error(Contract, #<code>)`.

`ContractError` and `AuthorizationError` both derive from `HostError`. The host
raises a plain `HostError` in three cases: reading a value that was never
stored, calling an address where no contract is registered, and calling a
function the contract does not have.

## Fees

The vault's contract admin can call
`set_fee_config(token_contract, fee_dest, fee_amount)` and
`set_fee_enabled(True)`. After that, each `store_vc` calls
`transfer(issuer, fee_dest, fee_amount)` on the contract registered at
`token_contract`.

## What it does not do

- Nothing is persisted. All state lives in the `Env` and is lost when the
  process exits.
- No token contract is included. To charge fees, register your own contract
  that defines a `transfer(from_, to, amount)` method.
- `upgrade` only records the new code hash and does not change any behaviour.
- No signatures are checked. Authorization is modelled only through
  `mock_all_auths()` and `authorize()`.

## Running the tests

```
pip install -e ".[test]"
pytest
```