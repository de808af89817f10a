"""A small in-memory host: addresses, authorisation, storage and contract calls."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Set

from .errors import AuthorizationError, HostError

_MISSING = object()


@dataclass(frozen=True, order=True)
class Address:
    """An account or contract address."""

    value: str

    def __str__(self) -> str:
        return self.value


class Storage:
    """A key-value store belonging to one contract."""

    def __init__(self) -> None:
        self._entries: Dict[Hashable, Any] = {}

    def has(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable, default: Any = _MISSING) -> Any:
        """Return the value under key, the default if given, or raise HostError."""
        try:
            return self._entries[key]
        except KeyError:
            if default is _MISSING:
                raise HostError(f"HostError: no value stored for {key!r}") from None
            return default

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = value

    def remove(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class Contract:
    """Base class for contracts registered with an Env."""

    def __init__(self, env: "Env", address: Address) -> None:
        self.env = env
        self.address = address
        self.instance_storage = Storage()
        self.persistent_storage = Storage()
        self.wasm_hash: bytes | None = None

    def update_current_contract_wasm(self, new_wasm_hash: bytes) -> None:
        """Replace the contract's code hash; it must be 32 bytes long."""
        hash_bytes = bytes(new_wasm_hash)
        if len(hash_bytes) != 32:
            raise ValueError(f"wasm hash must be 32 bytes, got {len(hash_bytes)}")
        self.wasm_hash = hash_bytes


class Env:
    """The host environment in which contracts run."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._contracts: Dict[Address, Contract] = {}
        self._authorized: Set[Address] = set()
        self._mock_all = False
        self.auths: List[Address] = []

    def generate_address(self) -> Address:
        return Address(f"G{next(self._counter):055d}")

    def mock_all_auths(self) -> None:
        """Treat every authorisation request as granted."""
        self._mock_all = True

    def authorize(self, address: Address) -> None:
        """Grant authorisation for address from now on."""
        self._authorized.add(address)

    def require_auth(self, address: Address) -> None:
        """Check that address authorised the current call and record it."""
        if not (self._mock_all or address in self._authorized):
            raise AuthorizationError(address)
        self.auths.append(address)

    def register_contract(self, contract: Callable[["Env", Address], Contract]) -> Contract:
        """Create a contract at a fresh address and return it."""
        instance = contract(self, self.generate_address())
        self._contracts[instance.address] = instance
        return instance

    def invoke_contract(self, address: Address, function: str, *args: Any) -> Any:
        """Call a public function of the contract registered at address."""
        target = self._contracts.get(address)
        if target is None:
            raise HostError(f"HostError: no contract at {address}")
        if function.startswith("_"):
            raise HostError(f"HostError: {function!r} is not a contract function")
        method = getattr(target, function, None)
        if not callable(method):
            raise HostError(f"HostError: {function!r} is not a contract function")
        return method(*args)