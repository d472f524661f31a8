"""In-memory host ledger.

The ledger owns native balances, deployed contracts and the event log, and
provides the all-or-nothing call semantics the contracts rely on:

    with ledger.transaction():
        ...  # any exception raised here restores the state seen on entry

Transactions nest. A failing inner scope only undoes its own effects, which
is how a caught sub-call failure behaves on the EVM; a failure that escapes
the outermost scope undoes the whole call.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from multisender.chain.contract import Contract, Msg
from multisender.constants import DEFAULT_CHAIN_ID
from multisender.create2 import create2_address, create_address
from multisender.errors import DeploymentFailed, InsufficientFundsError, Revert
from multisender.models.events import Event
from multisender.models.types import normalize_address, normalize_salt
from multisender.safe_int import S

logger = structlog.get_logger()

C = TypeVar("C", bound=Contract)
E = TypeVar("E", bound=Event)


@dataclass(frozen=True)
class LogEntry:
    """An event together with the address of the contract that emitted it."""

    emitter: str
    event: Event


@dataclass
class _Snapshot:
    balances: dict[str, int]
    nonces: dict[str, int]
    contracts: dict[str, Contract]
    storage: dict[str, dict[str, Any]]
    event_count: int


class Ledger:
    """World state for one independent chain.

    Attributes:
        chain_id: Identifier of this chain (informational)
        events: Ordered log of events emitted by committed calls
    """

    def __init__(self, chain_id: int = DEFAULT_CHAIN_ID) -> None:
        self.chain_id = chain_id
        self.events: list[LogEntry] = []
        self._balances: dict[str, int] = {}
        # Counts contract creations per account; drives CREATE addresses
        self._nonces: dict[str, int] = {}
        self._contracts: dict[str, Contract] = {}
        self._scopes: list[_Snapshot] = []

    # --- Accounts ---

    def balance(self, address: str) -> int:
        """Native balance of an account."""
        return self._balances.get(normalize_address(address), 0)

    def set_balance(self, address: str, amount: int) -> None:
        """Set an account's native balance (genesis allocation / test funding)."""
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        self._balances[normalize_address(address, validate=True)] = amount

    def nonce(self, address: str) -> int:
        return self._nonces.get(normalize_address(address), 0)

    def get_code(self, address: str) -> Contract | None:
        """Return the contract deployed at an address, or None for plain accounts."""
        return self._contracts.get(normalize_address(address))

    def is_contract(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    # --- Native value ---

    def move_native(self, sender: str, to: str, amount: int) -> None:
        """Move native value between accounts without running any receiver code.

        Raises:
            Uint256Overflow: If amount is negative or above the uint256 range
            InsufficientFundsError: If sender's balance is below amount
        """
        amount = S(amount).value
        sender = normalize_address(sender)
        to = normalize_address(to)
        available = self._balances.get(sender, 0)
        if available < amount:
            raise InsufficientFundsError(
                f"insufficient native balance: {sender} has {available}, needs {amount}"
            )
        self._balances[sender] = available - amount
        self._balances[to] = self._balances.get(to, 0) + amount

    def send_native(self, sender: str, to: str, amount: int) -> None:
        """Send native value, running the receiver's code if it is a contract.

        Runs in its own scope: if the receiver rejects the payment the value
        stays with the sender and the Revert propagates.
        """
        with self.transaction():
            self.move_native(sender, to, amount)
            receiver = self.get_code(to)
            if receiver is not None:
                self.touch(receiver)
                receiver.receive(Msg(sender=normalize_address(sender), value=amount))

    # --- Deployment ---

    def deploy(self, contract_cls: type[C], *, deployer: str, **kwargs: Any) -> C:
        """Deploy a contract at the deployer's next CREATE address."""
        deployer = normalize_address(deployer, validate=True)
        with self.transaction():
            address = create_address(deployer, self.nonce(deployer))
            self._nonces[deployer] = self.nonce(deployer) + 1
            return self._install(contract_cls, address, deployer, kwargs)

    def deploy_create2(
        self, contract_cls: type[C], *, deployer: str, salt: str | bytes, **kwargs: Any
    ) -> C:
        """Deploy a contract at its CREATE2 address for (deployer, salt).

        Raises:
            DeploymentFailed: If the address is already occupied
        """
        deployer = normalize_address(deployer, validate=True)
        with self.transaction():
            address = create2_address(deployer, normalize_salt(salt), contract_cls.init_code_hash())
            self._nonces[deployer] = self.nonce(deployer) + 1
            return self._install(contract_cls, address, deployer, kwargs)

    def _install(
        self, contract_cls: type[C], address: str, deployer: str, kwargs: dict[str, Any]
    ) -> C:
        if address in self._contracts:
            raise DeploymentFailed(f"address {address} already has code")
        contract = contract_cls(self, address, deployer=deployer, **kwargs)
        self._contracts[address] = contract
        # EIP-161: new contract accounts start at nonce 1
        self._nonces[address] = 1
        logger.debug(
            "contract_deployed",
            contract=contract_cls.__name__,
            address=address,
            deployer=deployer,
        )
        return contract

    # --- Events ---

    def emit(self, emitter: str, event: Event) -> None:
        self.events.append(LogEntry(emitter=normalize_address(emitter), event=event))

    def events_of(self, event_type: type[E], emitter: str | None = None) -> list[E]:
        """All logged events of a type, optionally filtered by emitter."""
        wanted = normalize_address(emitter) if emitter is not None else None
        return [
            entry.event
            for entry in self.events
            if isinstance(entry.event, event_type) and (wanted is None or entry.emitter == wanted)
        ]

    # --- Transactions ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Scope whose state changes are undone if any exception escapes it.

        Native balances, nonces and the set of deployed contracts are copied
        on entry. Contract storage is copied lazily, the first time a contract
        is touched inside the scope.
        """
        scope = _Snapshot(
            balances=dict(self._balances),
            nonces=dict(self._nonces),
            contracts=dict(self._contracts),
            storage={},
            event_count=len(self.events),
        )
        self._scopes.append(scope)
        try:
            yield
        except BaseException as err:
            self._restore(scope)
            if len(self._scopes) == 1:
                logger.warning(
                    "transaction_reverted",
                    error=type(err).__name__,
                    reason=getattr(err, "reason", str(err)),
                )
            raise
        finally:
            self._scopes.pop()

    def touch(self, contract: Contract) -> None:
        """Record a contract's storage in every open scope that has not seen it yet.

        Must be called before the contract's storage changes inside a scope;
        the call wrapper and native payouts do this for the callee.
        """
        pending = [
            scope
            for scope in self._scopes
            if contract.address in scope.contracts and contract.address not in scope.storage
        ]
        if not pending:
            return
        # Contracts keep their storage as plain attributes. Copy those, but
        # keep the ledger and other contracts as shared references.
        shared: dict[int, Any] = {id(self): self}
        for other in self._contracts.values():
            shared[id(other)] = other
        for scope in pending:
            scope.storage[contract.address] = copy.deepcopy(vars(contract), dict(shared))

    def _restore(self, snapshot: _Snapshot) -> None:
        self._balances = snapshot.balances
        self._nonces = snapshot.nonces
        self._contracts = snapshot.contracts
        for address, saved in snapshot.storage.items():
            state = vars(self._contracts[address])
            state.clear()
            state.update(saved)
        del self.events[snapshot.event_count :]


__all__ = ["Ledger", "LogEntry"]
