"""Base class and call decorator for contracts living on a Ledger.

A contract keeps its storage as plain instance attributes; the ledger
snapshots them the first time a call enters the contract. Public
state-changing entry points are wrapped with @external, which:

- takes the caller (and attached native value) as keyword arguments,
- runs the body inside a ledger transaction, so a failure anywhere undoes
  every change made by the call,
- credits attached value to the contract before the body runs (payable),
- optionally rejects re-entry while the call is in progress.

    class Counter(Contract):
        @external
        def bump(self, msg: Msg, by: int) -> None:
            ...

    counter.bump(3, caller=alice)
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

from multisender.errors import NativeTransferFailed, Revert
from multisender.hashing import keccak256
from multisender.models.events import Event
from multisender.models.types import normalize_address

if TYPE_CHECKING:
    from multisender.chain.ledger import Ledger

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class Msg:
    """Call context: who is calling and how much native value is attached."""

    sender: str
    value: int = 0


class Contract:
    """A contract account on a Ledger.

    Attributes:
        NAME: Contract name, used as the prefix of revert reasons
        CODE_VERSION: Bumped whenever behavior changes; part of the creation code
        ledger: The ledger this contract is deployed on
        address: Lowercase contract address
    """

    NAME = "Contract"
    CODE_VERSION = "1"

    def __init__(self, ledger: Ledger, address: str, *, deployer: str) -> None:
        self.ledger = ledger
        self.address = normalize_address(address)

    @classmethod
    def creation_code(cls) -> bytes:
        """Deterministic creation code identifying this contract's implementation.

        Depends only on the class identity and CODE_VERSION, never on
        deployer or environment, so CREATE2 addresses are reproducible.
        """
        return f"{cls.__module__}.{cls.__qualname__}@{cls.CODE_VERSION}".encode()

    @classmethod
    def init_code_hash(cls) -> bytes:
        return keccak256(cls.creation_code())

    def emit(self, event: Event) -> None:
        self.ledger.emit(self.address, event)

    def revert(self, error_cls: type[Revert], reason: str) -> NoReturn:
        """Raise error_cls with the reason prefixed by the contract name."""
        raise error_cls(f"{self.NAME}: {reason}")

    def receive(self, msg: Msg) -> None:
        """Handle plain native value sent to this contract.

        Contracts without a receive hook reject the payment.
        """
        raise NativeTransferFailed(f"{self.NAME}: cannot receive native value")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


def external(
    func: F | None = None, *, payable: bool = False, non_reentrant: bool = False
) -> Any:
    """Mark a contract method as an external entry point.

    The wrapped method is called as method(*args, caller=..., value=...) and
    receives a Msg as its first argument after self.
    """

    def decorate(method: F) -> F:
        @functools.wraps(method)
        def wrapper(self: Any, *args: Any, caller: str, value: int = 0, **kwargs: Any) -> Any:
            msg = Msg(sender=normalize_address(caller, validate=True), value=value)
            if value < 0:
                raise ValueError(f"Attached value cannot be negative: {value}")
            if value and not payable:
                self.revert(Revert, f"{method.__name__} is not payable")

            with self.ledger.transaction():
                self.ledger.touch(self)
                if non_reentrant:
                    self._reentrancy_enter()
                try:
                    if value:
                        self.ledger.move_native(msg.sender, self.address, value)
                    return method(self, msg, *args, **kwargs)
                finally:
                    if non_reentrant:
                        self._reentrancy_exit()

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorate(func)
    return decorate
