"""Single-owner authorization and re-entry protection.

Both are mixins for Contract subclasses. Ownership is checked at the call
boundary with @only_owner, placed under @external:

    @external
    @only_owner
    def set_fee_percentage(self, msg: Msg, bps: int) -> None: ...
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from multisender.chain.contract import Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.errors import (
    OwnableInvalidOwner,
    OwnableUnauthorizedAccount,
    ReentrancyGuardReentrantCall,
)
from multisender.models.events import OwnershipTransferred
from multisender.models.types import normalize_address

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


def only_owner(method: F) -> F:
    """Reject callers other than the current owner before the body runs."""

    @functools.wraps(method)
    def wrapper(self: Ownable, msg: Msg, *args: Any, **kwargs: Any) -> Any:
        self._check_owner(msg.sender)
        return method(self, msg, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class Ownable:
    """Single privileged owner, transferable only by the owner itself."""

    owner: str

    def _init_ownable(self, initial_owner: str) -> None:
        initial_owner = normalize_address(initial_owner, validate=True)
        if initial_owner == ZERO_ADDRESS:
            raise OwnableInvalidOwner(ZERO_ADDRESS)
        self.owner = ZERO_ADDRESS
        self._transfer_ownership(initial_owner)

    def _check_owner(self, account: str) -> None:
        if account != self.owner:
            raise OwnableUnauthorizedAccount(account)

    @external
    @only_owner
    def transfer_ownership(self, msg: Msg, new_owner: str) -> None:
        """Hand ownership to new_owner (owner only, zero address rejected)."""
        new_owner = normalize_address(new_owner, validate=True)
        if new_owner == ZERO_ADDRESS:
            raise OwnableInvalidOwner(ZERO_ADDRESS)
        self._transfer_ownership(new_owner)

    def _transfer_ownership(self, new_owner: str) -> None:
        previous = self.owner
        self.owner = new_owner
        self.emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))  # type: ignore[attr-defined]
        logger.info("ownership_transferred", previous_owner=previous, new_owner=new_owner)


class ReentrancyGuard:
    """Lock flag consulted by @external(non_reentrant=True)."""

    _entered: bool = False

    def _reentrancy_enter(self) -> None:
        if self._entered:
            raise ReentrancyGuardReentrantCall()
        self._entered = True

    def _reentrancy_exit(self) -> None:
        self._entered = False
