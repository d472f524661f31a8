"""Event records emitted by the contracts.

Events are appended to Ledger.events in emission order and discarded with
the rest of the state when a call reverts.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Event:
    """Base class for all events."""


@dataclass(frozen=True)
class NativeTokensSent(Event):
    sender: str
    total_amount: int
    recipient_count: int
    fee: int


@dataclass(frozen=True)
class ERC20TokensSent(Event):
    token: str
    sender: str
    total_amount: int
    recipient_count: int


@dataclass(frozen=True)
class EmergencyWithdraw(Event):
    """Owner swept stranded funds; token is the zero address for native currency."""

    token: str
    amount: int


@dataclass(frozen=True)
class MultiSenderDeployed(Event):
    salt: str
    address: str


@dataclass(frozen=True)
class OwnershipTransferred(Event):
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class FeePercentageUpdated(Event):
    old_percentage: int
    new_percentage: int


@dataclass(frozen=True)
class FeeCollectorUpdated(Event):
    old_collector: str
    new_collector: str


@dataclass(frozen=True)
class VIPAdded(Event):
    account: str


@dataclass(frozen=True)
class VIPRemoved(Event):
    account: str


@dataclass(frozen=True)
class Transfer(Event):
    """ERC20 transfer (mints come from the zero address)."""

    from_address: str
    to_address: str
    value: int


@dataclass(frozen=True)
class Approval(Event):
    owner: str
    spender: str
    value: int
