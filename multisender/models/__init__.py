"""Shared types, event records and API models."""

from multisender.models.events import (
    Approval,
    EmergencyWithdraw,
    ERC20TokensSent,
    Event,
    FeeCollectorUpdated,
    FeePercentageUpdated,
    MultiSenderDeployed,
    NativeTokensSent,
    OwnershipTransferred,
    Transfer,
    VIPAdded,
    VIPRemoved,
)
from multisender.models.requests import (
    AddressRequest,
    AddressResponse,
    QuoteRequest,
    QuoteResponse,
)
from multisender.models.types import Address, Bytes32, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes32",
    "Uint256",
    # Events
    "Event",
    "NativeTokensSent",
    "ERC20TokensSent",
    "EmergencyWithdraw",
    "MultiSenderDeployed",
    "OwnershipTransferred",
    "FeePercentageUpdated",
    "FeeCollectorUpdated",
    "VIPAdded",
    "VIPRemoved",
    "Transfer",
    "Approval",
    # API models
    "QuoteRequest",
    "QuoteResponse",
    "AddressRequest",
    "AddressResponse",
]
