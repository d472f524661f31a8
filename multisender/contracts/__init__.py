"""Batch-transfer contracts and their deterministic factory."""

from multisender.contracts.base import BatchSender
from multisender.contracts.batch import Batch, validate_batch
from multisender.contracts.factory import MultiSenderFactory, compute_multi_sender_address
from multisender.contracts.multi_sender import MultiSender
from multisender.contracts.multi_token_sender import MultiTokenSender

__all__ = [
    "Batch",
    "BatchSender",
    "MultiSender",
    "MultiSenderFactory",
    "MultiTokenSender",
    "compute_multi_sender_address",
    "validate_batch",
]
