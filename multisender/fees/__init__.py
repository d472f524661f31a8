"""Fee handling for the batch-transfer contracts.

This module provides:
- FeeConfig: scale, ceiling, default rate and batch limit
- FeePolicy: the per-contract rate, collector and VIP set
- calculate_fee: the pure fee formula, shared with the quote API

Usage:
    from multisender.fees import FeePolicy, DEFAULT_FEE_CONFIG

    policy = FeePolicy(DEFAULT_FEE_CONFIG, collector=owner, label="MultiSender")
    quote = policy.quote(sender, total_amount)
    pay = quote.required_amount
"""

from multisender.fees.config import DEFAULT_FEE_CONFIG, TOKEN_SENDER_FEE_CONFIG, FeeConfig
from multisender.fees.policy import FeePolicy, FeeQuote, calculate_fee

__all__ = [
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    "TOKEN_SENDER_FEE_CONFIG",
    "FeePolicy",
    "FeeQuote",
    "calculate_fee",
]
