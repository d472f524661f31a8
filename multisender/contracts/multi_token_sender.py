"""MultiTokenSender: ERC20-only batch transfer unit.

Same token path, admin surface and recovery as MultiSender, without native
payouts. Its fee policy starts at 0%, so senders only approve the batch
total until the owner sets a rate.
"""

from multisender.contracts.base import BatchSender
from multisender.fees import TOKEN_SENDER_FEE_CONFIG


class MultiTokenSender(BatchSender):
    NAME = "MultiTokenSender"
    CODE_VERSION = "1.0.0"
    FEE_CONFIG = TOKEN_SENDER_FEE_CONFIG
