"""MultiSender - atomic batch transfers with fees and deterministic deployment."""

from multisender.chain import Ledger
from multisender.contracts import MultiSender, MultiSenderFactory, MultiTokenSender
from multisender.tokens import ERC20Token

__version__ = "1.0.0"
__all__ = [
    "ERC20Token",
    "Ledger",
    "MultiSender",
    "MultiSenderFactory",
    "MultiTokenSender",
    "__version__",
]
