"""Token interface and the reference ERC20 implementation."""

from multisender.tokens.base import ERC20
from multisender.tokens.erc20 import ERC20Token

__all__ = ["ERC20", "ERC20Token"]
