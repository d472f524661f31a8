"""Owner-only sweep of funds stranded in a batch contract.

Balances end up stranded through direct transfers to the contract or
through rounding; normal batches leave nothing behind.
"""

from __future__ import annotations

import structlog

from multisender.access import only_owner
from multisender.chain.contract import Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.errors import InsufficientFundsError, ValidationError
from multisender.models.events import EmergencyWithdraw
from multisender.models.types import normalize_address
from multisender.safe_transfer import resolve_token, safe_transfer

logger = structlog.get_logger()


class EmergencyRecovery:
    """Mixin for Ownable contracts holding token balances."""

    @external
    @only_owner
    def emergency_withdraw(self, msg: Msg, token: str, amount: int) -> None:
        """Send amount of token held by this contract to the owner."""
        self._check_amount(amount)
        token = normalize_address(token)
        if token == ZERO_ADDRESS:
            self.revert(ValidationError, "token address cannot be zero")
        if self.get_token_balance(token) < amount:
            self.revert(InsufficientFundsError, "insufficient token balance")

        safe_transfer(self.ledger, token, self.owner, amount, caller=self.address)
        self.emit(EmergencyWithdraw(token=token, amount=amount))
        logger.warning(
            "emergency_withdraw",
            contract=self.address,
            token=token,
            amount=amount,
            owner=self.owner,
        )

    def _check_amount(self, amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            self.revert(ValidationError, f"invalid amount {amount!r}")

    def get_token_balance(self, token: str) -> int:
        """This contract's balance of token."""
        return resolve_token(self.ledger, token).balance_of(self.address)

    def get_eth_balance(self) -> int:
        """This contract's native balance."""
        return self.ledger.balance(self.address)
