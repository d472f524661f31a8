"""MultiSender: batch payouts in native currency or ERC20 tokens.

Native batches are paid from the value attached to the call:

    required = total + fee          (fee is 0 for VIP senders)
    value >= required               otherwise the call reverts
    excess = value - required       refunded to the sender

Recipients, collector and sender are paid only after the whole batch has been
validated and totalled. Payouts to contract recipients run their receive
hook; if any of them rejects the payment the entire batch reverts.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from multisender.access import only_owner
from multisender.chain.contract import Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.contracts.base import BatchSender
from multisender.errors import InsufficientFundsError, NativeTransferFailed
from multisender.fees import DEFAULT_FEE_CONFIG
from multisender.models.events import EmergencyWithdraw, NativeTokensSent

logger = structlog.get_logger()


class MultiSender(BatchSender):
    """Batch sender for native currency and ERC20 tokens (0.1% default fee)."""

    NAME = "MultiSender"
    CODE_VERSION = "1.0.0"
    FEE_CONFIG = DEFAULT_FEE_CONFIG

    @external(payable=True, non_reentrant=True)
    def send_native_tokens(
        self, msg: Msg, recipients: Sequence[str], amounts: Sequence[int]
    ) -> None:
        """Pay amounts[i] to recipients[i] out of the attached value."""
        batch = self._validate(recipients, amounts)
        quote = self.fees.quote(msg.sender, batch.total_amount)
        required = quote.required_amount
        if msg.value < required:
            self.revert(InsufficientFundsError, "insufficient native token sent")
        excess = msg.value - required

        for recipient, amount in batch.legs():
            self._pay(recipient, amount)
        if quote.fee:
            self._pay(self.fees.fee_collector, quote.fee)
        if excess:
            self._pay(msg.sender, excess)

        self.emit(
            NativeTokensSent(
                sender=msg.sender,
                total_amount=batch.total_amount,
                recipient_count=batch.recipient_count,
                fee=quote.fee,
            )
        )
        logger.info(
            "native_batch_sent",
            contract=self.address,
            sender=msg.sender,
            total_amount=batch.total_amount,
            recipient_count=batch.recipient_count,
            fee=quote.fee,
            refund=excess,
        )

    @external(non_reentrant=True)
    def send_erc20_tokens(
        self, msg: Msg, token: str, recipients: Sequence[str], amounts: Sequence[int]
    ) -> None:
        """Same as send_tokens."""
        self._send_tokens(msg, token, recipients, amounts)

    @external
    @only_owner
    def emergency_withdraw_native(self, msg: Msg, amount: int) -> None:
        """Send amount of this contract's native balance to the owner."""
        self._check_amount(amount)
        if self.get_eth_balance() < amount:
            self.revert(InsufficientFundsError, "insufficient native balance")
        self._pay(self.owner, amount)
        self.emit(EmergencyWithdraw(token=ZERO_ADDRESS, amount=amount))
        logger.warning("emergency_withdraw", contract=self.address, token="native", amount=amount)

    def receive(self, msg: Msg) -> None:
        """Accept plain native transfers so they can be recovered by the owner."""
        logger.debug("native_received", contract=self.address, sender=msg.sender, value=msg.value)

    def _pay(self, to: str, amount: int) -> None:
        try:
            self.ledger.send_native(self.address, to, amount)
        except Exception as err:
            logger.debug(
                "native_payout_failed",
                to=to,
                amount=amount,
                reason=getattr(err, "reason", str(err)),
            )
            raise NativeTransferFailed(f"{self.NAME}: native transfer failed") from err
