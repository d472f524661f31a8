"""Shared implementation of the batch-transfer contracts.

BatchSender holds the fee policy, the owner-only admin surface, emergency
recovery and the token batch path. MultiSender adds native currency;
MultiTokenSender is the token-only unit.

Token batches pull the whole amount (total + fee) from the sender first,
then push each leg. Validation and totals are computed before the pull, and
any failed leg raises, so the ledger rolls back the pull together with every
push already made.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from multisender.access import Ownable, ReentrancyGuard, only_owner
from multisender.chain.contract import Contract, Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.contracts.batch import Batch, validate_batch
from multisender.contracts.recovery import EmergencyRecovery
from multisender.errors import ValidationError
from multisender.fees import DEFAULT_FEE_CONFIG, FeeConfig, FeePolicy, FeeQuote
from multisender.models.events import (
    ERC20TokensSent,
    FeeCollectorUpdated,
    FeePercentageUpdated,
    VIPAdded,
    VIPRemoved,
)
from multisender.models.types import normalize_address
from multisender.safe_transfer import safe_transfer, safe_transfer_from

if TYPE_CHECKING:
    from multisender.chain.ledger import Ledger

logger = structlog.get_logger()


class BatchSender(EmergencyRecovery, Ownable, ReentrancyGuard, Contract):
    """Fee-aware token batch transfer with owner administration.

    The deployer becomes owner and initial fee collector.
    """

    NAME = "BatchSender"
    FEE_CONFIG: FeeConfig = DEFAULT_FEE_CONFIG

    def __init__(self, ledger: Ledger, address: str, *, deployer: str) -> None:
        super().__init__(ledger, address, deployer=deployer)
        self._init_ownable(deployer)
        self.fees = FeePolicy(self.FEE_CONFIG, collector=deployer, label=self.NAME)

    # --- Views ---

    @property
    def fee_percentage(self) -> int:
        return self.fees.fee_percentage

    @property
    def fee_collector(self) -> str:
        return self.fees.fee_collector

    def calculate_fee(self, amount: int) -> int:
        return self.fees.calculate_fee(amount)

    def is_vip(self, account: str) -> bool:
        return self.fees.is_vip(account)

    # --- Token batches ---

    @external(non_reentrant=True)
    def send_tokens(
        self, msg: Msg, token: str, recipients: Sequence[str], amounts: Sequence[int]
    ) -> None:
        """Send amounts[i] of token to recipients[i], charging the sender's fee."""
        self._send_tokens(msg, token, recipients, amounts)

    def _send_tokens(
        self, msg: Msg, token: str, recipients: Sequence[str], amounts: Sequence[int]
    ) -> None:
        token = normalize_address(token)
        if token == ZERO_ADDRESS:
            self.revert(ValidationError, "token address cannot be zero")
        batch = self._validate(recipients, amounts)
        quote = self.fees.quote(msg.sender, batch.total_amount)

        # Pull everything first; the contract holds the funds only for the
        # rest of this call.
        safe_transfer_from(
            self.ledger, token, msg.sender, self.address, quote.required_amount, caller=self.address
        )
        for recipient, amount in batch.legs():
            safe_transfer(self.ledger, token, recipient, amount, caller=self.address)
        if quote.fee:
            safe_transfer(self.ledger, token, self.fees.fee_collector, quote.fee, caller=self.address)

        self.emit(
            ERC20TokensSent(
                token=token,
                sender=msg.sender,
                total_amount=batch.total_amount,
                recipient_count=batch.recipient_count,
            )
        )
        logger.info(
            "token_batch_sent",
            contract=self.address,
            token=token,
            sender=msg.sender,
            total_amount=batch.total_amount,
            recipient_count=batch.recipient_count,
            fee=quote.fee,
        )

    def _validate(self, recipients: Sequence[str], amounts: Sequence[int]) -> Batch:
        return validate_batch(
            recipients,
            amounts,
            label=self.NAME,
            max_recipients=self.fees.config.max_recipients,
        )

    def quote(self, sender: str, recipients: Sequence[str], amounts: Sequence[int]) -> FeeQuote:
        """Validate a batch and return the payment it would require from sender."""
        batch = self._validate(recipients, amounts)
        return self.fees.quote(sender, batch.total_amount)

    # --- Admin ---

    @external
    @only_owner
    def set_fee_percentage(self, msg: Msg, fee_percentage: int) -> None:
        previous = self.fees.set_fee_percentage(fee_percentage)
        self.emit(FeePercentageUpdated(old_percentage=previous, new_percentage=fee_percentage))
        logger.info("fee_percentage_updated", contract=self.address, old=previous, new=fee_percentage)

    @external
    @only_owner
    def set_fee_collector(self, msg: Msg, collector: str) -> None:
        previous = self.fees.set_fee_collector(collector)
        self.emit(FeeCollectorUpdated(old_collector=previous, new_collector=self.fees.fee_collector))
        logger.info(
            "fee_collector_updated",
            contract=self.address,
            old=previous,
            new=self.fees.fee_collector,
        )

    @external
    @only_owner
    def add_vip(self, msg: Msg, account: str) -> None:
        if self.fees.add_vip(account):
            self.emit(VIPAdded(account=normalize_address(account)))

    @external
    @only_owner
    def remove_vip(self, msg: Msg, account: str) -> None:
        if self.fees.remove_vip(account):
            self.emit(VIPRemoved(account=normalize_address(account)))
