"""Fee policy: rate, collector and VIP exemptions.

FeePolicy is the configuration object a batch contract consults on every
transfer. It validates its own invariants (rate ceiling, non-zero
collector); the owning contract performs the authorization check before
calling any mutator.

Fee formula:
    fee = amount * fee_percentage // fee_scale

With the default scale of 10_000, a rate of 10 charges 0.1%.
"""

from __future__ import annotations

from dataclasses import dataclass

from multisender.constants import ZERO_ADDRESS
from multisender.errors import ValidationError
from multisender.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from multisender.models.types import normalize_address
from multisender.safe_int import S


def calculate_fee(amount: int, fee_percentage: int, config: FeeConfig = DEFAULT_FEE_CONFIG) -> int:
    """Fee owed on amount at fee_percentage (truncating integer division).

    Raises:
        Uint256Overflow: If amount is negative or the product leaves uint256
    """
    return ((S(amount) * fee_percentage) // config.fee_scale).value


@dataclass(frozen=True)
class FeeQuote:
    """Fee and total payment required for a batch."""

    total_amount: int
    fee: int

    @property
    def required_amount(self) -> int:
        return (S(self.total_amount) + self.fee).value


class FeePolicy:
    """Mutable fee settings of one batch contract.

    Attributes:
        config: Scale, ceiling and defaults
        fee_percentage: Current rate in units of 1/fee_scale
        fee_collector: Address receiving collected fees
    """

    def __init__(self, config: FeeConfig, collector: str, *, label: str) -> None:
        self.config = config
        self.label = label
        self.fee_percentage = config.default_fee_percentage
        self.fee_collector = self._valid_collector(collector)
        self._vips: set[str] = set()

    def calculate_fee(self, amount: int) -> int:
        return calculate_fee(amount, self.fee_percentage, self.config)

    def is_vip(self, account: str) -> bool:
        return normalize_address(account) in self._vips

    def quote(self, sender: str, total_amount: int) -> FeeQuote:
        """Fee for a batch of total_amount sent by sender (zero for VIPs)."""
        fee = 0 if self.is_vip(sender) else self.calculate_fee(total_amount)
        return FeeQuote(total_amount=total_amount, fee=fee)

    def set_fee_percentage(self, fee_percentage: int) -> int:
        """Replace the rate; returns the previous one.

        Raises:
            ValidationError: If the rate is negative or above the ceiling
        """
        if fee_percentage > self.config.max_fee_percentage:
            raise ValidationError(f"{self.label}: fee percentage too high")
        if fee_percentage < 0:
            raise ValidationError(f"{self.label}: fee percentage cannot be negative")
        previous = self.fee_percentage
        self.fee_percentage = fee_percentage
        return previous

    def set_fee_collector(self, collector: str) -> str:
        """Replace the collector; returns the previous one."""
        previous = self.fee_collector
        self.fee_collector = self._valid_collector(collector)
        return previous

    def add_vip(self, account: str) -> bool:
        """Exempt account from fees. Returns False if it already was."""
        account = self._valid_account(account)
        if account in self._vips:
            return False
        self._vips.add(account)
        return True

    def remove_vip(self, account: str) -> bool:
        """Remove an exemption. Returns False if account was not a VIP."""
        account = normalize_address(account)
        if account not in self._vips:
            return False
        self._vips.discard(account)
        return True

    def _valid_collector(self, collector: str) -> str:
        try:
            collector = normalize_address(collector, validate=True)
        except ValueError as err:
            raise ValidationError(f"{self.label}: invalid fee collector") from err
        if collector == ZERO_ADDRESS:
            raise ValidationError(f"{self.label}: fee collector cannot be zero address")
        return collector

    def _valid_account(self, account: str) -> str:
        try:
            account = normalize_address(account, validate=True)
        except ValueError as err:
            raise ValidationError(f"{self.label}: invalid address") from err
        if account == ZERO_ADDRESS:
            raise ValidationError(f"{self.label}: VIP cannot be zero address")
        return account
