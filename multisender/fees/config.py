"""Fee configuration for the batch-transfer contracts."""

from dataclasses import dataclass

from multisender.constants import (
    DEFAULT_FEE_PERCENTAGE,
    FEE_SCALE,
    MAX_FEE_PERCENTAGE,
    MAX_RECIPIENTS,
)


@dataclass(frozen=True)
class FeeConfig:
    """Centralized configuration for fee calculation and batch limits.

    Attributes:
        fee_scale: Denominator of the fee percentage (10_000 = hundredths of a percent)
        max_fee_percentage: Ceiling enforced by set_fee_percentage (100 = 1%)
        default_fee_percentage: Fee percentage a new contract starts with
        max_recipients: Largest batch accepted by one call
    """

    fee_scale: int = FEE_SCALE
    max_fee_percentage: int = MAX_FEE_PERCENTAGE
    default_fee_percentage: int = DEFAULT_FEE_PERCENTAGE
    max_recipients: int = MAX_RECIPIENTS

    def __post_init__(self) -> None:
        if self.fee_scale <= 0:
            raise ValueError(f"fee_scale must be positive, got {self.fee_scale}")
        if not 0 <= self.default_fee_percentage <= self.max_fee_percentage:
            raise ValueError(
                f"default_fee_percentage {self.default_fee_percentage} outside "
                f"[0, {self.max_fee_percentage}]"
            )
        if self.max_recipients <= 0:
            raise ValueError(f"max_recipients must be positive, got {self.max_recipients}")


# MultiSender: 0.1% by default
DEFAULT_FEE_CONFIG = FeeConfig()

# MultiTokenSender: fee-aware but free until the owner sets a rate
TOKEN_SENDER_FEE_CONFIG = FeeConfig(default_fee_percentage=0)
