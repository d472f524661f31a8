"""Batch request validation.

Every batch entry point validates and totals the whole request before any
value moves. Checks run in a fixed order and each failure has its own
reason:

1. recipients and amounts length mismatch
2. recipients array cannot be empty
3. too many recipients (max N)
4. per index: recipient cannot be zero address, then amount must be
   greater than 0

The same function backs the /quote endpoint, so a quote accepted off-chain
is accepted by the contracts.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from multisender.constants import MAX_RECIPIENTS, ZERO_ADDRESS
from multisender.errors import ValidationError
from multisender.models.types import UINT256_MAX, normalize_address
from multisender.safe_int import S


@dataclass(frozen=True)
class Batch:
    """A validated batch: normalized recipients, amounts and their total."""

    recipients: tuple[str, ...]
    amounts: tuple[int, ...]
    total_amount: int

    @property
    def recipient_count(self) -> int:
        return len(self.recipients)

    def legs(self) -> zip[tuple[str, int]]:
        """(recipient, amount) pairs in request order."""
        return zip(self.recipients, self.amounts)


def validate_batch(
    recipients: Sequence[str],
    amounts: Sequence[int],
    *,
    label: str,
    max_recipients: int = MAX_RECIPIENTS,
) -> Batch:
    """Validate a batch request and compute its total.

    Args:
        recipients: Recipient addresses (duplicates allowed)
        amounts: Amount per recipient, aligned by index
        label: Contract name prefixed to revert reasons
        max_recipients: Largest accepted batch

    Returns:
        The validated Batch

    Raises:
        ValidationError: On the first failed check
        Uint256Overflow: If the total does not fit in uint256
    """
    if len(recipients) != len(amounts):
        raise ValidationError(f"{label}: recipients and amounts length mismatch")
    if len(recipients) == 0:
        raise ValidationError(f"{label}: recipients array cannot be empty")
    if len(recipients) > max_recipients:
        raise ValidationError(f"{label}: too many recipients (max {max_recipients})")

    normalized: list[str] = []
    total = S.zero()
    for recipient, amount in zip(recipients, amounts):
        try:
            recipient = normalize_address(recipient, validate=True)
        except ValueError as err:
            raise ValidationError(f"{label}: invalid recipient address") from err
        if recipient == ZERO_ADDRESS:
            raise ValidationError(f"{label}: recipient cannot be zero address")
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"{label}: amount must be an integer")
        if amount <= 0:
            raise ValidationError(f"{label}: amount must be greater than 0")
        if amount > UINT256_MAX:
            raise ValidationError(f"{label}: amount exceeds uint256")
        normalized.append(recipient)
        total = total + amount

    return Batch(recipients=tuple(normalized), amounts=tuple(amounts), total_amount=total.value)
