"""Uniform success/failure contract over heterogeneous ERC20 tokens.

Two behaviors are applied transparently to every token:

1. Return-value normalization (safe_transfer, safe_transfer_from).
   A call succeeds if the token returned True or nothing (legacy tokens),
   and the recipient's balance grew by exactly the requested amount.
   A False return, any other return value, a missing contract, or a short
   delivery raises SafeERC20FailedOperation. Reverts raised by the token
   itself (ERC20InsufficientAllowance, ...) propagate unchanged.

2. Zero-before-set approval (force_approve).
   Tokens such as USDT refuse to change a non-zero allowance to another
   non-zero value. If the direct approve fails, the allowance is reset to
   zero and then set to the desired value.

Nothing here swallows a failure: every inability to move funds reaches the
caller as a Revert.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from multisender.errors import Revert, SafeERC20FailedOperation
from multisender.models.types import normalize_address

if TYPE_CHECKING:
    from multisender.chain.ledger import Ledger
    from multisender.tokens.base import ERC20

logger = structlog.get_logger()


def resolve_token(ledger: Ledger, token: str) -> ERC20:
    """Return the token contract at an address.

    Raises:
        SafeERC20FailedOperation: If no contract is deployed there
    """
    contract = ledger.get_code(token)
    if contract is None:
        raise SafeERC20FailedOperation(normalize_address(token), "no contract at address")
    return contract  # type: ignore[return-value]


def safe_transfer(ledger: Ledger, token: str, to: str, amount: int, *, caller: str) -> None:
    """Transfer amount of token from caller to `to`, or raise."""
    contract = resolve_token(ledger, token)
    _call_and_verify(
        contract,
        to,
        amount,
        lambda: contract.transfer(to, amount, caller=caller),
        self_transfer=normalize_address(to) == normalize_address(caller),
    )


def safe_transfer_from(
    ledger: Ledger, token: str, from_address: str, to: str, amount: int, *, caller: str
) -> None:
    """Transfer amount of token from `from_address` to `to` using caller's allowance."""
    contract = resolve_token(ledger, token)
    _call_and_verify(
        contract,
        to,
        amount,
        lambda: contract.transfer_from(from_address, to, amount, caller=caller),
        self_transfer=normalize_address(to) == normalize_address(from_address),
    )


def force_approve(ledger: Ledger, token: str, spender: str, amount: int, *, caller: str) -> None:
    """Set caller's allowance for spender to amount, resetting to zero first if needed."""
    contract = resolve_token(ledger, token)
    if _try_approve(contract, spender, amount, caller):
        return

    logger.debug(
        "approve_requires_reset",
        token=contract.address,
        spender=normalize_address(spender),
        current=contract.allowance(caller, spender),
    )
    with ledger.transaction():
        if not _try_approve(contract, spender, 0, caller) or not _try_approve(
            contract, spender, amount, caller
        ):
            raise SafeERC20FailedOperation(contract.address, "approve failed")


def _call_and_verify(
    contract: ERC20,
    to: str,
    amount: int,
    call: Callable[[], Any],
    *,
    self_transfer: bool,
) -> None:
    before = contract.balance_of(to)
    result = call()
    if not _is_success(result):
        raise SafeERC20FailedOperation(contract.address, f"token returned {result!r}")

    # A transfer to oneself leaves the balance unchanged by definition
    if self_transfer:
        return
    received = contract.balance_of(to) - before
    if received != amount:
        logger.warning(
            "token_delivery_mismatch",
            token=contract.address,
            to=normalize_address(to),
            expected=amount,
            received=received,
        )
        raise SafeERC20FailedOperation(
            contract.address, f"recipient received {received}, expected {amount}"
        )


def _try_approve(contract: ERC20, spender: str, amount: int, caller: str) -> bool:
    try:
        result = contract.approve(spender, amount, caller=caller)
    except Revert:
        return False
    return _is_success(result)


def _is_success(result: Any) -> bool:
    # True from conforming tokens, None from tokens with no return value
    return result is None or result is True
