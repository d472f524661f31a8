"""Revert reasons raised by the contracts and the host ledger.

Every failure that aborts a call derives from Revert. Raising one inside
Ledger.transaction() undoes all state changes made in that scope.
"""

from __future__ import annotations


class Revert(Exception):
    """Base class for errors that abort a call and roll back its effects."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason)
        self.reason = reason


class ValidationError(Revert):
    """Input rejected before any value moved."""

    pass


class OwnableUnauthorizedAccount(Revert):
    """Caller is not the owner of the contract."""

    def __init__(self, account: str) -> None:
        super().__init__(f"OwnableUnauthorizedAccount({account})")
        self.account = account


class OwnableInvalidOwner(Revert):
    """New owner is the zero address."""

    def __init__(self, owner: str) -> None:
        super().__init__(f"OwnableInvalidOwner({owner})")
        self.owner = owner


class InsufficientFundsError(Revert):
    """Not enough attached value, balance or allowance."""

    pass


class ERC20InsufficientBalance(InsufficientFundsError):
    """Token sender balance is below the transfer amount."""

    def __init__(self, sender: str, balance: int, needed: int) -> None:
        super().__init__(f"ERC20InsufficientBalance({sender}, {balance}, {needed})")
        self.sender = sender
        self.balance = balance
        self.needed = needed


class ERC20InsufficientAllowance(InsufficientFundsError):
    """Spender allowance is below the transfer amount."""

    def __init__(self, spender: str, allowance: int, needed: int) -> None:
        super().__init__(f"ERC20InsufficientAllowance({spender}, {allowance}, {needed})")
        self.spender = spender
        self.allowance = allowance
        self.needed = needed


class ERC20InvalidReceiver(Revert):
    """Token transfer to the zero address."""

    def __init__(self, receiver: str) -> None:
        super().__init__(f"ERC20InvalidReceiver({receiver})")
        self.receiver = receiver


class ERC20InvalidSpender(Revert):
    """Approval for the zero address."""

    def __init__(self, spender: str) -> None:
        super().__init__(f"ERC20InvalidSpender({spender})")
        self.spender = spender


class SafeERC20FailedOperation(Revert):
    """Token call failed, returned false, or moved the wrong amount."""

    def __init__(self, token: str, detail: str = "") -> None:
        reason = f"SafeERC20FailedOperation({token})"
        if detail:
            reason = f"{reason}: {detail}"
        super().__init__(reason)
        self.token = token


class NativeTransferFailed(Revert):
    """A native-currency payout could not be delivered."""

    pass


class ReentrancyGuardReentrantCall(Revert):
    """A non-reentrant entry point was re-entered during its own execution."""

    def __init__(self) -> None:
        super().__init__("ReentrancyGuardReentrantCall()")


class DeploymentFailed(Revert):
    """Contract creation failed (address already in use)."""

    pass
