"""ERC20 interface as seen by the batch contracts.

Token implementations are black boxes. Return conventions vary: conforming
tokens return True, legacy tokens return None (no return value), and some
return False instead of raising. SafeTransfer normalizes all of them.
"""

from typing import Protocol


class ERC20(Protocol):
    """Structural interface of an ERC20 token contract."""

    address: str

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def transfer(self, to: str, amount: int, *, caller: str) -> bool | None: ...

    def transfer_from(
        self, from_address: str, to: str, amount: int, *, caller: str
    ) -> bool | None: ...

    def approve(self, spender: str, amount: int, *, caller: str) -> bool | None: ...
