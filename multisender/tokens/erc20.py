"""Reference ERC20 token with OpenZeppelin error semantics.

Used as the default token on local ledgers. Failures raise the
OpenZeppelin custom errors (ERC20InsufficientBalance, ...); successful
calls return True. Anyone may mint, as with the usual test mock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from multisender.chain.contract import Contract, Msg, external
from multisender.constants import ZERO_ADDRESS
from multisender.errors import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    ERC20InvalidReceiver,
    ERC20InvalidSpender,
)
from multisender.models.events import Approval, Transfer
from multisender.models.types import normalize_address
from multisender.safe_int import S

if TYPE_CHECKING:
    from multisender.chain.ledger import Ledger


class ERC20Token(Contract):
    """Mintable ERC20 token.

    Attributes:
        name: Token name
        symbol: Token symbol
        decimals: Display decimals
        total_supply: Sum of all balances
    """

    NAME = "ERC20"

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        *,
        deployer: str,
        name: str = "Test Token",
        symbol: str = "TEST",
        initial_supply: int = 0,
        decimals: int = 18,
    ) -> None:
        super().__init__(ledger, address, deployer=deployer)
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        if initial_supply:
            self._mint(deployer, initial_supply)

    # --- Views ---

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- External ---

    @external
    def transfer(self, msg: Msg, to: str, amount: int) -> bool | None:
        self._transfer(msg.sender, normalize_address(to), amount)
        return True

    @external
    def transfer_from(self, msg: Msg, from_address: str, to: str, amount: int) -> bool | None:
        from_address = normalize_address(from_address)
        self._spend_allowance(from_address, msg.sender, amount)
        self._transfer(from_address, normalize_address(to), amount)
        return True

    @external
    def approve(self, msg: Msg, spender: str, amount: int) -> bool | None:
        self._approve(msg.sender, normalize_address(spender), amount)
        return True

    @external
    def mint(self, msg: Msg, to: str, amount: int) -> None:
        self._mint(normalize_address(to), amount)

    # --- Internal ---

    def _transfer(self, sender: str, to: str, amount: int) -> None:
        amount = S(amount).value
        if to == ZERO_ADDRESS:
            raise ERC20InvalidReceiver(ZERO_ADDRESS)
        balance = self.balance_of(sender)
        if balance < amount:
            raise ERC20InsufficientBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[to] = (S(self.balance_of(to)) + amount).value
        self.emit(Transfer(from_address=sender, to_address=to, value=amount))

    def _mint(self, to: str, amount: int) -> None:
        amount = S(amount).value
        to = normalize_address(to)
        if to == ZERO_ADDRESS:
            raise ERC20InvalidReceiver(ZERO_ADDRESS)
        self.total_supply = (S(self.total_supply) + amount).value
        self._balances[to] = self.balance_of(to) + amount
        self.emit(Transfer(from_address=ZERO_ADDRESS, to_address=to, value=amount))

    def _approve(self, owner: str, spender: str, amount: int) -> None:
        amount = S(amount).value
        if spender == ZERO_ADDRESS:
            raise ERC20InvalidSpender(ZERO_ADDRESS)
        self._allowances[(owner, spender)] = amount
        self.emit(Approval(owner=owner, spender=spender, value=amount))

    def _spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        amount = S(amount).value
        current = self.allowance(owner, spender)
        if current < amount:
            raise ERC20InsufficientAllowance(spender, current, amount)
        self._allowances[(owner, spender)] = current - amount
