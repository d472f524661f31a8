"""Tests for the reference ERC20 token."""

import pytest

from multisender.constants import ETHER, ZERO_ADDRESS
from multisender.errors import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    ERC20InvalidReceiver,
    ERC20InvalidSpender,
)
from multisender.models.events import Approval, Transfer
from multisender.safe_int import Uint256Overflow
from multisender.tokens import ERC20Token
from tests.helpers import OWNER, USER1, USER2


@pytest.fixture
def bare_token(ledger) -> ERC20Token:
    return ledger.deploy(
        ERC20Token, deployer=OWNER, name="Test Token", symbol="TEST", initial_supply=1_000 * ETHER
    )


class TestMetadata:
    def test_basic_information(self, bare_token):
        assert bare_token.name == "Test Token"
        assert bare_token.symbol == "TEST"
        assert bare_token.decimals == 18
        assert bare_token.total_supply == 1_000 * ETHER
        assert bare_token.balance_of(OWNER) == 1_000 * ETHER

    def test_mint(self, ledger, bare_token):
        bare_token.mint(USER1, 5 * ETHER, caller=USER1)
        assert bare_token.balance_of(USER1) == 5 * ETHER
        assert bare_token.total_supply == 1_005 * ETHER
        assert ledger.events_of(Transfer)[-1] == Transfer(
            from_address=ZERO_ADDRESS, to_address=USER1, value=5 * ETHER
        )


class TestTransfer:
    def test_transfer(self, ledger, bare_token):
        assert bare_token.transfer(USER1, 10, caller=OWNER) is True
        assert bare_token.balance_of(USER1) == 10
        assert ledger.events_of(Transfer)[-1] == Transfer(
            from_address=OWNER, to_address=USER1, value=10
        )

    def test_insufficient_balance(self, bare_token):
        with pytest.raises(ERC20InsufficientBalance) as excinfo:
            bare_token.transfer(USER2, 1, caller=USER1)
        assert excinfo.value.balance == 0
        assert excinfo.value.needed == 1

    def test_zero_receiver(self, bare_token):
        with pytest.raises(ERC20InvalidReceiver):
            bare_token.transfer(ZERO_ADDRESS, 1, caller=OWNER)

    def test_negative_amount_rejected(self, bare_token):
        """A negative transfer cannot take tokens from the recipient."""
        bare_token.transfer(USER2, 5 * ETHER, caller=OWNER)
        with pytest.raises(Uint256Overflow):
            bare_token.transfer(USER2, -5 * ETHER, caller=USER1)
        assert bare_token.balance_of(USER1) == 0
        assert bare_token.balance_of(USER2) == 5 * ETHER

    def test_non_integer_amount_rejected(self, bare_token):
        with pytest.raises(TypeError):
            bare_token.transfer(USER2, 1.5, caller=OWNER)
        assert bare_token.balance_of(USER2) == 0

    def test_negative_mint_rejected(self, bare_token):
        with pytest.raises(Uint256Overflow):
            bare_token.mint(USER1, -1, caller=USER1)
        assert bare_token.total_supply == 1_000 * ETHER


class TestAllowance:
    def test_approve(self, ledger, bare_token):
        assert bare_token.approve(USER1, 50, caller=OWNER) is True
        assert bare_token.allowance(OWNER, USER1) == 50
        assert ledger.events_of(Approval)[-1] == Approval(owner=OWNER, spender=USER1, value=50)

    def test_zero_spender(self, bare_token):
        with pytest.raises(ERC20InvalidSpender):
            bare_token.approve(ZERO_ADDRESS, 1, caller=OWNER)

    def test_transfer_from(self, bare_token):
        bare_token.approve(USER1, 50, caller=OWNER)
        bare_token.transfer_from(OWNER, USER2, 30, caller=USER1)
        assert bare_token.balance_of(USER2) == 30
        assert bare_token.allowance(OWNER, USER1) == 20

    def test_transfer_from_insufficient_allowance(self, bare_token):
        bare_token.approve(USER1, 5, caller=OWNER)
        with pytest.raises(ERC20InsufficientAllowance) as excinfo:
            bare_token.transfer_from(OWNER, USER2, 6, caller=USER1)
        assert excinfo.value.allowance == 5
        assert bare_token.allowance(OWNER, USER1) == 5

    def test_failed_transfer_from_keeps_allowance(self, bare_token):
        """Allowance spent before a failing balance check is restored."""
        bare_token.approve(OWNER, 10, caller=USER1)
        with pytest.raises(ERC20InsufficientBalance):
            bare_token.transfer_from(USER1, USER2, 10, caller=OWNER)
        assert bare_token.allowance(USER1, OWNER) == 10

    def test_negative_transfer_from_rejected(self, bare_token):
        """A negative amount cannot raise the remaining allowance."""
        bare_token.approve(USER1, 5, caller=OWNER)
        with pytest.raises(Uint256Overflow):
            bare_token.transfer_from(OWNER, USER2, -5, caller=USER1)
        assert bare_token.allowance(OWNER, USER1) == 5
        assert bare_token.balance_of(OWNER) == 1_000 * ETHER

    def test_negative_approve_rejected(self, bare_token):
        with pytest.raises(Uint256Overflow):
            bare_token.approve(USER1, -1, caller=OWNER)
        assert bare_token.allowance(OWNER, USER1) == 0
