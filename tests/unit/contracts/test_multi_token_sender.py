"""Tests for MultiTokenSender: the token-only batch unit."""

import pytest

from multisender.constants import ETHER, ZERO_ADDRESS
from multisender.errors import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    InsufficientFundsError,
    NativeTransferFailed,
    OwnableUnauthorizedAccount,
    ValidationError,
)
from multisender.models.events import EmergencyWithdraw, ERC20TokensSent
from tests.helpers import OUTSIDER, OWNER, USER1, USER2, USER3, make_batch

RECIPIENTS = [USER2, USER3]
AMOUNTS = [100 * ETHER, 200 * ETHER]
TOTAL = 300 * ETHER


class TestTokenTransfer:
    def test_sends_tokens(self, ledger, token, multi_token_sender):
        """Fee starts at 0%, so approving the total is enough."""
        token.approve(multi_token_sender.address, TOTAL, caller=USER1)
        multi_token_sender.send_tokens(token.address, RECIPIENTS, AMOUNTS, caller=USER1)

        assert token.balance_of(USER1) == 1_000 * ETHER - TOTAL
        assert token.balance_of(USER2) == 1_100 * ETHER
        assert token.balance_of(USER3) == 1_200 * ETHER
        assert ledger.events_of(ERC20TokensSent) == [
            ERC20TokensSent(token=token.address, sender=USER1, total_amount=TOTAL, recipient_count=2)
        ]

    def test_fee_when_enabled(self, token, multi_token_sender):
        multi_token_sender.set_fee_percentage(100, caller=OWNER)
        token.approve(multi_token_sender.address, TOTAL, caller=USER1)
        with pytest.raises(ERC20InsufficientAllowance):
            multi_token_sender.send_tokens(token.address, RECIPIENTS, AMOUNTS, caller=USER1)

        fee = TOTAL // 100
        owner_before = token.balance_of(OWNER)
        token.approve(multi_token_sender.address, TOTAL + fee, caller=USER1)
        multi_token_sender.send_tokens(token.address, RECIPIENTS, AMOUNTS, caller=USER1)
        assert token.balance_of(OWNER) == owner_before + fee

    def test_zero_token(self, multi_token_sender):
        with pytest.raises(ValidationError, match="MultiTokenSender: token address cannot be zero"):
            multi_token_sender.send_tokens(ZERO_ADDRESS, RECIPIENTS, AMOUNTS, caller=USER1)

    def test_empty_recipients(self, token, multi_token_sender):
        with pytest.raises(ValidationError, match="MultiTokenSender: recipients array cannot be empty"):
            multi_token_sender.send_tokens(token.address, [], [], caller=USER1)

    def test_mismatched_lengths(self, token, multi_token_sender):
        with pytest.raises(ValidationError, match="length mismatch"):
            multi_token_sender.send_tokens(token.address, RECIPIENTS, [ETHER], caller=USER1)

    def test_too_many_recipients(self, token, multi_token_sender):
        recipients, amounts = make_batch(201)
        with pytest.raises(ValidationError, match=r"too many recipients \(max 200\)"):
            multi_token_sender.send_tokens(token.address, recipients, amounts, caller=USER1)

    def test_zero_amount(self, token, multi_token_sender):
        with pytest.raises(ValidationError, match="amount must be greater than 0"):
            multi_token_sender.send_tokens(token.address, RECIPIENTS, [ETHER, 0], caller=USER1)

    def test_zero_recipient(self, token, multi_token_sender):
        with pytest.raises(ValidationError, match="recipient cannot be zero address"):
            multi_token_sender.send_tokens(
                token.address, [USER2, ZERO_ADDRESS], AMOUNTS, caller=USER1
            )

    def test_without_approval(self, token, multi_token_sender):
        with pytest.raises(ERC20InsufficientAllowance):
            multi_token_sender.send_tokens(token.address, RECIPIENTS, AMOUNTS, caller=USER1)

    def test_insufficient_balance(self, token, multi_token_sender):
        amounts = [1_000 * ETHER, 1 * ETHER]
        token.approve(multi_token_sender.address, 1_001 * ETHER, caller=USER1)
        with pytest.raises(ERC20InsufficientBalance):
            multi_token_sender.send_tokens(token.address, RECIPIENTS, amounts, caller=USER1)
        assert token.balance_of(USER1) == 1_000 * ETHER

    def test_max_recipients(self, token, multi_token_sender):
        recipients, amounts = make_batch(200, amount=ETHER)
        token.approve(multi_token_sender.address, 200 * ETHER, caller=USER1)
        multi_token_sender.send_tokens(token.address, recipients, amounts, caller=USER1)
        assert all(token.balance_of(r) == ETHER for r in recipients)

    def test_single_recipient(self, token, multi_token_sender):
        token.approve(multi_token_sender.address, ETHER, caller=USER1)
        multi_token_sender.send_tokens(token.address, [USER2], [ETHER], caller=USER1)
        assert token.balance_of(USER2) == 1_001 * ETHER

    def test_same_recipient_multiple_times(self, token, multi_token_sender):
        token.approve(multi_token_sender.address, 3 * ETHER, caller=USER1)
        multi_token_sender.send_tokens(
            token.address, [USER2, USER2, USER2], [ETHER, ETHER, ETHER], caller=USER1
        )
        assert token.balance_of(USER2) == 1_003 * ETHER

    def test_rejects_native_value(self, ledger, multi_token_sender):
        """The token-only unit has no payable entry points and no receive hook."""
        with pytest.raises(NativeTransferFailed):
            ledger.send_native(USER1, multi_token_sender.address, ETHER)


class TestOwnerFunctions:
    def test_emergency_withdraw(self, ledger, token, multi_token_sender):
        token.transfer(multi_token_sender.address, 100 * ETHER, caller=USER1)
        before = token.balance_of(OWNER)
        multi_token_sender.emergency_withdraw(token.address, 100 * ETHER, caller=OWNER)
        assert token.balance_of(OWNER) == before + 100 * ETHER
        assert ledger.events_of(EmergencyWithdraw, emitter=multi_token_sender.address) == [
            EmergencyWithdraw(token=token.address, amount=100 * ETHER)
        ]

    def test_emergency_withdraw_zero_token(self, multi_token_sender):
        with pytest.raises(ValidationError, match="MultiTokenSender: token address cannot be zero"):
            multi_token_sender.emergency_withdraw(ZERO_ADDRESS, 1, caller=OWNER)

    def test_emergency_withdraw_insufficient(self, token, multi_token_sender):
        with pytest.raises(InsufficientFundsError, match="MultiTokenSender: insufficient token balance"):
            multi_token_sender.emergency_withdraw(token.address, 1, caller=OWNER)

    @pytest.mark.parametrize("amount", [-1, 1.5, True])
    def test_emergency_withdraw_invalid_amount(self, token, multi_token_sender, amount):
        token.transfer(multi_token_sender.address, 10, caller=USER1)
        with pytest.raises(ValidationError, match="MultiTokenSender: invalid amount"):
            multi_token_sender.emergency_withdraw(token.address, amount, caller=OWNER)
        assert multi_token_sender.get_token_balance(token.address) == 10

    def test_emergency_withdraw_non_owner(self, token, multi_token_sender):
        token.transfer(multi_token_sender.address, 100 * ETHER, caller=USER1)
        with pytest.raises(OwnableUnauthorizedAccount):
            multi_token_sender.emergency_withdraw(token.address, 100 * ETHER, caller=OUTSIDER)


class TestViews:
    def test_token_balance(self, token, multi_token_sender):
        token.transfer(multi_token_sender.address, 5 * ETHER, caller=USER1)
        assert multi_token_sender.get_token_balance(token.address) == 5 * ETHER

    def test_empty_contract(self, token, multi_token_sender):
        assert multi_token_sender.get_token_balance(token.address) == 0

    def test_no_native_entry_point(self, multi_token_sender):
        assert not hasattr(multi_token_sender, "send_native_tokens")
