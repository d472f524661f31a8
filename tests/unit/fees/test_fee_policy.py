"""Tests for fee configuration, the fee formula and FeePolicy."""

import pytest

from multisender.constants import ETHER, ZERO_ADDRESS
from multisender.errors import ValidationError
from multisender.fees import (
    DEFAULT_FEE_CONFIG,
    TOKEN_SENDER_FEE_CONFIG,
    FeeConfig,
    FeePolicy,
    FeeQuote,
    calculate_fee,
)
from multisender.safe_int import Uint256Overflow
from tests.helpers import FEE_COLLECTOR, OWNER, USER1


@pytest.fixture
def policy() -> FeePolicy:
    return FeePolicy(DEFAULT_FEE_CONFIG, collector=OWNER, label="MultiSender")


class TestFeeConfig:
    def test_defaults(self):
        """0.1% default, 1% ceiling, 200 recipients."""
        assert DEFAULT_FEE_CONFIG.fee_scale == 10_000
        assert DEFAULT_FEE_CONFIG.default_fee_percentage == 10
        assert DEFAULT_FEE_CONFIG.max_fee_percentage == 100
        assert DEFAULT_FEE_CONFIG.max_recipients == 200

    def test_token_sender_starts_free(self):
        assert TOKEN_SENDER_FEE_CONFIG.default_fee_percentage == 0

    def test_default_above_ceiling_rejected(self):
        with pytest.raises(ValueError):
            FeeConfig(default_fee_percentage=101)

    def test_zero_scale_rejected(self):
        with pytest.raises(ValueError):
            FeeConfig(fee_scale=0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_FEE_CONFIG.fee_scale = 1  # type: ignore[misc]


class TestCalculateFee:
    def test_reference_value(self):
        """100 units at 0.1% is 0.1 units."""
        assert calculate_fee(100 * ETHER, 10) == ETHER // 10

    def test_truncates(self):
        assert calculate_fee(999, 10) == 0
        assert calculate_fee(1_000, 10) == 1

    def test_zero_rate(self):
        assert calculate_fee(100 * ETHER, 0) == 0

    def test_custom_scale(self):
        assert calculate_fee(1_000, 5, FeeConfig(fee_scale=100, max_fee_percentage=10)) == 50

    def test_overflow(self):
        with pytest.raises(Uint256Overflow):
            calculate_fee(2**255, 100)


class TestFeeQuote:
    def test_required_amount(self):
        assert FeeQuote(total_amount=1_000, fee=1).required_amount == 1_001


class TestFeePolicy:
    def test_initial_state(self, policy):
        assert policy.fee_percentage == 10
        assert policy.fee_collector == OWNER.lower()
        assert not policy.is_vip(USER1)

    def test_set_fee_percentage(self, policy):
        assert policy.set_fee_percentage(50) == 10
        assert policy.fee_percentage == 50
        assert policy.calculate_fee(10_000) == 50

    def test_ceiling_inclusive(self, policy):
        policy.set_fee_percentage(100)
        assert policy.fee_percentage == 100

    def test_above_ceiling_leaves_rate(self, policy):
        """Rejected updates do not change the rate."""
        with pytest.raises(ValidationError, match="MultiSender: fee percentage too high"):
            policy.set_fee_percentage(200)
        assert policy.fee_percentage == 10

    def test_negative_rate(self, policy):
        with pytest.raises(ValidationError):
            policy.set_fee_percentage(-1)

    def test_set_fee_collector(self, policy):
        assert policy.set_fee_collector(FEE_COLLECTOR) == OWNER.lower()
        assert policy.fee_collector == FEE_COLLECTOR.lower()

    def test_zero_collector_rejected(self, policy):
        with pytest.raises(ValidationError, match="fee collector cannot be zero address"):
            policy.set_fee_collector(ZERO_ADDRESS)
        assert policy.fee_collector == OWNER.lower()

    def test_invalid_collector_rejected(self, policy):
        with pytest.raises(ValidationError):
            policy.set_fee_collector("0x1234")


class TestVip:
    def test_add_and_remove(self, policy):
        assert policy.add_vip(USER1)
        assert policy.is_vip(USER1.upper().replace("0X", "0x"))
        assert policy.remove_vip(USER1)
        assert not policy.is_vip(USER1)

    def test_add_twice(self, policy):
        assert policy.add_vip(USER1)
        assert not policy.add_vip(USER1)

    def test_remove_absent(self, policy):
        assert not policy.remove_vip(USER1)

    def test_zero_vip_rejected(self, policy):
        with pytest.raises(ValidationError):
            policy.add_vip(ZERO_ADDRESS)

    def test_vip_quote_is_free(self, policy):
        """VIP senders pay exactly the total; others pay total plus fee."""
        policy.add_vip(USER1)
        assert policy.quote(USER1, 10 * ETHER).required_amount == 10 * ETHER
        assert policy.quote(OWNER, 10 * ETHER).required_amount == 10 * ETHER + ETHER // 100
