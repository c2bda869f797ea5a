"""Tests for fee configuration and the treasury/pool fee split."""

import pytest

from subdex.fees import DEFAULT_FEE_CONFIG, FeeConfig, TreasuryConfig, compute_fee_total, split_fee
from tests.helpers import TREASURY, make_fee_config


class TestFeeConfig:
    """Tests for configuration validation."""

    def test_defaults(self):
        assert DEFAULT_FEE_CONFIG.fee_rate_nominator == 3
        assert DEFAULT_FEE_CONFIG.fee_rate_denominator == 1000
        assert not DEFAULT_FEE_CONFIG.treasury.enabled

    def test_zero_denominator_rejected(self):
        with pytest.raises(ValueError):
            FeeConfig(fee_rate_nominator=0, fee_rate_denominator=0)

    def test_rate_above_one_rejected(self):
        with pytest.raises(ValueError):
            FeeConfig(fee_rate_nominator=2, fee_rate_denominator=1)

    def test_enabled_treasury_needs_account(self):
        with pytest.raises(ValueError):
            TreasuryConfig(account="", nominator=1, denominator=2)

    def test_treasury_share_above_one_rejected(self):
        with pytest.raises(ValueError):
            TreasuryConfig(account=TREASURY, nominator=3, denominator=2)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError):
            FeeConfig(fee_rate_nominator=0.5, fee_rate_denominator=1000)  # type: ignore[arg-type]

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_FEE_CONFIG.fee_rate_nominator = 5  # type: ignore[misc]


class TestFeeComputation:
    """Floor rounding at every step."""

    def test_fee_total_floors(self):
        """100 * 3 / 1000 floors to 0."""
        assert compute_fee_total(100, DEFAULT_FEE_CONFIG) == 0
        assert compute_fee_total(1000, DEFAULT_FEE_CONFIG) == 3
        assert compute_fee_total(1999, DEFAULT_FEE_CONFIG) == 5

    def test_split_disabled_treasury(self):
        split = split_fee(7, DEFAULT_FEE_CONFIG)
        assert (split.fee_total, split.treasury_fee, split.pool_fee) == (7, 0, 7)

    def test_split_half(self):
        """Treasury takes the floor; the pool keeps the remainder."""
        config = make_fee_config(treasury_nominator=1, treasury_denominator=2)
        split = split_fee(7, config)
        assert (split.treasury_fee, split.pool_fee) == (3, 4)

    def test_split_full(self):
        config = make_fee_config(treasury_nominator=1, treasury_denominator=1)
        split = split_fee(7, config)
        assert (split.treasury_fee, split.pool_fee) == (7, 0)

    @pytest.mark.parametrize("fee_total", [0, 1, 2, 99, 1000, 12345])
    def test_split_sums_to_total(self, fee_total):
        config = make_fee_config(treasury_nominator=2, treasury_denominator=7)
        split = split_fee(fee_total, config)
        assert split.treasury_fee + split.pool_fee == fee_total
        assert 0 <= split.treasury_fee <= fee_total
