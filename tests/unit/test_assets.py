"""Tests for asset identity and canonical pair ordering."""

import pytest

from subdex.assets import (
    NATIVE,
    BridgedAsset,
    NativeCurrency,
    asset_lt,
    canonicalize_amounts,
    canonicalize_pair,
    ensure_valid_exchange,
    parse_asset,
)
from subdex.errors import InvalidExchange
from tests.helpers import ASSET_1, ASSET_2


class TestCanonicalOrder:
    """Native sorts first, bridged assets by id."""

    def test_native_before_bridged(self):
        assert asset_lt(NATIVE, BridgedAsset(0))
        assert not asset_lt(BridgedAsset(0), NATIVE)

    def test_bridged_by_id(self):
        assert asset_lt(BridgedAsset(5), BridgedAsset(7))
        assert not asset_lt(BridgedAsset(7), BridgedAsset(5))

    def test_order_is_strict(self):
        assert not asset_lt(NATIVE, NATIVE)
        assert not asset_lt(ASSET_1, ASSET_1)


class TestCanonicalizePair:
    """Tests for canonicalize_pair and canonicalize_amounts."""

    def test_already_canonical(self):
        assert canonicalize_pair(NATIVE, ASSET_1) == (NATIVE, ASSET_1, False)

    def test_swapped(self):
        assert canonicalize_pair(ASSET_1, NATIVE) == (NATIVE, ASSET_1, True)

    def test_bridged_pair(self):
        assert canonicalize_pair(BridgedAsset(7), BridgedAsset(5)) == (
            BridgedAsset(5),
            BridgedAsset(7),
            True,
        )

    def test_symmetric(self):
        """Both orders of a pair produce the same (low, high)."""
        low1, high1, _ = canonicalize_pair(ASSET_1, ASSET_2)
        low2, high2, _ = canonicalize_pair(ASSET_2, ASSET_1)
        assert (low1, high1) == (low2, high2)

    def test_amounts_follow_assets(self):
        """Scenario: (Bridged(7), 50, Bridged(5), 80) -> (Bridged(5), 80, Bridged(7), 50)."""
        result = canonicalize_amounts(BridgedAsset(7), 50, BridgedAsset(5), 80)
        assert result == (BridgedAsset(5), 80, BridgedAsset(7), 50, True)

    def test_amounts_unswapped(self):
        result = canonicalize_amounts(NATIVE, 10, ASSET_1, 20)
        assert result == (NATIVE, 10, ASSET_1, 20, False)


class TestEnsureValidExchange:
    """Identical assets cannot form a pair."""

    def test_native_native(self):
        with pytest.raises(InvalidExchange):
            ensure_valid_exchange(NATIVE, NATIVE)

    def test_same_bridged(self):
        with pytest.raises(InvalidExchange):
            ensure_valid_exchange(BridgedAsset(3), BridgedAsset(3))

    def test_distinct_assets_pass(self):
        ensure_valid_exchange(NATIVE, ASSET_1)
        ensure_valid_exchange(ASSET_1, ASSET_2)


class TestWireForms:
    """Tests for asset parsing and keys."""

    def test_to_key(self):
        assert NATIVE.to_key() == "native"
        assert BridgedAsset(12).to_key() == "12"

    def test_parse_native(self):
        assert parse_asset("native") == NATIVE
        assert parse_asset(" NATIVE ") == NATIVE

    def test_parse_bridged(self):
        assert parse_asset("12") == BridgedAsset(12)
        assert parse_asset(12) == BridgedAsset(12)

    @pytest.mark.parametrize("raw", ["", "abc", "-1", "1.5"])
    def test_parse_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_asset(raw)

    def test_bridged_id_validation(self):
        with pytest.raises(ValueError):
            BridgedAsset(-1)
        with pytest.raises(TypeError):
            BridgedAsset("1")  # type: ignore

    def test_native_is_singleton_value(self):
        assert NativeCurrency() == NATIVE
        assert hash(NativeCurrency()) == hash(NATIVE)
