"""Tests for PoolRegistry and the Pool snapshot."""

import pytest

from subdex.assets import NATIVE
from subdex.errors import ExchangeAlreadyExists, ExchangeNotExists, OverflowOccured
from subdex.pools import Pool, PoolRegistry, ensure_active, ensure_launchable
from subdex.safe_int import BALANCE_MAX
from tests.helpers import ALICE, ASSET_1, ASSET_2, BOB, make_pool


@pytest.fixture
def registry() -> PoolRegistry:
    return PoolRegistry()


class TestPool:
    """Tests for the immutable pool snapshot."""

    def test_zero_pool(self):
        pool = Pool.zero()
        assert not pool.is_active
        assert pool.total_shares == 0
        assert pool.shares == {}
        assert pool.verify_invariant()

    def test_with_state_recomputes_invariant(self):
        pool = make_pool(1000, 2000)
        assert pool.invariant == 2_000_000
        assert pool.total_shares == 1000
        assert pool.shares_of(ALICE) == 1000
        assert pool.verify_invariant()

    def test_with_state_zero_shares_is_zero_pool(self):
        pool = make_pool(1000, 2000).with_state(5, 5, 0, {})
        assert pool == Pool.zero()

    def test_invariant_overflow(self):
        with pytest.raises(OverflowOccured):
            make_pool(BALANCE_MAX, 2)

    def test_zero_share_entries_dropped(self):
        pool = make_pool(10, 10, shares={ALICE: 10, BOB: 0})
        assert BOB not in pool.shares

    def test_shares_are_read_only(self):
        pool = make_pool(10, 10)
        with pytest.raises(TypeError):
            pool.shares[BOB] = 1  # type: ignore[index]

    def test_negative_reserves_rejected(self):
        with pytest.raises(ValueError):
            Pool(reserve_low=-1)

    def test_hashable(self):
        """Equal snapshots hash equally and can key a set."""
        pool = make_pool(1000, 2000)
        same = make_pool(1000, 2000)
        assert hash(pool) == hash(same)
        assert {pool, same, Pool.zero()} == {pool, Pool.zero()}


class TestPoolRegistry:
    """Tests for registry storage."""

    def test_absent_pool_is_zero(self, registry):
        assert registry.load(NATIVE, ASSET_1) == Pool.zero()
        assert not registry.exists(NATIVE, ASSET_1)
        assert len(registry) == 0

    def test_store_and_load(self, registry):
        pool = make_pool(100, 200)
        registry.store(NATIVE, ASSET_1, pool)
        assert registry.load(NATIVE, ASSET_1) is pool
        assert registry.exists(NATIVE, ASSET_1)
        assert registry.active_count == 1

    def test_get_pool_any_order(self, registry):
        pool = make_pool(100, 200)
        registry.store(ASSET_1, ASSET_2, pool)
        assert registry.get_pool(ASSET_2, ASSET_1) is pool

    def test_store_requires_canonical_key(self, registry):
        with pytest.raises(ValueError):
            registry.store(ASSET_1, NATIVE, make_pool(1, 1))
        with pytest.raises(ValueError):
            registry.store(ASSET_1, ASSET_1, make_pool(1, 1))

    def test_iter_pools_sorted(self, registry):
        registry.store(ASSET_1, ASSET_2, make_pool(1, 1))
        registry.store(NATIVE, ASSET_2, make_pool(2, 2))
        registry.store(NATIVE, ASSET_1, make_pool(3, 3))
        keys = [(low, high) for low, high, _ in registry.iter_pools()]
        assert keys == [(NATIVE, ASSET_1), (NATIVE, ASSET_2), (ASSET_1, ASSET_2)]

    def test_stored_zero_pool_is_inactive(self, registry):
        registry.store(NATIVE, ASSET_1, Pool.zero())
        assert not registry.exists(NATIVE, ASSET_1)
        assert registry.active_count == 0


class TestPoolGuards:
    """Tests for ensure_active and ensure_launchable."""

    def test_ensure_active(self):
        pool = make_pool(1, 1)
        assert ensure_active(pool) is pool
        with pytest.raises(ExchangeNotExists):
            ensure_active(Pool.zero())

    def test_ensure_launchable(self):
        ensure_launchable(Pool.zero())
        with pytest.raises(ExchangeAlreadyExists):
            ensure_launchable(make_pool(1, 1))
