"""Pool registry keyed by canonical asset pair.

Each unordered pair of assets maps to exactly one storage slot, keyed by its
canonical (low, high) order. Looking up a pair that was never stored yields
the zero pool; absence is not an error at this layer.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from subdex.assets import Asset, canonicalize_pair, sort_key
from subdex.errors import ExchangeAlreadyExists, ExchangeNotExists
from subdex.pools.types import Pool, PoolKey

logger = structlog.get_logger()


class PoolRegistry:
    """Storage of pool snapshots by canonical pair."""

    def __init__(self) -> None:
        self._pools: dict[PoolKey, Pool] = {}

    def exists(self, low: Asset, high: Asset) -> bool:
        """True if the pool for (low, high) is active."""
        return self.load(low, high).is_active

    def load(self, low: Asset, high: Asset) -> Pool:
        """Return the stored pool, or the zero pool if never stored."""
        return self._pools.get((low, high), Pool.zero())

    def store(self, low: Asset, high: Asset, pool: Pool) -> None:
        """Persist a full pool snapshot under its canonical key.

        Args:
            low: Canonical low asset
            high: Canonical high asset
            pool: Snapshot to store (replaces any existing one)

        Raises:
            ValueError: If (low, high) is not in canonical order
        """
        if sort_key(low) >= sort_key(high):
            raise ValueError(f"Pool key must be canonical: {low} < {high}")
        self._pools[(low, high)] = pool
        logger.debug(
            "pool_stored",
            low=str(low),
            high=str(high),
            reserve_low=pool.reserve_low,
            reserve_high=pool.reserve_high,
            total_shares=pool.total_shares,
        )

    def get_pool(self, a: Asset, b: Asset) -> Pool:
        """Load the pool for a pair given in any order."""
        low, high, _ = canonicalize_pair(a, b)
        return self.load(low, high)

    def iter_pools(self) -> Iterator[tuple[Asset, Asset, Pool]]:
        """Yield stored (low, high, pool) entries in canonical key order."""
        for low, high in sorted(self._pools, key=lambda k: (sort_key(k[0]), sort_key(k[1]))):
            yield low, high, self._pools[(low, high)]

    @property
    def active_count(self) -> int:
        """Number of active pools."""
        return sum(1 for pool in self._pools.values() if pool.is_active)

    def __len__(self) -> int:
        return len(self._pools)


def ensure_launchable(pool: Pool) -> None:
    """Raises ExchangeAlreadyExists if the pool is active."""
    if pool.is_active:
        raise ExchangeAlreadyExists(f"Exchange already active with invariant {pool.invariant}")


def ensure_active(pool: Pool) -> Pool:
    """Return pool if active; raises ExchangeNotExists otherwise."""
    if not pool.is_active:
        raise ExchangeNotExists("Exchange has not been initialized")
    return pool


__all__ = ["PoolRegistry", "ensure_launchable", "ensure_active"]
