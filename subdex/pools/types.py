"""Pool snapshot type.

A Pool is the reserve-and-shares record of one canonical asset pair. Pools
are immutable: the swap engine and the liquidity manager return new
snapshots and the registry stores them whole.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TypeAlias

from subdex.assets import Asset
from subdex.safe_int import S

PoolKey: TypeAlias = tuple[Asset, Asset]


@dataclass(frozen=True)
class Pool:
    """Reserve and share state of a two-asset constant-product pool.

    invariant == 0 is the uninitialized state; an absent pool and the zero
    pool are the same value.
    """

    reserve_low: int = 0
    reserve_high: int = 0
    invariant: int = 0
    total_shares: int = 0
    shares: Mapping[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if self.reserve_low < 0 or self.reserve_high < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve_low}, {self.reserve_high})"
            )
        if self.total_shares < 0:
            raise ValueError(f"Total shares must be non-negative: {self.total_shares}")
        # Drop zero entries and freeze the mapping.
        frozen = MappingProxyType({k: v for k, v in self.shares.items() if v != 0})
        object.__setattr__(self, "shares", frozen)

    @classmethod
    def zero(cls) -> Pool:
        return cls()

    @property
    def is_active(self) -> bool:
        return self.invariant > 0

    def shares_of(self, account: str) -> int:
        return self.shares.get(account, 0)

    def with_state(
        self,
        reserve_low: int,
        reserve_high: int,
        total_shares: int,
        shares: Mapping[str, int],
    ) -> Pool:
        """Return a new snapshot with the invariant recomputed from reserves.

        Raises:
            OverflowOccured: If reserve_low * reserve_high exceeds the balance type
        """
        if total_shares == 0:
            return Pool.zero()
        invariant = (S(reserve_low) * S(reserve_high)).value
        return replace(
            self,
            reserve_low=reserve_low,
            reserve_high=reserve_high,
            invariant=invariant,
            total_shares=total_shares,
            shares=dict(shares),
        )

    def verify_invariant(self) -> bool:
        """True if cached invariant and shares agree with reserves."""
        if self.invariant != self.reserve_low * self.reserve_high:
            return False
        if sum(self.shares.values()) != self.total_shares:
            return False
        if self.invariant > 0:
            return self.reserve_low > 0 and self.reserve_high > 0 and self.total_shares > 0
        return True

    def __repr__(self) -> str:
        return (
            f"Pool(reserves=({self.reserve_low}, {self.reserve_high}), "
            f"invariant={self.invariant}, total_shares={self.total_shares}, "
            f"holders={len(self.shares)})"
        )


__all__ = ["Pool", "PoolKey"]
