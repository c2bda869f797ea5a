"""Base types for AMM pricing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from subdex.fees.config import FeeConfig
from subdex.fees.split import FeeSplit
from subdex.pools.types import Pool


class SwapDirection(str, Enum):
    """Which canonical side of the pool is the input."""

    LOW_TO_HIGH = "low_to_high"
    HIGH_TO_LOW = "high_to_low"

    @classmethod
    def from_swapped(cls, swapped: bool) -> SwapDirection:
        """Direction for a caller pair (asset_in, asset_out) given canonicalize_pair's flag."""
        return cls.HIGH_TO_LOW if swapped else cls.LOW_TO_HIGH


@dataclass(frozen=True)
class SwapQuote:
    """Result of pricing a swap against a pool snapshot.

    Nothing is mutated to produce a quote; apply it to get the next pool.
    """

    direction: SwapDirection
    amount_in: int
    amount_in_net: int
    amount_out: int
    fee: FeeSplit
    # Reported treasury fee: None when the treasury is disabled
    treasury_fee: int | None
    new_reserve_in: int
    new_reserve_out: int
    invariant_before: int
    invariant_after: int


class AMM(ABC):
    """Abstract base class for pool pricing implementations."""

    @abstractmethod
    def get_amount_out(self, amount_in_net: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for a fee-adjusted input.

        Args:
            amount_in_net: Input amount after fee deduction
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool

        Returns:
            Output asset amount
        """
        ...

    @abstractmethod
    def quote_swap(
        self,
        pool: Pool,
        direction: SwapDirection,
        amount_in: int,
        fee_config: FeeConfig,
    ) -> SwapQuote:
        """Price an exact-input swap without mutating anything."""
        ...
