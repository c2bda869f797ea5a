"""Swap fee computation and treasury/pool split.

Rounding policy is floor at every step: the total fee is floored (so the
trader is never over-charged), and the treasury cut of that fee is floored
(so the remainder, which stays in the pool, is never short-changed).
"""

from __future__ import annotations

from dataclasses import dataclass

from subdex.fees.config import FeeConfig
from subdex.safe_int import S


@dataclass(frozen=True)
class FeeSplit:
    """Result of splitting a swap fee.

    Attributes:
        fee_total: Total fee charged on the input amount
        treasury_fee: Portion leaving the pool for the treasury
        pool_fee: Portion retained by the pool for liquidity providers
    """

    fee_total: int
    treasury_fee: int
    pool_fee: int


def compute_fee_total(amount_in: int, config: FeeConfig) -> int:
    """floor(amount_in * fee_rate_nominator / fee_rate_denominator)."""
    return ((S(amount_in) * S(config.fee_rate_nominator)) // S(config.fee_rate_denominator)).value


def split_fee(fee_total: int, config: FeeConfig) -> FeeSplit:
    """Split fee_total between the treasury and the pool."""
    treasury = config.treasury
    treasury_fee = (S(fee_total) * S(treasury.nominator)) // S(treasury.denominator)
    pool_fee = S(fee_total) - treasury_fee
    return FeeSplit(fee_total=fee_total, treasury_fee=treasury_fee.value, pool_fee=pool_fee.value)
