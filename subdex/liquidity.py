"""Liquidity operations: initialize pool, invest, divest.

Share math:
- Initialization seeds shares = amount_low, so one share is initially worth
  one unit of the low asset.
- cost_x = shares * reserve_x / total_shares for each side, rounded UP when
  investing and DOWN when divesting. Rounding always favors the pool: an
  investor never pays less and a divestor never receives more than the exact
  proportional amount.

Every function returns a new Pool snapshot and mutates nothing.
"""

from __future__ import annotations

from enum import Enum

from subdex.errors import (
    DoesNotOwnShare,
    FirstAssetAmountBelowExpectation,
    InsufficientShares,
    InvalidShares,
    InvariantNotNull,
    LowFirstAssetAmount,
    LowSecondAssetAmount,
    SecondAssetAmountBelowExpectation,
    TotalSharesNotNull,
)
from subdex.pools.registry import ensure_launchable
from subdex.pools.types import Pool
from subdex.safe_int import S


class Rounding(str, Enum):
    """Rounding mode for share cost computation."""

    UP = "up"  # Investing: caller pays at least the exact cost
    DOWN = "down"  # Divesting: caller receives at most the exact value


def initialize(amount_low: int, amount_high: int, initiator: str, pool: Pool | None = None) -> tuple[Pool, int]:
    """Launch a pool with its first deposit.

    Args:
        amount_low: Deposit of the canonical low asset
        amount_high: Deposit of the canonical high asset
        initiator: Account credited with all initial shares
        pool: Current snapshot for the pair, if any (must not be active)

    Returns:
        Tuple of (new pool, shares issued)

    Raises:
        LowFirstAssetAmount: If amount_low is zero
        LowSecondAssetAmount: If amount_high is zero
        ExchangeAlreadyExists: If pool is already active
        OverflowOccured: If amount_low * amount_high exceeds the balance type
    """
    if amount_low <= 0:
        raise LowFirstAssetAmount(f"Initial low deposit must be positive: {amount_low}")
    if amount_high <= 0:
        raise LowSecondAssetAmount(f"Initial high deposit must be positive: {amount_high}")
    ensure_launchable(pool or Pool.zero())

    shares = amount_low
    new_pool = Pool.zero().with_state(
        reserve_low=amount_low,
        reserve_high=amount_high,
        total_shares=shares,
        shares={initiator: shares},
    )
    return new_pool, shares


def cost_of_shares(pool: Pool, shares: int, rounding: Rounding) -> tuple[int, int]:
    """Amounts of (low, high) backing shares at the pool's current ratio.

    Raises:
        InvariantNotNull: If the pool has no invariant
        TotalSharesNotNull: If the pool has no outstanding shares
        InvalidShares: If shares is zero
        OverflowOccured: If shares * reserve exceeds the balance type
    """
    if pool.invariant == 0:
        raise InvariantNotNull("Pool invariant is zero")
    if pool.total_shares == 0:
        raise TotalSharesNotNull("Pool has no outstanding shares")
    if shares <= 0:
        raise InvalidShares(f"Shares must be positive: {shares}")

    sshares = S(shares)
    low = sshares * S(pool.reserve_low)
    high = sshares * S(pool.reserve_high)
    if rounding is Rounding.UP:
        return low.ceiling_div(pool.total_shares).value, high.ceiling_div(pool.total_shares).value
    return (low // pool.total_shares).value, (high // pool.total_shares).value


def invest(pool: Pool, cost_low: int, cost_high: int, shares: int, account: str) -> Pool:
    """Add liquidity and issue shares to account.

    Raises:
        InvalidShares: If shares is zero
        OverflowOccured: If a reserve, total_shares, the account's shares or
            the invariant would exceed the balance type
    """
    if shares <= 0:
        raise InvalidShares(f"Shares must be positive: {shares}")

    holdings = dict(pool.shares)
    holdings[account] = (S(pool.shares_of(account)) + S(shares)).value
    return pool.with_state(
        reserve_low=(S(pool.reserve_low) + S(cost_low)).value,
        reserve_high=(S(pool.reserve_high) + S(cost_high)).value,
        total_shares=(S(pool.total_shares) + S(shares)).value,
        shares=holdings,
    )


def ensure_burned_shares(pool: Pool, account: str, shares: int) -> None:
    """Check account may burn shares.

    Raises:
        InvalidShares: If shares is zero
        DoesNotOwnShare: If account holds no shares of this pool
        InsufficientShares: If account or pool holds fewer than shares
    """
    if shares <= 0:
        raise InvalidShares(f"Shares must be positive: {shares}")
    owned = pool.shares_of(account)
    if owned == 0:
        raise DoesNotOwnShare(f"{account} holds no shares of this pool")
    if owned < shares:
        raise InsufficientShares(f"{account} holds {owned} shares, tried to burn {shares}")
    if pool.total_shares < shares:
        raise InsufficientShares(f"Pool has {pool.total_shares} shares, tried to burn {shares}")


def divest(pool: Pool, cost_low: int, cost_high: int, shares: int, account: str) -> Pool:
    """Remove liquidity and burn account's shares.

    Burning the last outstanding share returns the pool to the zero state.

    Raises:
        InvalidShares, DoesNotOwnShare, InsufficientShares: See ensure_burned_shares
        UnderflowOccured: If a reserve would go negative
    """
    ensure_burned_shares(pool, account, shares)

    holdings = dict(pool.shares)
    holdings[account] = (S(pool.shares_of(account)) - S(shares)).value
    return pool.with_state(
        reserve_low=(S(pool.reserve_low) - S(cost_low)).value,
        reserve_high=(S(pool.reserve_high) - S(cost_high)).value,
        total_shares=(S(pool.total_shares) - S(shares)).value,
        shares=holdings,
    )


def ensure_divest_expectations(
    cost_low: int,
    cost_high: int,
    min_low: int,
    min_high: int,
) -> None:
    """Enforce the divestor's minimum received amounts.

    Raises:
        FirstAssetAmountBelowExpectation: Low-side proceeds below min_low
        SecondAssetAmountBelowExpectation: High-side proceeds below min_high
    """
    if cost_low < min_low:
        raise FirstAssetAmountBelowExpectation(f"Low proceeds {cost_low} below expected {min_low}")
    if cost_high < min_high:
        raise SecondAssetAmountBelowExpectation(
            f"High proceeds {cost_high} below expected {min_high}"
        )


__all__ = [
    "Rounding",
    "initialize",
    "cost_of_shares",
    "invest",
    "ensure_burned_shares",
    "divest",
    "ensure_divest_expectations",
]
