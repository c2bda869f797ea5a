"""Constant product AMM implementation.

Pools price swaps with the constant product formula x * y = k, charging the
fee on the input amount. Part of the fee may be diverted to the treasury;
the rest stays in the pool and grows k.

Algorithm (all floor division, all arithmetic checked):
    fee_total       = amount_in * fee_nom / fee_den
    amount_in_net   = amount_in - fee_total
    amount_out      = amount_in_net * reserve_out / (reserve_in + amount_in_net)
    treasury_fee    = fee_total * treasury_nom / treasury_den
    new_reserve_in  = reserve_in + amount_in - treasury_fee
    new_reserve_out = reserve_out - amount_out

Invariant: new_reserve_in * new_reserve_out >= reserve_in * reserve_out.
Floor rounding of amount_out alone guarantees
(reserve_in + amount_in_net) * new_reserve_out >= k, and new_reserve_in adds
the non-negative pool_fee on top, so the check below can only fail on a bug.
"""

from __future__ import annotations

import structlog

from subdex.amm.base import AMM, SwapDirection, SwapQuote
from subdex.errors import (
    FirstAssetAmountBelowExpectation,
    InsufficientPool,
    InvariantViolation,
    LowFirstAssetAmount,
    SecondAssetAmountBelowExpectation,
)
from subdex.fees.config import FeeConfig
from subdex.fees.split import compute_fee_total, split_fee
from subdex.pools.registry import ensure_active
from subdex.pools.types import Pool
from subdex.safe_int import S

logger = structlog.get_logger()


def get_reserves(pool: Pool, direction: SwapDirection) -> tuple[int, int]:
    """Get reserves ordered as (reserve_in, reserve_out)."""
    if direction is SwapDirection.LOW_TO_HIGH:
        return pool.reserve_low, pool.reserve_high
    return pool.reserve_high, pool.reserve_low


class ConstantProduct(AMM):
    """Constant product pricing with fee-on-input and treasury split."""

    def get_amount_out(self, amount_in_net: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount using the constant product formula.

        Formula: amount_out = (net * res_out) / (res_in + net)

        Raises:
            OverflowOccured: If an intermediate exceeds the balance type
            UnderflowOrOverflowOccured: If reserve_in + net is zero
        """
        net = S(amount_in_net)
        numerator = net * S(reserve_out)
        denominator = S(reserve_in) + net
        return (numerator // denominator).value

    def quote_swap(
        self,
        pool: Pool,
        direction: SwapDirection,
        amount_in: int,
        fee_config: FeeConfig,
    ) -> SwapQuote:
        """Price an exact-input swap through an active pool.

        Args:
            pool: Pool snapshot
            direction: Which canonical side is the input
            amount_in: Gross input amount, fee included
            fee_config: Fee rate and treasury split

        Returns:
            SwapQuote with output, fee split and post-swap reserves

        Raises:
            ExchangeNotExists: If the pool is not active
            LowFirstAssetAmount: If amount_in is zero
            InsufficientPool: If the output would drain the output reserve
            InvariantViolation: If the recomputed invariant decreased
            ArithmeticFault: On checked arithmetic failure
        """
        ensure_active(pool)
        if amount_in <= 0:
            raise LowFirstAssetAmount(f"Swap input must be positive: {amount_in}")

        reserve_in, reserve_out = get_reserves(pool, direction)

        fee_total = compute_fee_total(amount_in, fee_config)
        amount_in_net = (S(amount_in) - S(fee_total)).value
        amount_out = self.get_amount_out(amount_in_net, reserve_in, reserve_out)
        if amount_out >= reserve_out:
            raise InsufficientPool(f"Output {amount_out} would drain reserve {reserve_out}")

        fee = split_fee(fee_total, fee_config)
        new_reserve_in = (S(reserve_in) + S(amount_in) - S(fee.treasury_fee)).value
        new_reserve_out = (S(reserve_out) - S(amount_out)).value
        invariant_after = (S(new_reserve_in) * S(new_reserve_out)).value

        if invariant_after < pool.invariant:
            logger.critical(
                "swap_invariant_decreased",
                direction=direction.value,
                amount_in=amount_in,
                invariant_before=pool.invariant,
                invariant_after=invariant_after,
            )
            raise InvariantViolation(
                f"Invariant decreased: {invariant_after} < {pool.invariant}"
            )

        return SwapQuote(
            direction=direction,
            amount_in=amount_in,
            amount_in_net=amount_in_net,
            amount_out=amount_out,
            fee=fee,
            treasury_fee=fee.treasury_fee if fee_config.treasury.enabled else None,
            new_reserve_in=new_reserve_in,
            new_reserve_out=new_reserve_out,
            invariant_before=pool.invariant,
            invariant_after=invariant_after,
        )

    def apply_quote(self, pool: Pool, quote: SwapQuote) -> Pool:
        """Return the pool snapshot after executing quote."""
        if quote.direction is SwapDirection.LOW_TO_HIGH:
            reserve_low, reserve_high = quote.new_reserve_in, quote.new_reserve_out
        else:
            reserve_low, reserve_high = quote.new_reserve_out, quote.new_reserve_in
        return pool.with_state(reserve_low, reserve_high, pool.total_shares, pool.shares)

    def ensure_min_output(self, quote: SwapQuote, min_amount_out: int) -> None:
        """Enforce the caller's slippage bound.

        A zero output is always rejected: the trader would pay for nothing.

        Raises:
            FirstAssetAmountBelowExpectation: Low-side output below minimum
            SecondAssetAmountBelowExpectation: High-side output below minimum
        """
        if quote.amount_out >= min_amount_out and quote.amount_out > 0:
            return
        message = f"Output {quote.amount_out} below expected {min_amount_out}"
        if quote.direction is SwapDirection.LOW_TO_HIGH:
            raise SecondAssetAmountBelowExpectation(message)
        raise FirstAssetAmountBelowExpectation(message)


# Singleton instance
constant_product = ConstantProduct()


__all__ = [
    "ConstantProduct",
    "constant_product",
    "get_reserves",
]
