"""Exchange orchestration.

Every public operation runs in two phases:

1. Validate: canonicalize the pair, load the pool, do the pricing or share
   math, and check every balance the operation touches on its net result.
   The output is an immutable MutationPlan, or the first error raised.
2. Commit: apply the plan's ledger debits, then credits, then the pool
   write, then record the event. Nothing in this phase checks anything.

So a failed operation leaves no trace in the ledger or the registry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from subdex import liquidity
from subdex.amm.base import SwapDirection, SwapQuote
from subdex.amm.constant_product import ConstantProduct, constant_product
from subdex.assets import Asset, BridgedAsset, canonicalize_amounts, canonicalize_pair, ensure_valid_exchange
from subdex.currency import Currency, InMemoryCurrency
from subdex.directory import AssetDirectory
from subdex.errors import DexError, InvariantViolation
from subdex.events import DexEvent, Divested, Exchanged, Invested, event_fields
from subdex.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from subdex.ledger import BalanceChange, BalanceLedger
from subdex.liquidity import Rounding
from subdex.plan import MutationPlan
from subdex.pools.registry import PoolRegistry, ensure_active
from subdex.pools.types import Pool
from subdex.safe_int import S

logger = structlog.get_logger()


@dataclass
class DexState:
    """All mutable state of the exchange.

    Passed explicitly to the Dex; there is no module-level instance.
    """

    ledger: BalanceLedger
    registry: PoolRegistry = field(default_factory=PoolRegistry)
    directory: AssetDirectory = field(default_factory=AssetDirectory)
    fee_config: FeeConfig = DEFAULT_FEE_CONFIG

    @classmethod
    def empty(cls, currency: Currency | None = None, fee_config: FeeConfig = DEFAULT_FEE_CONFIG) -> DexState:
        return cls(ledger=BalanceLedger(currency or InMemoryCurrency()), fee_config=fee_config)


def _changes(*changes: BalanceChange) -> tuple[BalanceChange, ...]:
    """Drop zero-amount changes so they never create ledger rows."""
    return tuple(c for c in changes if c.amount > 0)


class Dex:
    """Two-asset constant product exchange over a DexState.

    Args:
        state: Ledger, registry, directory and fee configuration
        amm: Pricing implementation (default: the constant product singleton)
    """

    def __init__(self, state: DexState, amm: ConstantProduct | None = None) -> None:
        self.state = state
        self.amm = amm or constant_product
        self.events: list[DexEvent] = []

    @property
    def ledger(self) -> BalanceLedger:
        return self.state.ledger

    @property
    def registry(self) -> PoolRegistry:
        return self.state.registry

    @property
    def fee_config(self) -> FeeConfig:
        return self.state.fee_config

    # --- Public operations ---

    def initialize_exchange(
        self,
        account: str,
        first_asset: Asset,
        first_amount: int,
        second_asset: Asset,
        second_amount: int,
    ) -> Invested:
        """Launch the pool for a pair with the caller's first deposit.

        The caller receives shares equal to the deposited low-asset amount.

        Raises:
            InvalidExchange: Same asset on both sides
            LowFirstAssetAmount, LowSecondAssetAmount: Zero deposit (canonical side)
            ExchangeAlreadyExists: Pool is already active
            BalanceError: Caller cannot cover the deposit
            OverflowOccured: Invariant would not fit the balance type
        """

        def build() -> MutationPlan:
            ensure_valid_exchange(first_asset, second_asset)
            low, amount_low, high, amount_high, _ = canonicalize_amounts(
                first_asset, first_amount, second_asset, second_amount
            )
            pool, shares = liquidity.initialize(
                amount_low, amount_high, account, self.registry.load(low, high)
            )
            return MutationPlan(
                low=low,
                high=high,
                pool=pool,
                debits=_changes(
                    BalanceChange(account, low, amount_low),
                    BalanceChange(account, high, amount_high),
                ),
                credits=(),
                event=Invested(account, low, high, shares, amount_low, amount_high),
            )

        return self._run("initialize_exchange", account, build)

    def swap(
        self,
        account: str,
        asset_in: Asset,
        amount_in: int,
        asset_out: Asset,
        min_amount_out: int,
        receiver: str | None = None,
    ) -> Exchanged:
        """Swap an exact amount of asset_in for at least min_amount_out of asset_out.

        Args:
            account: Caller, debited amount_in of asset_in
            asset_in: Asset sold
            amount_in: Exact input, fee included
            asset_out: Asset bought
            min_amount_out: Slippage bound
            receiver: Account credited with the output (default: caller)

        Raises:
            InvalidExchange: Same asset on both sides
            ExchangeNotExists: No active pool for the pair
            LowFirstAssetAmount: Zero input
            InsufficientPool: Output would drain the pool
            FirstAssetAmountBelowExpectation, SecondAssetAmountBelowExpectation:
                Output below min_amount_out (named by the output's canonical side)
            BalanceError: Caller cannot cover amount_in
            OverflowOccured: A resulting balance or reserve would not fit
        """

        def build() -> MutationPlan:
            ensure_valid_exchange(asset_in, asset_out)
            low, high, swapped = canonicalize_pair(asset_in, asset_out)
            pool = ensure_active(self.registry.load(low, high))

            quote = self.amm.quote_swap(
                pool, SwapDirection.from_swapped(swapped), amount_in, self.fee_config
            )
            self.amm.ensure_min_output(quote, min_amount_out)
            new_pool = self.amm.apply_quote(pool, quote)

            return MutationPlan(
                low=low,
                high=high,
                pool=new_pool,
                debits=_changes(BalanceChange(account, asset_in, amount_in)),
                credits=_changes(
                    BalanceChange(receiver or account, asset_out, quote.amount_out),
                    BalanceChange(self.fee_config.treasury.account, asset_in, quote.fee.treasury_fee),
                ),
                event=Exchanged(
                    account, asset_in, amount_in, asset_out, quote.amount_out, quote.treasury_fee
                ),
            )

        return self._run("swap", account, build)

    def invest_liquidity(
        self,
        account: str,
        first_asset: Asset,
        second_asset: Asset,
        shares: int,
    ) -> Invested:
        """Buy shares of an active pool at its current ratio (costs rounded up).

        Raises:
            InvalidExchange: Same asset on both sides
            ExchangeNotExists: No active pool for the pair
            InvalidShares: Zero shares
            BalanceError: Caller cannot cover the cost
            OverflowOccured: Cost, reserves or total shares would not fit
        """

        def build() -> MutationPlan:
            ensure_valid_exchange(first_asset, second_asset)
            low, high, _ = canonicalize_pair(first_asset, second_asset)
            pool = ensure_active(self.registry.load(low, high))

            cost_low, cost_high = liquidity.cost_of_shares(pool, shares, Rounding.UP)
            new_pool = liquidity.invest(pool, cost_low, cost_high, shares, account)

            return MutationPlan(
                low=low,
                high=high,
                pool=new_pool,
                debits=_changes(
                    BalanceChange(account, low, cost_low),
                    BalanceChange(account, high, cost_high),
                ),
                credits=(),
                event=Invested(account, low, high, shares, cost_low, cost_high),
            )

        return self._run("invest_liquidity", account, build)

    def divest_liquidity(
        self,
        account: str,
        first_asset: Asset,
        second_asset: Asset,
        shares: int,
        min_first_received: int = 0,
        min_second_received: int = 0,
    ) -> Divested:
        """Burn shares for the proportional reserves (proceeds rounded down).

        The minimums follow the caller's asset order.

        Raises:
            InvalidExchange: Same asset on both sides
            ExchangeNotExists: No active pool for the pair
            InvalidShares: Zero shares
            DoesNotOwnShare, InsufficientShares: Caller cannot burn shares
            FirstAssetAmountBelowExpectation, SecondAssetAmountBelowExpectation:
                Proceeds below the minimums (named by canonical side)
            OverflowOccured: Caller cannot hold the proceeds
        """

        def build() -> MutationPlan:
            ensure_valid_exchange(first_asset, second_asset)
            low, high, swapped = canonicalize_pair(first_asset, second_asset)
            pool = ensure_active(self.registry.load(low, high))

            liquidity.ensure_burned_shares(pool, account, shares)
            cost_low, cost_high = liquidity.cost_of_shares(pool, shares, Rounding.DOWN)
            if swapped:
                min_low, min_high = min_second_received, min_first_received
            else:
                min_low, min_high = min_first_received, min_second_received
            liquidity.ensure_divest_expectations(cost_low, cost_high, min_low, min_high)
            new_pool = liquidity.divest(pool, cost_low, cost_high, shares, account)

            return MutationPlan(
                low=low,
                high=high,
                pool=new_pool,
                debits=(),
                credits=_changes(
                    BalanceChange(account, low, cost_low),
                    BalanceChange(account, high, cost_high),
                ),
                event=Divested(account, low, high, shares, cost_low, cost_high),
            )

        return self._run("divest_liquidity", account, build)

    # --- Balance boundary for collaborators ---

    def credit_native_or_bridged(self, account: str, asset: Asset, amount: int) -> None:
        """Mint amount of asset to account. Validate with ensure_can_hold first."""
        self.ledger.credit_native_or_bridged(account, asset, amount)

    def debit_native_or_bridged(self, account: str, asset: Asset, amount: int) -> None:
        """Burn amount of asset from account. Validate with ensure_sufficient_balance first."""
        self.ledger.debit_native_or_bridged(account, asset, amount)

    def ensure_sufficient_balance(self, account: str, asset: Asset, amount: int) -> None:
        self.ledger.ensure_sufficient_balance(account, asset, amount)

    def ensure_can_hold(self, account: str, asset: Asset, amount: int) -> None:
        self.ledger.ensure_can_hold(account, asset, amount)

    def resolve_bridged_asset(self, origin: int, foreign_id: int) -> BridgedAsset:
        """Internal asset for a bridged origin. Raises AssetIdDoesNotExist."""
        return self.state.directory.resolve(origin, foreign_id)

    def receive_bridged_transfer(self, origin: int, foreign_id: int, account: str, amount: int) -> BridgedAsset:
        """Credit an inbound bridged transfer, registering the asset on first sight.

        An unknown (origin, foreign_id) is assigned the next internal asset id.
        Nothing is registered or credited when the account cannot hold amount.

        Raises:
            UnderflowOccured: If amount is negative
            OverflowOccured: If the resulting balance would not fit
        """
        directory = self.state.directory
        if directory.contains(origin, foreign_id):
            asset = directory.resolve(origin, foreign_id)
        else:
            asset = BridgedAsset(directory.next_asset_id)
        try:
            S(amount)
            self.ledger.ensure_can_hold(account, asset, amount)
        except DexError as err:
            logger.info("operation_rejected", operation="receive_bridged_transfer", account=account, error=err.code)
            raise

        asset = directory.resolve_or_register(origin, foreign_id)
        self.ledger.credit_native_or_bridged(account, asset, amount)
        logger.info(
            "bridged_transfer_received",
            origin=origin,
            foreign_id=foreign_id,
            account=account,
            asset_id=asset.id,
            amount=amount,
        )
        return asset

    # --- Queries ---

    def get_pool(self, first_asset: Asset, second_asset: Asset) -> Pool:
        return self.registry.get_pool(first_asset, second_asset)

    def get_shares(self, account: str, first_asset: Asset, second_asset: Asset) -> int:
        return self.get_pool(first_asset, second_asset).shares_of(account)

    def balance_of(self, account: str, asset: Asset) -> int:
        return self.ledger.balance_of(account, asset)

    def quote_swap(self, asset_in: Asset, amount_in: int, asset_out: Asset) -> SwapQuote:
        """Price a swap without executing it."""
        ensure_valid_exchange(asset_in, asset_out)
        low, high, swapped = canonicalize_pair(asset_in, asset_out)
        pool = ensure_active(self.registry.load(low, high))
        return self.amm.quote_swap(
            pool, SwapDirection.from_swapped(swapped), amount_in, self.fee_config
        )

    # --- Two-phase execution ---

    def _run(self, operation: str, account: str, build: Callable[[], MutationPlan]) -> DexEvent:
        try:
            plan = build()
            self.ledger.ensure_can_apply(plan.debits, plan.credits)
        except DexError as err:
            logger.info("operation_rejected", operation=operation, account=account, error=err.code)
            raise

        self._commit(plan)
        return plan.event

    def _commit(self, plan: MutationPlan) -> None:
        try:
            for change in plan.debits:
                self.ledger.debit_native_or_bridged(*change)
            for change in plan.credits:
                self.ledger.credit_native_or_bridged(*change)
            self.registry.store(plan.low, plan.high, plan.pool)
        except Exception as err:
            logger.critical(
                "commit_failed",
                low=str(plan.low),
                high=str(plan.high),
                event_type=type(plan.event).__name__,
                error=repr(err),
            )
            raise InvariantViolation(f"Commit of a validated plan failed: {err!r}") from err

        self.events.append(plan.event)
        logger.info(type(plan.event).__name__.lower(), **event_fields(plan.event))


__all__ = ["Dex", "DexState"]
