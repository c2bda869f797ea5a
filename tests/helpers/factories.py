"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_dex
    # or
    from tests.helpers.factories import make_dex, make_pool

    dex = make_dex(accounts=[ALICE, BOB])
"""

from collections.abc import Iterable, Mapping

from subdex.assets import Asset, BridgedAsset, NativeCurrency
from subdex.currency import InMemoryCurrency
from subdex.dex import Dex, DexState
from subdex.directory import AssetDirectory
from subdex.fees.config import FeeConfig, TreasuryConfig
from subdex.ledger import BalanceLedger
from subdex.pools.types import Pool
from tests.helpers.constants import ALICE, ALL_ASSETS, BOB, INITIAL_BALANCE, TREASURY


def make_fee_config(
    fee_nominator: int = 3,
    fee_denominator: int = 1000,
    treasury_nominator: int = 0,
    treasury_denominator: int = 1,
    treasury_account: str = TREASURY,
) -> FeeConfig:
    """Create a fee configuration; the treasury is enabled by a positive nominator."""
    return FeeConfig(
        fee_rate_nominator=fee_nominator,
        fee_rate_denominator=fee_denominator,
        treasury=TreasuryConfig(
            account=treasury_account if treasury_nominator > 0 else "",
            nominator=treasury_nominator,
            denominator=treasury_denominator,
        ),
    )


def make_dex(
    accounts: Iterable[str] = (ALICE, BOB),
    assets: Iterable[Asset] = ALL_ASSETS,
    balance: int = INITIAL_BALANCE,
    fee_config: FeeConfig | None = None,
) -> Dex:
    """Create an engine where every account holds balance of every asset.

    Args:
        accounts: Accounts to fund (default: ALICE and BOB)
        assets: Assets to fund, native included (default: all test assets)
        balance: Amount of each asset per account (default: INITIAL_BALANCE)
        fee_config: Fee configuration (default: 3/1000, treasury disabled)

    Returns:
        Dex with no pools
    """
    accounts = list(accounts)
    assets = list(assets)
    currency = InMemoryCurrency()
    ledger = BalanceLedger(currency)
    for asset in assets:
        for account in accounts:
            match asset:
                case NativeCurrency():
                    currency.deposit_creating(account, balance)
                case BridgedAsset(id=asset_id):
                    ledger.endow(account, asset_id, balance)

    bridged_ids = [asset.id for asset in assets if isinstance(asset, BridgedAsset)]
    state = DexState(
        ledger=ledger,
        directory=AssetDirectory(next_asset_id=max(bridged_ids, default=0) + 1),
        fee_config=fee_config or make_fee_config(),
    )
    return Dex(state)


def make_pool(
    reserve_low: int,
    reserve_high: int,
    shares: Mapping[str, int] | None = None,
) -> Pool:
    """Create an active pool snapshot.

    Shares default to ALICE holding reserve_low, as after initialization.
    """
    shares = dict(shares) if shares is not None else {ALICE: reserve_low}
    return Pool.zero().with_state(
        reserve_low=reserve_low,
        reserve_high=reserve_high,
        total_shares=sum(shares.values()),
        shares=shares,
    )


def total_supply(dex: Dex, asset: Asset) -> int:
    """Sum of asset across every ledger holder and every pool reserve."""
    match asset:
        case NativeCurrency():
            held = dex.ledger.currency.total_issuance()
        case BridgedAsset(id=asset_id):
            held = dex.ledger.total_of(asset_id)

    in_pools = 0
    for low, high, pool in dex.registry.iter_pools():
        if low == asset:
            in_pools += pool.reserve_low
        elif high == asset:
            in_pools += pool.reserve_high
    return held + in_pools


def snapshot(dex: Dex) -> tuple:
    """Hashable view of all ledger and pool state, for no-mutation checks."""
    native = tuple(sorted(dex.ledger.currency.balances().items()))
    rows = tuple(sorted(dex.ledger.rows().items()))
    pools = tuple(
        (low.to_key(), high.to_key(), pool.reserve_low, pool.reserve_high, pool.invariant,
         pool.total_shares, tuple(sorted(pool.shares.items())))
        for low, high, pool in dex.registry.iter_pools()
    )
    return native, rows, pools, len(dex.events)

