"""Response bodies for the HTTP surface."""

from pydantic import BaseModel, Field

from subdex.assets import Asset
from subdex.events import Divested, Exchanged, Invested
from subdex.models.types import AssetKey, Balance
from subdex.pools.types import Pool


class PoolResponse(BaseModel):
    """Snapshot of one pool, keyed by canonical pair."""

    asset_low: AssetKey = Field(alias="assetLow")
    asset_high: AssetKey = Field(alias="assetHigh")
    reserve_low: Balance = Field(alias="reserveLow")
    reserve_high: Balance = Field(alias="reserveHigh")
    invariant: str = Field(description="reserveLow * reserveHigh as decimal string")
    total_shares: Balance = Field(alias="totalShares")
    shares: dict[str, Balance] = Field(default_factory=dict)
    active: bool

    model_config = {"populate_by_name": True}

    @classmethod
    def from_pool(cls, low: Asset, high: Asset, pool: Pool) -> "PoolResponse":
        return cls(
            asset_low=low.to_key(),
            asset_high=high.to_key(),
            reserve_low=str(pool.reserve_low),
            reserve_high=str(pool.reserve_high),
            invariant=str(pool.invariant),
            total_shares=str(pool.total_shares),
            shares={account: str(amount) for account, amount in pool.shares.items()},
            active=pool.is_active,
        )


class BalanceResponse(BaseModel):
    """Free balance of an account in one asset."""

    account: str
    asset: AssetKey
    balance: Balance


class ExchangedResponse(BaseModel):
    """Outcome of an executed swap."""

    account: str
    asset_in: AssetKey = Field(alias="assetIn")
    amount_in: Balance = Field(alias="amountIn")
    asset_out: AssetKey = Field(alias="assetOut")
    amount_out: Balance = Field(alias="amountOut")
    treasury_fee: Balance | None = Field(
        default=None,
        alias="treasuryFee",
        description="Fee sent to the treasury; absent when the treasury is disabled",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_event(cls, event: Exchanged) -> "ExchangedResponse":
        return cls(
            account=event.account,
            asset_in=event.asset_in.to_key(),
            amount_in=str(event.amount_in),
            asset_out=event.asset_out.to_key(),
            amount_out=str(event.amount_out),
            treasury_fee=None if event.treasury_fee is None else str(event.treasury_fee),
        )


class LiquidityResponse(BaseModel):
    """Outcome of an initialization, investment or divestment."""

    account: str
    asset_low: AssetKey = Field(alias="assetLow")
    asset_high: AssetKey = Field(alias="assetHigh")
    shares: Balance
    amount_low: Balance = Field(alias="amountLow")
    amount_high: Balance = Field(alias="amountHigh")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_event(cls, event: Invested | Divested) -> "LiquidityResponse":
        return cls(
            account=event.account,
            asset_low=event.asset_low.to_key(),
            asset_high=event.asset_high.to_key(),
            shares=str(event.shares),
            amount_low=str(event.amount_low),
            amount_high=str(event.amount_high),
        )
