"""Request bodies for the HTTP surface."""

from pydantic import BaseModel, Field

from subdex.assets import Asset
from subdex.models.types import Account, AssetKey, Balance, to_asset


class InitializeExchangeRequest(BaseModel):
    """Launch a pool with the caller's first deposit."""

    account: Account
    first_asset: AssetKey = Field(alias="firstAsset")
    first_amount: Balance = Field(alias="firstAmount")
    second_asset: AssetKey = Field(alias="secondAsset")
    second_amount: Balance = Field(alias="secondAmount")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Swap an exact input for at least min_amount_out."""

    account: Account
    asset_in: AssetKey = Field(alias="assetIn")
    amount_in: Balance = Field(alias="amountIn")
    asset_out: AssetKey = Field(alias="assetOut")
    min_amount_out: Balance = Field(alias="minAmountOut")
    receiver: Account | None = Field(
        default=None,
        description="Account credited with the output (default: the caller)",
    )

    model_config = {"populate_by_name": True}


class InvestRequest(BaseModel):
    """Buy shares of an active pool."""

    account: Account
    first_asset: AssetKey = Field(alias="firstAsset")
    second_asset: AssetKey = Field(alias="secondAsset")
    shares: Balance

    model_config = {"populate_by_name": True}


class DivestRequest(BaseModel):
    """Burn shares for the proportional reserves."""

    account: Account
    first_asset: AssetKey = Field(alias="firstAsset")
    second_asset: AssetKey = Field(alias="secondAsset")
    shares: Balance
    min_first_received: Balance = Field(default="0", alias="minFirstReceived")
    min_second_received: Balance = Field(default="0", alias="minSecondReceived")

    model_config = {"populate_by_name": True}


def pair_of(request: InitializeExchangeRequest | InvestRequest | DivestRequest) -> tuple[Asset, Asset]:
    """(first, second) assets of a pair request, in the caller's order."""
    return to_asset(request.first_asset), to_asset(request.second_asset)
