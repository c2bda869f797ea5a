"""Pydantic models for the HTTP surface and genesis documents."""

from subdex.models.genesis import FeeRate, GenesisConfig, TreasurySettings
from subdex.models.requests import (
    DivestRequest,
    InitializeExchangeRequest,
    InvestRequest,
    SwapRequest,
    pair_of,
)
from subdex.models.responses import (
    BalanceResponse,
    ExchangedResponse,
    LiquidityResponse,
    PoolResponse,
)
from subdex.models.types import Account, AssetKey, Balance, to_asset

__all__ = [
    # Types
    "Account",
    "AssetKey",
    "Balance",
    "to_asset",
    # Genesis
    "FeeRate",
    "GenesisConfig",
    "TreasurySettings",
    # Requests
    "InitializeExchangeRequest",
    "SwapRequest",
    "InvestRequest",
    "DivestRequest",
    "pair_of",
    # Responses
    "PoolResponse",
    "BalanceResponse",
    "ExchangedResponse",
    "LiquidityResponse",
]
