"""Pydantic model for the genesis document.

A genesis document seeds a fresh engine: fee settings, the treasury, native
balances, and an equal endowment of every listed bridged asset to every
endowed account.
"""

from pydantic import BaseModel, Field, model_validator

from subdex.fees.config import FeeConfig, TreasuryConfig
from subdex.models.types import Account, Balance


class FeeRate(BaseModel):
    """Swap fee as a fraction of the input amount."""

    nominator: int = Field(default=3, ge=0)
    denominator: int = Field(default=1000, gt=0)

    @model_validator(mode="after")
    def _check_fraction(self) -> "FeeRate":
        if self.nominator > self.denominator:
            raise ValueError(f"Fee rate {self.nominator}/{self.denominator} exceeds 1")
        return self


class TreasurySettings(BaseModel):
    """Treasury account and its share of each swap fee."""

    account: str = ""
    nominator: int = Field(default=0, ge=0)
    denominator: int = Field(default=1, gt=0)

    @model_validator(mode="after")
    def _check_treasury(self) -> "TreasurySettings":
        if self.nominator > self.denominator:
            raise ValueError(f"Treasury share {self.nominator}/{self.denominator} exceeds 1")
        if self.nominator > 0 and not self.account:
            raise ValueError("An enabled treasury needs an account")
        return self


class GenesisConfig(BaseModel):
    """Initial engine state."""

    assets: list[int] = Field(
        default_factory=list,
        description="Bridged asset ids endowed to every endowed account",
    )
    initial_balance: Balance = Field(
        default="0",
        alias="initialBalance",
        description="Amount of each listed asset given to each endowed account",
    )
    endowed_accounts: list[Account] = Field(default_factory=list, alias="endowedAccounts")
    treasury: TreasurySettings = Field(default_factory=TreasurySettings)
    fee_rate: FeeRate = Field(default_factory=FeeRate, alias="feeRate")
    next_asset_id: int = Field(
        default=1,
        ge=0,
        alias="nextAssetId",
        description="First internal id handed out by the bridged asset directory",
    )
    native_balances: dict[Account, Balance] = Field(default_factory=dict, alias="nativeBalances")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_assets(self) -> "GenesisConfig":
        for asset_id in self.assets:
            if asset_id < 0:
                raise ValueError(f"Asset id must be non-negative: {asset_id}")
            if asset_id >= self.next_asset_id:
                raise ValueError(
                    f"Asset id {asset_id} collides with ids allocated from nextAssetId "
                    f"{self.next_asset_id}"
                )
        return self

    @property
    def initial_balance_int(self) -> int:
        return int(self.initial_balance)

    @property
    def fee_config(self) -> FeeConfig:
        """Engine fee configuration for this genesis."""
        return FeeConfig(
            fee_rate_nominator=self.fee_rate.nominator,
            fee_rate_denominator=self.fee_rate.denominator,
            treasury=TreasuryConfig(
                account=self.treasury.account,
                nominator=self.treasury.nominator,
                denominator=self.treasury.denominator,
            ),
        )
