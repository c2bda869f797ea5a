"""Build an engine from a genesis document."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from subdex.currency import InMemoryCurrency
from subdex.dex import Dex, DexState
from subdex.directory import AssetDirectory
from subdex.ledger import BalanceLedger
from subdex.models.genesis import GenesisConfig

logger = structlog.get_logger()


def build_state(config: GenesisConfig) -> DexState:
    """Create fresh engine state for config.

    Every endowed account receives initial_balance of every listed asset.
    No pools exist at genesis.
    """
    currency = InMemoryCurrency({account: int(amount) for account, amount in config.native_balances.items()})
    ledger = BalanceLedger(currency)
    for asset_id in config.assets:
        for account in config.endowed_accounts:
            ledger.endow(account, asset_id, config.initial_balance_int)

    return DexState(
        ledger=ledger,
        directory=AssetDirectory(next_asset_id=config.next_asset_id),
        fee_config=config.fee_config,
    )


def build_dex(config: GenesisConfig | None = None) -> Dex:
    """Create an engine from config (default: an empty genesis)."""
    config = config or GenesisConfig()
    dex = Dex(build_state(config))
    logger.info(
        "genesis_built",
        assets=len(config.assets),
        endowed_accounts=len(config.endowed_accounts),
        native_accounts=len(config.native_balances),
        fee_rate=f"{config.fee_rate.nominator}/{config.fee_rate.denominator}",
        treasury_enabled=dex.fee_config.treasury.enabled,
    )
    return dex


def load_genesis(path: str | Path) -> GenesisConfig:
    """Read and validate a genesis JSON file.

    Raises:
        OSError: If the file cannot be read
        pydantic.ValidationError: If the document is invalid
    """
    with open(path) as f:
        data = json.load(f)
    return GenesisConfig.model_validate(data)


__all__ = ["build_state", "build_dex", "load_genesis"]
