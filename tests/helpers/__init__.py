"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Accounts, assets and common amounts
- factories: Engine, pool and fee configuration factories
"""

from tests.helpers.constants import (
    ALICE,
    ALL_ASSETS,
    ASSET_1,
    ASSET_2,
    ASSET_3,
    BOB,
    CAROL,
    INITIAL_BALANCE,
    TREASURY,
)
from tests.helpers.factories import make_dex, make_fee_config, make_pool, snapshot, total_supply

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "CAROL",
    "TREASURY",
    "ASSET_1",
    "ASSET_2",
    "ASSET_3",
    "ALL_ASSETS",
    "INITIAL_BALANCE",
    # Factories
    "make_dex",
    "make_fee_config",
    "make_pool",
    "snapshot",
    "total_supply",
]
