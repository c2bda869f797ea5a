"""Pytest configuration and fixtures."""

import pytest
from structlog.testing import capture_logs

from subdex.assets import NATIVE
from subdex.dex import Dex
from tests.helpers import ALICE, ASSET_1, TREASURY, make_dex, make_fee_config


@pytest.fixture(autouse=True)
def _quiet_logs():
    """Route structlog output through a capturing logger during tests."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def captured_logs(_quiet_logs) -> list[dict]:
    """Log entries emitted during the test, as dicts."""
    return _quiet_logs


@pytest.fixture
def dex() -> Dex:
    """Engine with ALICE and BOB funded in every test asset, no pools."""
    return make_dex()


@pytest.fixture
def native_pool_dex() -> Dex:
    """Engine with an active (NATIVE, ASSET_1) pool of reserves (1000, 2000) owned by ALICE."""
    engine = make_dex()
    engine.initialize_exchange(ALICE, NATIVE, 1000, ASSET_1, 2000)
    return engine


@pytest.fixture
def treasury_dex() -> Dex:
    """Engine with a 1/2 treasury share of a 1/100 fee and an active (NATIVE, ASSET_1) pool."""
    engine = make_dex(
        fee_config=make_fee_config(
            fee_nominator=1,
            fee_denominator=100,
            treasury_nominator=1,
            treasury_denominator=2,
            treasury_account=TREASURY,
        )
    )
    engine.initialize_exchange(ALICE, NATIVE, 1_000_000, ASSET_1, 1_000_000)
    return engine
