"""API endpoints for the exchange engine."""

import os
import threading
from collections.abc import Callable
from typing import TypeVar

import structlog
from fastapi import APIRouter, Depends, HTTPException

from subdex.assets import canonicalize_pair
from subdex.dex import Dex
from subdex.errors import DexError
from subdex.genesis import build_dex, load_genesis
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
from subdex.models.types import to_asset, validate_asset_key

logger = structlog.get_logger()

router = APIRouter()

T = TypeVar("T")

# Engine calls are serialized: sync endpoints run on a thread pool.
_engine_lock = threading.Lock()

_default_dex: Dex | None = None


def _create_default_dex() -> Dex:
    """Create the default engine, from SUBDEX_GENESIS if set."""
    genesis_path = os.environ.get("SUBDEX_GENESIS")
    if genesis_path:
        logger.info("loading_genesis", path=genesis_path)
        return build_dex(load_genesis(genesis_path))
    logger.info("empty_genesis", reason="SUBDEX_GENESIS not set")
    return build_dex()


def get_default_dex() -> Dex:
    global _default_dex
    with _engine_lock:
        if _default_dex is None:
            _default_dex = _create_default_dex()
        return _default_dex


def get_dex() -> Dex:
    """Dependency provider for the engine instance.

    Override this in tests to inject a prepared engine:
        app.dependency_overrides[get_dex] = lambda: dex

    Returns:
        The engine every endpoint operates on.
    """
    return get_default_dex()


def _call(operation: str, fn: Callable[[], T]) -> T:
    """Run an engine call under the lock, mapping domain errors to 400."""
    try:
        with _engine_lock:
            return fn()
    except DexError as err:
        raise HTTPException(status_code=400, detail={"error": err.code, "message": str(err)}) from err
    except Exception:
        logger.exception("engine_error", operation=operation)
        raise


def _parse_asset_param(raw: str) -> str:
    try:
        return validate_asset_key(raw)
    except (TypeError, ValueError) as err:
        raise HTTPException(status_code=422, detail=f"Invalid asset: '{raw}'") from err


@router.post("/exchanges", response_model_exclude_none=True)
def initialize_exchange(
    request: InitializeExchangeRequest,
    dex: Dex = Depends(get_dex),
) -> LiquidityResponse:
    """Launch the pool for a pair with the caller's first deposit."""
    first, second = pair_of(request)
    event = _call(
        "initialize_exchange",
        lambda: dex.initialize_exchange(
            request.account,
            first,
            int(request.first_amount),
            second,
            int(request.second_amount),
        ),
    )
    return LiquidityResponse.from_event(event)


@router.post("/swap", response_model_exclude_none=True)
def swap(
    request: SwapRequest,
    dex: Dex = Depends(get_dex),
) -> ExchangedResponse:
    """Swap an exact input amount.

    The treasury fee is omitted from the response when the treasury is
    disabled.
    """
    event = _call(
        "swap",
        lambda: dex.swap(
            request.account,
            to_asset(request.asset_in),
            int(request.amount_in),
            to_asset(request.asset_out),
            int(request.min_amount_out),
            receiver=request.receiver,
        ),
    )
    return ExchangedResponse.from_event(event)


@router.post("/invest", response_model_exclude_none=True)
def invest(
    request: InvestRequest,
    dex: Dex = Depends(get_dex),
) -> LiquidityResponse:
    """Buy shares of an active pool."""
    first, second = pair_of(request)
    event = _call(
        "invest_liquidity",
        lambda: dex.invest_liquidity(request.account, first, second, int(request.shares)),
    )
    return LiquidityResponse.from_event(event)


@router.post("/divest", response_model_exclude_none=True)
def divest(
    request: DivestRequest,
    dex: Dex = Depends(get_dex),
) -> LiquidityResponse:
    """Burn shares for the proportional reserves."""
    first, second = pair_of(request)
    event = _call(
        "divest_liquidity",
        lambda: dex.divest_liquidity(
            request.account,
            first,
            second,
            int(request.shares),
            min_first_received=int(request.min_first_received),
            min_second_received=int(request.min_second_received),
        ),
    )
    return LiquidityResponse.from_event(event)


@router.get("/exchanges/{first}/{second}")
def get_exchange(first: str, second: str, dex: Dex = Depends(get_dex)) -> PoolResponse:
    """Pool snapshot for a pair given in any order.

    A pair that was never initialized reports the zero pool.
    """
    low, high, _ = canonicalize_pair(
        to_asset(_parse_asset_param(first)), to_asset(_parse_asset_param(second))
    )
    pool = _call("get_pool", lambda: dex.get_pool(low, high))
    return PoolResponse.from_pool(low, high, pool)


@router.get("/balances/{account}/{asset}")
def get_balance(account: str, asset: str, dex: Dex = Depends(get_dex)) -> BalanceResponse:
    """Free balance of account in asset."""
    key = _parse_asset_param(asset)
    balance = _call("balance_of", lambda: dex.balance_of(account, to_asset(key)))
    return BalanceResponse(account=account, asset=key, balance=str(balance))
