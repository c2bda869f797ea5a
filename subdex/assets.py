"""Asset identity and canonical pair ordering.

An asset is either the native settlement currency or a bridged asset with a
numeric id. The set of variants is closed: every function here matches on
both cases explicitly.

Canonical order: NativeCurrency sorts before every BridgedAsset, and bridged
assets sort by id. Each unordered pair therefore has exactly one canonical
(low, high) form, which is the pool storage key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from subdex.errors import InvalidExchange

NATIVE_KEY = "native"


@dataclass(frozen=True)
class NativeCurrency:
    """The native settlement currency."""

    def to_key(self) -> str:
        return NATIVE_KEY

    def __str__(self) -> str:
        return NATIVE_KEY


@dataclass(frozen=True)
class BridgedAsset:
    """An asset bridged in from another chain, identified by internal id."""

    id: int

    def __post_init__(self) -> None:
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise TypeError(f"Bridged asset id must be an int, got {type(self.id).__name__}")
        if self.id < 0:
            raise ValueError(f"Bridged asset id must be non-negative: {self.id}")

    def to_key(self) -> str:
        return str(self.id)

    def __str__(self) -> str:
        return f"bridged#{self.id}"


Asset: TypeAlias = NativeCurrency | BridgedAsset

NATIVE = NativeCurrency()


def sort_key(asset: Asset) -> tuple[int, int]:
    """Total order key: native first, then bridged by id."""
    match asset:
        case NativeCurrency():
            return (0, 0)
        case BridgedAsset(id=asset_id):
            return (1, asset_id)
    raise TypeError(f"Not an asset: {asset!r}")


def asset_lt(a: Asset, b: Asset) -> bool:
    return sort_key(a) < sort_key(b)


def canonicalize_pair(a: Asset, b: Asset) -> tuple[Asset, Asset, bool]:
    """Return (low, high, swapped) for a pair.

    swapped is True when the caller's order was reversed to reach canonical
    order. Equal assets are returned unswapped; rejecting them is the job of
    ensure_valid_exchange.
    """
    if asset_lt(b, a):
        return b, a, True
    return a, b, False


def canonicalize_amounts(
    a: Asset, amount_a: int, b: Asset, amount_b: int
) -> tuple[Asset, int, Asset, int, bool]:
    """Canonicalize a pair and keep each amount attached to its asset.

    Returns:
        Tuple of (low, amount_low, high, amount_high, swapped)
    """
    low, high, swapped = canonicalize_pair(a, b)
    if swapped:
        return low, amount_b, high, amount_a, True
    return low, amount_a, high, amount_b, False


def ensure_valid_exchange(a: Asset, b: Asset) -> None:
    """Reject degenerate pairs (the same asset on both sides).

    Raises:
        InvalidExchange: If a and b are the same asset
    """
    match (a, b):
        case (NativeCurrency(), NativeCurrency()):
            raise InvalidExchange("Cannot exchange the native currency with itself")
        case (BridgedAsset(id=a_id), BridgedAsset(id=b_id)) if a_id == b_id:
            raise InvalidExchange(f"Cannot exchange bridged asset {a_id} with itself")


def parse_asset(raw: str | int) -> Asset:
    """Parse a wire representation: "native" or a bridged id.

    Raises:
        ValueError: If raw is neither "native" nor a non-negative integer
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return BridgedAsset(raw)
    if not isinstance(raw, str):
        raise ValueError(f"Asset must be 'native' or an integer id, got {raw!r}")
    text = raw.strip().lower()
    if text == NATIVE_KEY:
        return NATIVE
    try:
        asset_id = int(text, 10)
    except ValueError as err:
        raise ValueError(f"Asset must be 'native' or an integer id: '{raw}'") from err
    return BridgedAsset(asset_id)


__all__ = [
    "Asset",
    "NativeCurrency",
    "BridgedAsset",
    "NATIVE",
    "NATIVE_KEY",
    "sort_key",
    "canonicalize_pair",
    "canonicalize_amounts",
    "ensure_valid_exchange",
    "parse_asset",
]
