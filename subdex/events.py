"""Domain events recorded by committed operations."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, TypeAlias

from subdex.assets import Asset


@dataclass(frozen=True)
class Exchanged:
    """A swap was executed. Assets are in the caller's order."""

    account: str
    asset_in: Asset
    amount_in: int
    asset_out: Asset
    amount_out: int
    treasury_fee: int | None


@dataclass(frozen=True)
class Invested:
    """Liquidity was added (including pool initialization)."""

    account: str
    asset_low: Asset
    asset_high: Asset
    shares: int
    amount_low: int
    amount_high: int


@dataclass(frozen=True)
class Divested:
    """Liquidity was removed."""

    account: str
    asset_low: Asset
    asset_high: Asset
    shares: int
    amount_low: int
    amount_high: int


DexEvent: TypeAlias = Exchanged | Invested | Divested


def event_fields(event: DexEvent) -> dict[str, Any]:
    """Flatten an event for structured logging."""
    fields = asdict(event)
    for name, value in fields.items():
        if isinstance(value, dict):
            # asdict() expands nested dataclasses; restore the wire key
            fields[name] = getattr(event, name).to_key()
    return fields


__all__ = ["Exchanged", "Invested", "Divested", "DexEvent", "event_fields"]
