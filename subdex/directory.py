"""Directory of bridged assets.

A bridged asset is known on its origin chain by a foreign id. The engine
assigns each (origin, foreign id) an internal BridgedAsset id on first
registration, counting up from next_asset_id. Lookups of unknown entries fail
with AssetIdDoesNotExist.
"""

from __future__ import annotations

import structlog

from subdex.assets import BridgedAsset
from subdex.errors import AssetIdDoesNotExist

logger = structlog.get_logger()


class AssetDirectory:
    """Mapping (origin, foreign_id) -> internal BridgedAsset."""

    def __init__(self, next_asset_id: int = 1) -> None:
        if next_asset_id < 0:
            raise ValueError(f"next_asset_id must be non-negative: {next_asset_id}")
        self._next_asset_id = next_asset_id
        self._by_origin: dict[tuple[int, int], BridgedAsset] = {}

    @property
    def next_asset_id(self) -> int:
        return self._next_asset_id

    def contains(self, origin: int, foreign_id: int) -> bool:
        return (origin, foreign_id) in self._by_origin

    def resolve(self, origin: int, foreign_id: int) -> BridgedAsset:
        """Internal asset for (origin, foreign_id).

        Raises:
            AssetIdDoesNotExist: If the pair was never registered
        """
        asset = self._by_origin.get((origin, foreign_id))
        if asset is None:
            raise AssetIdDoesNotExist(f"No asset registered for origin {origin}, id {foreign_id}")
        return asset

    def register(self, origin: int, foreign_id: int) -> BridgedAsset:
        """Allocate the next internal id for (origin, foreign_id).

        Raises:
            ValueError: If the pair is already registered
        """
        if (origin, foreign_id) in self._by_origin:
            raise ValueError(f"Asset already registered for origin {origin}, id {foreign_id}")
        asset = BridgedAsset(self._next_asset_id)
        self._by_origin[(origin, foreign_id)] = asset
        self._next_asset_id += 1
        logger.info("bridged_asset_registered", origin=origin, foreign_id=foreign_id, asset_id=asset.id)
        return asset

    def resolve_or_register(self, origin: int, foreign_id: int) -> BridgedAsset:
        if self.contains(origin, foreign_id):
            return self._by_origin[(origin, foreign_id)]
        return self.register(origin, foreign_id)

    def __len__(self) -> int:
        return len(self._by_origin)


__all__ = ["AssetDirectory"]
