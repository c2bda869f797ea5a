"""Pool management package.

Provides the Pool snapshot type and the PoolRegistry keyed by canonical pair.
"""

from .registry import PoolRegistry, ensure_active, ensure_launchable
from .types import Pool, PoolKey

__all__ = [
    "Pool",
    "PoolKey",
    "PoolRegistry",
    "ensure_active",
    "ensure_launchable",
]
