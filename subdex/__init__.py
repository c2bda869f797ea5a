"""subdex - two-asset constant product exchange engine."""

__version__ = "0.1.0"

from subdex.dex import Dex, DexState  # noqa: E402

__all__ = ["Dex", "DexState", "__version__"]
