"""AMM pricing."""

from subdex.amm.base import AMM, SwapDirection, SwapQuote
from subdex.amm.constant_product import ConstantProduct, constant_product, get_reserves

__all__ = [
    "AMM",
    "SwapDirection",
    "SwapQuote",
    "ConstantProduct",
    "constant_product",
    "get_reserves",
]
