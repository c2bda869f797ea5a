"""Shared wire types for the HTTP and genesis models.

Amounts travel as decimal strings so clients never lose precision on
128-bit values. Assets travel as "native" or a decimal bridged id.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from subdex.assets import Asset, parse_asset
from subdex.safe_int import BALANCE_MAX


def validate_balance(value: Any) -> str:
    """Validate that a value is a valid 128-bit unsigned decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid balance as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within the balance range
    """
    if isinstance(value, bool):
        raise ValueError("Balance must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value, 10)
        except ValueError as err:
            raise ValueError(f"Balance must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Balance must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Balance cannot be negative: {value}")
    if int_value > BALANCE_MAX:
        raise ValueError(f"Balance overflow: {value} > 2^128-1")

    return str(int_value)


def validate_asset_key(value: Any) -> str:
    """Normalize an asset reference to its wire key ("native" or a decimal id).

    Raises:
        ValueError: If value does not name an asset
    """
    return parse_asset(value).to_key()


# 128-bit unsigned integer as decimal string (validated)
Balance = Annotated[
    str,
    BeforeValidator(validate_balance),
    Field(description="128-bit unsigned integer as decimal string"),
]

# "native" or a bridged asset id as decimal string (validated, normalized)
AssetKey = Annotated[
    str,
    BeforeValidator(validate_asset_key),
    Field(description='"native" or a bridged asset id'),
]

# Opaque account identifier
Account = Annotated[str, Field(min_length=1, max_length=128)]


def to_asset(key: str) -> Asset:
    """Convert a validated AssetKey to an Asset."""
    return parse_asset(key)
