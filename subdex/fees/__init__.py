"""Fee configuration and swap fee split."""

from subdex.fees.config import DEFAULT_FEE_CONFIG, FeeConfig, TreasuryConfig
from subdex.fees.split import FeeSplit, compute_fee_total, split_fee

__all__ = [
    "DEFAULT_FEE_CONFIG",
    "FeeConfig",
    "TreasuryConfig",
    "FeeSplit",
    "compute_fee_total",
    "split_fee",
]
