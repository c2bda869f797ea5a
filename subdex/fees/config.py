"""Fee configuration for the exchange."""

from dataclasses import dataclass, field


def _validate_fraction(name: str, nominator: int, denominator: int) -> None:
    for label, v in ((f"{name}_nominator", nominator), (f"{name}_denominator", denominator)):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{label} must be an int")
    if denominator <= 0:
        raise ValueError(f"{name}_denominator must be positive: {denominator}")
    if not 0 <= nominator <= denominator:
        raise ValueError(f"{name}_nominator must be in [0, {denominator}]: {nominator}")


@dataclass(frozen=True)
class TreasuryConfig:
    """Treasury account and its share of every swap fee.

    The treasury receives floor(fee * nominator / denominator) of each swap
    fee, in the input asset. A zero nominator disables the treasury.

    Attributes:
        account: Account credited with treasury fees
        nominator: Treasury share numerator
        denominator: Treasury share denominator
    """

    account: str = ""
    nominator: int = 0
    denominator: int = 1

    def __post_init__(self) -> None:
        _validate_fraction("treasury", self.nominator, self.denominator)
        if self.nominator > 0 and not self.account:
            raise ValueError("An enabled treasury needs an account")

    @property
    def enabled(self) -> bool:
        return self.nominator > 0


@dataclass(frozen=True)
class FeeConfig:
    """Centralized swap fee configuration.

    Set at genesis and read-only afterwards.

    Attributes:
        fee_rate_nominator: Swap fee numerator (default: 3)
        fee_rate_denominator: Swap fee denominator (default: 1000, i.e. 0.3%)
        treasury: Treasury account and fee share (default: disabled)
    """

    fee_rate_nominator: int = 3
    fee_rate_denominator: int = 1000
    treasury: TreasuryConfig = field(default_factory=TreasuryConfig)

    def __post_init__(self) -> None:
        _validate_fraction("fee_rate", self.fee_rate_nominator, self.fee_rate_denominator)


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
