"""Domain error classes for the exchange engine.

Every failure a caller can observe is one of these classes. They are grouped
by category so callers can catch a whole family (for example every
BalanceError) without enumerating it. The class name doubles as the stable
error code reported over the HTTP surface.
"""


class DexError(Exception):
    """Base error for exchange operations."""

    @property
    def code(self) -> str:
        """Stable error code (the class name)."""
        return type(self).__name__


# --- Existence ---


class ExistenceError(DexError):
    """A pool or asset mapping is missing, or already present."""

    pass


class ExchangeNotExists(ExistenceError):
    """No active pool for this pair (invariant == 0)."""

    pass


class ExchangeAlreadyExists(ExistenceError):
    """The pool for this pair is already active."""

    pass


class AssetIdDoesNotExist(ExistenceError):
    """No internal asset id is registered for the given bridged origin."""

    pass


# --- Validation ---


class ValidationError(DexError):
    """Request parameters are not acceptable."""

    pass


class InvalidExchange(ValidationError):
    """Both sides of the pair are the same asset."""

    pass


class LowFirstAssetAmount(ValidationError):
    """First (or input) asset amount must be positive."""

    pass


class LowSecondAssetAmount(ValidationError):
    """Second asset amount must be positive."""

    pass


class InvariantNotNull(ValidationError):
    """Pool invariant is zero where an active pool is required."""

    pass


class TotalSharesNotNull(ValidationError):
    """Pool has no outstanding shares."""

    pass


class InvalidShares(ValidationError):
    """Share amount must be positive."""

    pass


# --- Economic ---


class EconomicError(DexError):
    """Pricing outcome is unacceptable to the caller or the pool."""

    pass


class FirstAssetAmountBelowExpectation(EconomicError):
    """Low-side output is below the caller's minimum."""

    pass


class SecondAssetAmountBelowExpectation(EconomicError):
    """High-side output is below the caller's minimum."""

    pass


class InsufficientPool(EconomicError):
    """Swap would drain the output reserve."""

    pass


# --- Ownership ---


class OwnershipError(DexError):
    """Share ownership check failed."""

    pass


class DoesNotOwnShare(OwnershipError):
    """Account holds no shares of this pool."""

    pass


class InsufficientShares(OwnershipError):
    """Account (or pool) holds fewer shares than requested."""

    pass


# --- Balance ---


class BalanceError(DexError):
    """Account balance is insufficient."""

    pass


class InsufficientKsmBalance(BalanceError):
    """Native currency balance is insufficient or locked."""

    pass


class InsufficientOtherAssetBalance(BalanceError):
    """Bridged asset balance is insufficient."""

    pass


# --- Arithmetic ---


class ArithmeticFault(DexError, ArithmeticError):
    """Checked arithmetic failed."""

    pass


class OverflowOccured(ArithmeticFault):
    """Result exceeds the balance type bound."""

    pass


class UnderflowOccured(ArithmeticFault):
    """Result would be negative."""

    pass


class UnderflowOrOverflowOccured(ArithmeticFault):
    """Division by zero or an otherwise undefined result."""

    pass


# --- Defects ---


class InvariantViolation(DexError):
    """An internal invariant was breached.

    Raised when a recomputed pool invariant decreases after a swap, or when
    the commit phase of an already validated plan fails. Either case is a bug,
    never a user error.
    """

    pass


__all__ = [
    "DexError",
    "ExistenceError",
    "ExchangeNotExists",
    "ExchangeAlreadyExists",
    "AssetIdDoesNotExist",
    "ValidationError",
    "InvalidExchange",
    "LowFirstAssetAmount",
    "LowSecondAssetAmount",
    "InvariantNotNull",
    "TotalSharesNotNull",
    "InvalidShares",
    "EconomicError",
    "FirstAssetAmountBelowExpectation",
    "SecondAssetAmountBelowExpectation",
    "InsufficientPool",
    "OwnershipError",
    "DoesNotOwnShare",
    "InsufficientShares",
    "BalanceError",
    "InsufficientKsmBalance",
    "InsufficientOtherAssetBalance",
    "ArithmeticFault",
    "OverflowOccured",
    "UnderflowOccured",
    "UnderflowOrOverflowOccured",
    "InvariantViolation",
]
