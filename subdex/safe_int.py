"""Checked integer wrapper for balance arithmetic.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
on balances, reserves and shares checked by default:
- Results above BALANCE_MAX raise OverflowOccured
- Subtraction below zero raises UnderflowOccured
- Division by zero raises UnderflowOrOverflowOccured

Every intermediate product is bounded, matching the 128-bit unsigned balance
type of the ledger. A multiplication that would not fit fails even when the
final quotient would.

Usage pattern:
    from subdex.safe_int import S

    def proportional(amount: int, numerator: int, denominator: int) -> int:
        # Wrap at entry
        sa = S(amount)

        # Natural arithmetic - automatically checked
        result = (sa * numerator) // denominator

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

from subdex.errors import OverflowOccured, UnderflowOccured, UnderflowOrOverflowOccured

BALANCE_MAX = 2**128 - 1


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Wraps an integer in [0, BALANCE_MAX] and provides arithmetic operators
    that raise the engine's arithmetic errors instead of producing values
    the balance type cannot represent.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt
            UnderflowOccured: If value is negative
            OverflowOccured: If value exceeds BALANCE_MAX
        """
        if isinstance(value, SafeInt):
            self._value = value._value
            return
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = _check_bounds(value)

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            OverflowOccured: If the sum exceeds BALANCE_MAX
        """
        other_val = _extract_value(other)
        result = self._value + other_val
        if result > BALANCE_MAX:
            raise OverflowOccured(f"Overflow: {self._value} + {other_val}")
        return SafeInt(result)

    def __radd__(self, other: int) -> SafeInt:
        return self.__add__(other)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            UnderflowOccured: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise UnderflowOccured(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        """Subtract self from other (other - self).

        Raises:
            UnderflowOccured: If result would be negative
        """
        result = other - self._value
        if result < 0:
            raise UnderflowOccured(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            OverflowOccured: If the product exceeds BALANCE_MAX
        """
        other_val = _extract_value(other)
        result = self._value * other_val
        if result > BALANCE_MAX:
            raise OverflowOccured(f"Overflow: {self._value} * {other_val}")
        return SafeInt(result)

    def __rmul__(self, other: int) -> SafeInt:
        return self.__mul__(other)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division (rounds down).

        Raises:
            UnderflowOrOverflowOccured: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise UnderflowOrOverflowOccured(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Computed as q + (r > 0) so no intermediate exceeds self.

        Raises:
            UnderflowOrOverflowOccured: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise UnderflowOrOverflowOccured(f"Ceiling division by zero: {self._value}")
        quotient, remainder = divmod(self._value, other_val)
        return SafeInt(quotient + (1 if remainder else 0))

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)


def _check_bounds(value: int) -> int:
    if value < 0:
        raise UnderflowOccured(f"Negative balance value: {value}")
    if value > BALANCE_MAX:
        raise OverflowOccured(f"Value exceeds balance max: {value}")
    return value


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
