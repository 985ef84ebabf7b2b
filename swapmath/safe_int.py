"""Safe integer wrapper for fixed-width pool arithmetic.

Python integers never overflow, so on-chain width limits have to be
enforced explicitly. SafeInt wraps an integer and makes the failure modes
of the full-precision math loud instead of silent:
- Division by zero raises DivisionByZero
- Values that do not fit the target width raise Uint256Overflow on conversion

Usage pattern:
    from swapmath.safe_int import S

    def mul_div(a: int, b: int, denominator: int) -> int:
        # Full-precision product, no intermediate truncation
        return ((S(a) * b) // denominator).to_uint256()
"""

from __future__ import annotations

UINT128_MAX = 2**128 - 1
UINT160_MAX = 2**160 - 1
UINT256_MAX = 2**256 - 1
INT256_MIN = -(2**255)
INT256_MAX = 2**255 - 1


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Uint256Overflow(SafeIntError):
    """Value does not fit the requested unsigned width."""

    pass


class SafeInt:
    """Integer with checked division and width conversion.

    Intermediate values are unbounded (a product of two uint256 operands
    is kept at full 512-bit precision); width is only checked when the
    value is converted back with to_uint256().

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up) for non-negative operands.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def to_uint(self, bits: int) -> int:
        """Convert to int, validating it fits an unsigned integer of ``bits`` width.

        Raises:
            Uint256Overflow: If value is negative or exceeds 2^bits - 1
        """
        if self._value < 0:
            raise Uint256Overflow(f"Negative value cannot be uint{bits}: {self._value}")
        if self._value >> bits:
            raise Uint256Overflow(f"Value exceeds uint{bits} max: {self._value}")
        return self._value

    def to_uint256(self) -> int:
        return self.to_uint(256)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
