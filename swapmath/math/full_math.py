"""Full-precision multiply-divide.

Mirrors the FullMath/UnsafeMath libraries of the concentrated liquidity
pool. The product ``a * b`` is kept at full (512-bit) precision before the
division, and the quotient is checked against the uint256 output width,
so results never silently truncate.
"""

from __future__ import annotations

from swapmath.safe_int import S, SafeInt

__all__ = [
    "mul_div",
    "mul_div_rounding_up",
    "div_rounding_up",
]


def _uint256(value: int) -> SafeInt:
    """Wrap an operand, rejecting anything outside uint256."""
    wrapped = S(value)
    wrapped.to_uint256()
    return wrapped


def mul_div(a: int, b: int, denominator: int) -> int:
    """Calculate floor(a * b / denominator) with full precision.

    Raises:
        DivisionByZero: If denominator is zero
        Uint256Overflow: If an operand is not a uint256 or the result overflows
    """
    product = _uint256(a) * _uint256(b)
    return (product // _uint256(denominator)).to_uint256()


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """Calculate ceil(a * b / denominator) with full precision.

    Raises:
        DivisionByZero: If denominator is zero
        Uint256Overflow: If an operand is not a uint256 or the result overflows
    """
    product = _uint256(a) * _uint256(b)
    return product.ceiling_div(_uint256(denominator)).to_uint256()


def div_rounding_up(x: int, y: int) -> int:
    """Calculate ceil(x / y) for uint256 operands.

    Raises:
        DivisionByZero: If y is zero
    """
    return _uint256(x).ceiling_div(_uint256(y)).to_uint256()
