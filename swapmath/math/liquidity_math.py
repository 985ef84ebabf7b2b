"""Liquidity arithmetic."""

from __future__ import annotations

from swapmath.safe_int import UINT128_MAX

from .errors import LiquidityOverflow, LiquidityUnderflow


def add_delta(liquidity: int, delta: int) -> int:
    """Apply a signed liquidity delta to a uint128 liquidity value.

    Raises:
        LiquidityUnderflow: If the result would be negative
        LiquidityOverflow: If the result would exceed uint128
    """
    result = liquidity + delta
    if result < 0:
        raise LiquidityUnderflow(f"liquidity {liquidity} cannot absorb delta {delta}")
    if result > UINT128_MAX:
        raise LiquidityOverflow(f"liquidity {liquidity} + {delta} exceeds uint128")
    return result
