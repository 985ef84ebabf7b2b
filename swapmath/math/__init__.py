"""Mathematical primitives for concentrated liquidity pools.

This package provides the pool math used by the swap simulation:
- full_math: full-precision multiply-divide
- sqrt_price_math: sqrt price <-> token amount conversions
- tick_math: tick <-> sqrt price conversion
- liquidity_math: signed liquidity updates
- swap_math: the single-range swap step
"""

from swapmath.math.errors import (
    InvalidLiquidity,
    InvalidSqrtPrice,
    LiquidityOverflow,
    LiquidityUnderflow,
    PriceOverflow,
    SqrtRatioOutOfBounds,
    TickOutOfBounds,
    UniswapMathError,
)
from swapmath.math.full_math import div_rounding_up, mul_div, mul_div_rounding_up
from swapmath.math.swap_math import SwapStep, compute_swap_step

__all__ = [
    # Errors
    "UniswapMathError",
    "InvalidSqrtPrice",
    "InvalidLiquidity",
    "PriceOverflow",
    "TickOutOfBounds",
    "SqrtRatioOutOfBounds",
    "LiquidityOverflow",
    "LiquidityUnderflow",
    # Full math
    "mul_div",
    "mul_div_rounding_up",
    "div_rounding_up",
    # Swap step
    "SwapStep",
    "compute_swap_step",
]
