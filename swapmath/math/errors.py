"""Pool math error classes.

These errors map to the revert conditions of the on-chain pool libraries.
"""


class UniswapMathError(ArithmeticError):
    """Base error for pool math operations."""

    pass


class InvalidSqrtPrice(UniswapMathError):
    """Sqrt price must be positive."""

    pass


class InvalidLiquidity(UniswapMathError):
    """Liquidity must be positive to derive a next price."""

    pass


class PriceOverflow(UniswapMathError):
    """Next sqrt price does not fit in uint160 or crosses zero."""

    pass


class TickOutOfBounds(UniswapMathError):
    """Tick outside [MIN_TICK, MAX_TICK]."""

    pass


class SqrtRatioOutOfBounds(UniswapMathError):
    """Sqrt price outside [MIN_SQRT_RATIO, MAX_SQRT_RATIO)."""

    pass


class LiquidityOverflow(UniswapMathError):
    """Adding liquidity would exceed uint128."""

    pass


class LiquidityUnderflow(UniswapMathError):
    """Removing more liquidity than is active."""

    pass
