"""Concentrated liquidity swap math - Python implementation."""

from swapmath.math.swap_math import SwapStep, compute_swap_step
from swapmath.pool import ConcentratedLiquidityPool
from swapmath.quoter import LocalQuoter
from swapmath.swap import SwapResult, simulate_swap

__version__ = "0.1.0"
__all__ = [
    "SwapStep",
    "compute_swap_step",
    "ConcentratedLiquidityPool",
    "SwapResult",
    "simulate_swap",
    "LocalQuoter",
    "__version__",
]
