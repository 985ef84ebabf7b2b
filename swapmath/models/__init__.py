"""Pydantic models for the swap math API."""

from swapmath.models.swap import (
    PoolState,
    SwapRequest,
    SwapResponse,
    SwapStepRequest,
    SwapStepResponse,
)
from swapmath.models.types import Address, Int256, Uint128, Uint160, Uint256

__all__ = [
    # Types
    "Address",
    "Int256",
    "Uint128",
    "Uint160",
    "Uint256",
    # Swap models
    "SwapStepRequest",
    "SwapStepResponse",
    "PoolState",
    "SwapRequest",
    "SwapResponse",
]
