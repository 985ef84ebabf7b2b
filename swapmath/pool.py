"""Concentrated liquidity pool state."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field

from swapmath.constants import FEE_PIPS_DENOMINATOR, default_tick_spacing
from swapmath.math.tick_math import MAX_TICK, MIN_TICK
from swapmath.models.types import normalize_address


@dataclass
class ConcentratedLiquidityPool:
    """Represents a concentrated liquidity pool.

    Liquidity is concentrated in price ranges bounded by ticks. The pool
    state includes:
    - Current price (as sqrt_price_x96)
    - Current tick
    - Active liquidity at the current tick
    - Net liquidity change at each initialized tick

    liquidity_net[t] is added to the active liquidity when the price crosses
    tick t upward, and subtracted when it crosses downward.
    """

    address: str
    token0: str
    token1: str
    fee: int  # Fee in pips (e.g., 3000 for 0.3%)
    sqrt_price_x96: int  # Current sqrt(price) * 2^96
    liquidity: int  # Current active liquidity
    tick: int  # Current tick index
    liquidity_net: dict[int, int] = field(default_factory=dict)  # tick -> net liquidity
    tick_spacing: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.fee < FEE_PIPS_DENOMINATOR:
            raise ValueError(f"Fee {self.fee} outside [0, {FEE_PIPS_DENOMINATOR})")
        if self.tick_spacing is None:
            self.tick_spacing = default_tick_spacing(self.fee)
        if self.tick_spacing <= 0:
            raise ValueError(f"Tick spacing must be positive, got {self.tick_spacing}")
        off_spacing = sorted(t for t in self.liquidity_net if t % self.tick_spacing)
        if off_spacing:
            raise ValueError(
                f"Initialized ticks {off_spacing} are not multiples of "
                f"tick spacing {self.tick_spacing}"
            )

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == normalize_address(self.token0):
            return self.token1
        elif token_in_norm == normalize_address(self.token1):
            return self.token0
        else:
            raise ValueError(f"Token {token_in} not in pool")

    def is_token0(self, token: str) -> bool:
        """Check if token is token0 (determines swap direction)."""
        return normalize_address(token) == normalize_address(self.token0)

    def next_initialized_tick(self, tick: int, lte: bool) -> tuple[int, bool]:
        """Find the next initialized tick from ``tick`` in the swap direction.

        Args:
            tick: Tick to search from
            lte: If True, search for the greatest initialized tick <= tick
                (price moving down); otherwise the smallest one > tick.

        Returns:
            (next_tick, initialized). When no initialized tick exists in that
            direction, the tick range bound is returned with initialized=False.
        """
        ticks = sorted(self.liquidity_net)
        if lte:
            index = bisect_right(ticks, tick)
            if index == 0:
                return MIN_TICK, False
            return ticks[index - 1], True

        index = bisect_left(ticks, tick + 1)
        if index == len(ticks):
            return MAX_TICK, False
        return ticks[index], True


__all__ = ["ConcentratedLiquidityPool"]
