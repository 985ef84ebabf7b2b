"""Multi-step swap simulation across initialized ticks.

Runs the pool's swap loop locally: each iteration targets the next
initialized tick (or the price limit, whichever is closer), computes one
swap step within the active liquidity, and crosses the tick when it is
reached. The pool object itself is never mutated; the final state is
returned in the SwapResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from swapmath.config import DEFAULT_SWAP_CONFIG, SwapConfig
from swapmath.math.liquidity_math import add_delta
from swapmath.math.swap_math import SwapStep, compute_swap_step
from swapmath.math.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from swapmath.pool import ConcentratedLiquidityPool

logger = structlog.get_logger()


class SwapError(Exception):
    """Base error for swap simulation."""

    pass


class InvalidPriceLimit(SwapError):
    """Price limit is on the wrong side of the current price or out of range."""

    pass


class SwapStepLimitExceeded(SwapError):
    """Swap needed more steps than SwapConfig.max_steps allows."""

    pass


@dataclass(frozen=True)
class SwapResult:
    """Result of simulating a swap through a pool.

    Amounts are signed from the pool's perspective: positive amounts are
    paid into the pool, negative amounts are paid out to the swapper.
    """

    amount0: int
    amount1: int
    sqrt_price_x96: int
    tick: int
    liquidity: int
    ticks_crossed: int = 0
    steps: tuple[SwapStep, ...] = field(default_factory=tuple)


def simulate_swap(
    pool: ConcentratedLiquidityPool,
    zero_for_one: bool,
    amount_specified: int,
    sqrt_price_limit_x96: int | None = None,
    config: SwapConfig = DEFAULT_SWAP_CONFIG,
) -> SwapResult:
    """Simulate a swap against the pool state.

    Args:
        pool: Pool state to swap against
        zero_for_one: True to swap token0 for token1 (price moves down)
        amount_specified: Exact input amount if positive, negated exact
            output amount if negative
        sqrt_price_limit_x96: Price the swap may not move past. Defaults to
            the extreme price in the swap direction.
        config: Loop settings

    Returns:
        SwapResult with signed amounts and the post-swap pool state

    Raises:
        ValueError: If amount_specified is zero
        InvalidPriceLimit: If the limit is not strictly beyond the current
            price in the swap direction, or outside the valid price range
        SwapStepLimitExceeded: If the swap needs more than config.max_steps steps
        UniswapMathError: Propagated from the pool math
    """
    if amount_specified == 0:
        raise ValueError("amount_specified must be nonzero")

    if sqrt_price_limit_x96 is None:
        sqrt_price_limit_x96 = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

    if zero_for_one:
        limit_ok = MIN_SQRT_RATIO < sqrt_price_limit_x96 < pool.sqrt_price_x96
    else:
        limit_ok = pool.sqrt_price_x96 < sqrt_price_limit_x96 < MAX_SQRT_RATIO
    if not limit_ok:
        raise InvalidPriceLimit(
            f"Price limit {sqrt_price_limit_x96} invalid for current price "
            f"{pool.sqrt_price_x96} (zero_for_one={zero_for_one})"
        )

    exact_input = amount_specified > 0

    amount_remaining = amount_specified
    amount_calculated = 0
    sqrt_price_x96 = pool.sqrt_price_x96
    tick = pool.tick
    liquidity = pool.liquidity
    ticks_crossed = 0
    steps: list[SwapStep] = []

    while amount_remaining != 0 and sqrt_price_x96 != sqrt_price_limit_x96:
        if len(steps) >= config.max_steps:
            raise SwapStepLimitExceeded(
                f"Swap on pool {pool.address} exceeded {config.max_steps} steps"
            )

        sqrt_price_start_x96 = sqrt_price_x96
        tick_next, initialized = pool.next_initialized_tick(tick, lte=zero_for_one)
        tick_next = max(MIN_TICK, min(tick_next, MAX_TICK))
        sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

        if zero_for_one:
            past_limit = sqrt_price_next_x96 < sqrt_price_limit_x96
        else:
            past_limit = sqrt_price_next_x96 > sqrt_price_limit_x96
        sqrt_price_target_x96 = sqrt_price_limit_x96 if past_limit else sqrt_price_next_x96

        step = compute_swap_step(
            sqrt_price_x96,
            sqrt_price_target_x96,
            liquidity,
            amount_remaining,
            pool.fee,
        )
        steps.append(step)
        sqrt_price_x96 = step.sqrt_ratio_next_x96

        if exact_input:
            amount_remaining -= step.amount_in + step.fee_amount
            amount_calculated -= step.amount_out
        else:
            amount_remaining += step.amount_out
            amount_calculated += step.amount_in + step.fee_amount

        if config.log_steps:
            logger.debug(
                "swap_step",
                pool=pool.address,
                tick=tick,
                tick_next=tick_next,
                liquidity=liquidity,
                sqrt_price_x96=sqrt_price_x96,
                amount_in=step.amount_in,
                amount_out=step.amount_out,
                fee_amount=step.fee_amount,
            )

        if sqrt_price_x96 == sqrt_price_next_x96:
            # reached the next tick: cross it
            if initialized:
                liquidity_net = pool.liquidity_net[tick_next]
                if zero_for_one:
                    liquidity_net = -liquidity_net
                liquidity = add_delta(liquidity, liquidity_net)
                ticks_crossed += 1
            tick = tick_next - 1 if zero_for_one else tick_next
        elif sqrt_price_x96 != sqrt_price_start_x96:
            tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

    if zero_for_one == exact_input:
        amount0 = amount_specified - amount_remaining
        amount1 = amount_calculated
    else:
        amount0 = amount_calculated
        amount1 = amount_specified - amount_remaining

    logger.debug(
        "swap_simulated",
        pool=pool.address,
        zero_for_one=zero_for_one,
        amount_specified=amount_specified,
        amount0=amount0,
        amount1=amount1,
        steps=len(steps),
        ticks_crossed=ticks_crossed,
    )

    return SwapResult(
        amount0=amount0,
        amount1=amount1,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick,
        liquidity=liquidity,
        ticks_crossed=ticks_crossed,
        steps=tuple(steps),
    )


__all__ = [
    "SwapError",
    "InvalidPriceLimit",
    "SwapStepLimitExceeded",
    "SwapResult",
    "simulate_swap",
]
