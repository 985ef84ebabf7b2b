"""Single swap step within one liquidity range.

A swap is assembled from steps: each step moves the price from the current
sqrt price toward a target (the next initialized tick or the caller's price
limit) using the liquidity active in between, and reports how much was
consumed, produced and charged as fee.

The step is pure and never validates its preconditions (liquidity usable
for the range, 0 <= fee_pips < 1_000_000, nonzero amount_remaining). Errors
from the price and full-precision math propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import astuple, dataclass

from swapmath.constants import FEE_PIPS_DENOMINATOR

from .full_math import mul_div, mul_div_rounding_up
from .sqrt_price_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)

__all__ = ["SwapStep", "compute_swap_step"]


@dataclass(frozen=True)
class SwapStep:
    """Result of one swap step.

    Attributes:
        sqrt_ratio_next_x96: Price after the step, between current and target inclusive
        amount_in: Input consumed to move the price (excluding fee)
        amount_out: Output produced
        fee_amount: Input retained as fee
    """

    sqrt_ratio_next_x96: int
    amount_in: int
    amount_out: int
    fee_amount: int

    def __iter__(self) -> Iterator[int]:
        return iter(astuple(self))


def compute_swap_step(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_target_x96: int,
    liquidity: int,
    amount_remaining: int,
    fee_pips: int,
) -> SwapStep:
    """Compute the result of swapping some amount in or out within one price range.

    Direction comes from the prices alone: the price moves down (token0 in,
    token1 out) when current >= target. A non-negative ``amount_remaining``
    is an exact-input amount; a negative one is the negated exact-output
    amount still wanted.

    Args:
        sqrt_ratio_current_x96: Current sqrt price (Q64.96)
        sqrt_ratio_target_x96: Price that cannot be exceeded by this step
        liquidity: Usable liquidity in the range
        amount_remaining: Amount still to be swapped in (>= 0) or out (< 0)
        fee_pips: Fee in hundredths of a basis point

    Returns:
        SwapStep with the next price, input, output and fee amounts
    """
    zero_for_one = sqrt_ratio_current_x96 >= sqrt_ratio_target_x96
    exact_in = amount_remaining >= 0

    amount_in = 0
    amount_out = 0

    if exact_in:
        amount_remaining_less_fee = mul_div(
            amount_remaining, FEE_PIPS_DENOMINATOR - fee_pips, FEE_PIPS_DENOMINATOR
        )
        if zero_for_one:
            amount_in = get_amount0_delta(
                sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, round_up=True
            )
        else:
            amount_in = get_amount1_delta(
                sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, round_up=True
            )

        if amount_remaining_less_fee >= amount_in:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_input(
                sqrt_ratio_current_x96, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        if zero_for_one:
            amount_out = get_amount1_delta(
                sqrt_ratio_target_x96, sqrt_ratio_current_x96, liquidity, round_up=False
            )
        else:
            amount_out = get_amount0_delta(
                sqrt_ratio_current_x96, sqrt_ratio_target_x96, liquidity, round_up=False
            )

        if -amount_remaining >= amount_out:
            sqrt_ratio_next_x96 = sqrt_ratio_target_x96
        else:
            sqrt_ratio_next_x96 = get_next_sqrt_price_from_output(
                sqrt_ratio_current_x96, liquidity, -amount_remaining, zero_for_one
            )

    reached_target = sqrt_ratio_target_x96 == sqrt_ratio_next_x96

    # Amounts must match the realized move; the boundary estimate is only
    # reused when the target was reached in the matching mode.
    if zero_for_one:
        if not (reached_target and exact_in):
            amount_in = get_amount0_delta(
                sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, round_up=True
            )
        if not (reached_target and not exact_in):
            amount_out = get_amount1_delta(
                sqrt_ratio_next_x96, sqrt_ratio_current_x96, liquidity, round_up=False
            )
    else:
        if not (reached_target and exact_in):
            amount_in = get_amount1_delta(
                sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, round_up=True
            )
        if not (reached_target and not exact_in):
            amount_out = get_amount0_delta(
                sqrt_ratio_current_x96, sqrt_ratio_next_x96, liquidity, round_up=False
            )

    # cap the output amount to not exceed the remaining output amount
    if not exact_in and amount_out > -amount_remaining:
        amount_out = -amount_remaining

    if exact_in and sqrt_ratio_next_x96 != sqrt_ratio_target_x96:
        # target not reached: the unspent remainder of the input is taken as fee
        fee_amount = amount_remaining - amount_in
    else:
        fee_amount = mul_div_rounding_up(amount_in, fee_pips, FEE_PIPS_DENOMINATOR - fee_pips)

    return SwapStep(
        sqrt_ratio_next_x96=sqrt_ratio_next_x96,
        amount_in=amount_in,
        amount_out=amount_out,
        fee_amount=fee_amount,
    )
