"""Sqrt price math for Q64.96 prices and liquidity.

Converts between sqrt prices and token amount deltas, and derives the next
sqrt price reachable with a given input or output amount. Rounding always
favors the pool: amounts the pool receives round up, amounts it pays out
round down, and next prices never overshoot.

The on-chain library picks between two formulas depending on whether an
intermediate product overflows 256 bits. Both formulas are reproduced
here, with the same overflow conditions, so results match bit for bit.
"""

from __future__ import annotations

from swapmath.constants import Q96, RESOLUTION
from swapmath.safe_int import UINT160_MAX, UINT256_MAX

from .errors import InvalidLiquidity, InvalidSqrtPrice, PriceOverflow
from .full_math import div_rounding_up, mul_div, mul_div_rounding_up

__all__ = [
    "get_next_sqrt_price_from_amount0_rounding_up",
    "get_next_sqrt_price_from_amount1_rounding_down",
    "get_next_sqrt_price_from_input",
    "get_next_sqrt_price_from_output",
    "get_amount0_delta",
    "get_amount1_delta",
    "get_amount0_delta_signed",
    "get_amount1_delta_signed",
]


def get_next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    """Next sqrt price after adding or removing ``amount`` of token0.

    Always rounds up: in the exact output case (increasing price) the price
    must move at least far enough to release the output, and in the exact
    input case (decreasing price) it must move less so as not to send too
    much output.

    Formula: liquidity * sqrtP / (liquidity +- amount * sqrtP), falling back
    to liquidity / (liquidity / sqrtP +- amount) when the product overflows.

    Raises:
        PriceOverflow: If the result is out of range, or removing
            ``amount`` would drain the virtual token0 reserves
    """
    # amount == 0 must return the input price exactly
    if amount == 0:
        return sqrt_price_x96
    numerator1 = liquidity << RESOLUTION

    if add:
        product = amount * sqrt_price_x96
        if product <= UINT256_MAX:
            denominator = numerator1 + product
            if denominator <= UINT256_MAX:
                # always fits in 160 bits
                return mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)

        denominator = numerator1 // sqrt_price_x96 + amount
        if denominator > UINT256_MAX:
            raise PriceOverflow(f"token0 input {amount} overflows the price denominator")
        return div_rounding_up(numerator1, denominator)

    # if the product overflows, the denominator underflows as well
    product = amount * sqrt_price_x96
    if product > UINT256_MAX or numerator1 <= product:
        raise PriceOverflow(f"token0 output {amount} exceeds virtual reserves")
    denominator = numerator1 - product
    next_price = mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)
    if next_price > UINT160_MAX:
        raise PriceOverflow(f"next sqrt price {next_price} exceeds uint160")
    return next_price


def get_next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    """Next sqrt price after adding or removing ``amount`` of token1.

    Always rounds down, for the mirror-image reasons of the token0 case.
    The result is within 1 wei of sqrtP +- amount / liquidity.

    Raises:
        PriceOverflow: If the result exceeds uint160, or removing
            ``amount`` would drain the virtual token1 reserves
    """
    # adding (removing) rounds the quotient down (up); avoid mul_div for small amounts
    if add:
        if amount <= UINT160_MAX:
            quotient = (amount << RESOLUTION) // liquidity
        else:
            quotient = mul_div(amount, Q96, liquidity)

        next_price = sqrt_price_x96 + quotient
        if next_price > UINT160_MAX:
            raise PriceOverflow(f"next sqrt price {next_price} exceeds uint160")
        return next_price

    if amount <= UINT160_MAX:
        quotient = div_rounding_up(amount << RESOLUTION, liquidity)
    else:
        quotient = mul_div_rounding_up(amount, Q96, liquidity)

    if sqrt_price_x96 <= quotient:
        raise PriceOverflow(f"token1 output {amount} exceeds virtual reserves")
    # always fits 160 bits
    return sqrt_price_x96 - quotient


def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool,
) -> int:
    """Next sqrt price after swapping ``amount_in`` of token0 (zero_for_one) or token1.

    Rounds so the returned price never passes the true target.

    Raises:
        InvalidSqrtPrice: If sqrt_price_x96 is zero
        InvalidLiquidity: If liquidity is zero
    """
    if sqrt_price_x96 <= 0:
        raise InvalidSqrtPrice(f"sqrt price must be positive, got {sqrt_price_x96}")
    if liquidity <= 0:
        raise InvalidLiquidity(f"liquidity must be positive, got {liquidity}")

    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(
            sqrt_price_x96, liquidity, amount_in, add=True
        )
    return get_next_sqrt_price_from_amount1_rounding_down(
        sqrt_price_x96, liquidity, amount_in, add=True
    )


def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool,
) -> int:
    """Next sqrt price after swapping out ``amount_out`` of token1 (zero_for_one) or token0.

    Rounds so the returned price always moves far enough to release the output.

    Raises:
        InvalidSqrtPrice: If sqrt_price_x96 is zero
        InvalidLiquidity: If liquidity is zero
    """
    if sqrt_price_x96 <= 0:
        raise InvalidSqrtPrice(f"sqrt price must be positive, got {sqrt_price_x96}")
    if liquidity <= 0:
        raise InvalidLiquidity(f"liquidity must be positive, got {liquidity}")

    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(
            sqrt_price_x96, liquidity, amount_out, add=False
        )
    return get_next_sqrt_price_from_amount0_rounding_up(
        sqrt_price_x96, liquidity, amount_out, add=False
    )


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Amount of token0 between two sqrt prices for ``liquidity``.

    Calculates liquidity / sqrt(lower) - liquidity / sqrt(upper), i.e.
    liquidity * (sqrt(upper) - sqrt(lower)) / (sqrt(upper) * sqrt(lower)).
    Prices may be passed in either order.

    Raises:
        InvalidSqrtPrice: If the lower price is zero
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_a_x96 <= 0:
        raise InvalidSqrtPrice(f"sqrt price must be positive, got {sqrt_ratio_a_x96}")

    numerator1 = liquidity << RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96,
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool,
) -> int:
    """Amount of token1 between two sqrt prices for ``liquidity``.

    Calculates liquidity * (sqrt(upper) - sqrt(lower)). Prices may be
    passed in either order.
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_amount0_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """Signed token0 delta for a liquidity change (negative when removing)."""
    if liquidity < 0:
        return -get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, round_up=False)
    return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up=True)


def get_amount1_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """Signed token1 delta for a liquidity change (negative when removing)."""
    if liquidity < 0:
        return -get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, round_up=False)
    return get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up=True)
