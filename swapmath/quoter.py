"""Quoters answering exact-input and exact-output quotes from local pool state."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import structlog

from swapmath.config import DEFAULT_SWAP_CONFIG, SwapConfig
from swapmath.math.errors import UniswapMathError
from swapmath.models.types import normalize_address
from swapmath.pool import ConcentratedLiquidityPool
from swapmath.safe_int import SafeIntError
from swapmath.swap import SwapError, simulate_swap

logger = structlog.get_logger()


class Quoter(Protocol):
    """Protocol for quoter implementations."""

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
    ) -> int | None:
        """Get output amount for exact input.

        Args:
            token_in: Input token address
            token_out: Output token address
            fee: Pool fee tier (e.g., 3000)
            amount_in: Input amount

        Returns:
            Output amount, or None if quote fails
        """
        ...

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
    ) -> int | None:
        """Get input amount for exact output.

        Args:
            token_in: Input token address
            token_out: Output token address
            fee: Pool fee tier (e.g., 3000)
            amount_out: Desired output amount

        Returns:
            Required input amount, or None if quote fails
        """
        ...


PoolKey = tuple[str, str, int]


def _pool_key(token_a: str, token_b: str, fee: int) -> PoolKey:
    """Order-independent lookup key for a pool."""
    a, b = sorted((normalize_address(token_a), normalize_address(token_b)))
    return a, b, fee


class LocalQuoter:
    """Quoter that simulates swaps against pool state held in memory.

    Pools are looked up by token pair and fee tier. Each quote runs the
    full multi-step swap loop, so quotes cross initialized ticks exactly
    as the pool would.
    """

    def __init__(
        self,
        pools: Iterable[ConcentratedLiquidityPool] = (),
        config: SwapConfig = DEFAULT_SWAP_CONFIG,
    ):
        self.config = config
        self._pools: dict[PoolKey, ConcentratedLiquidityPool] = {}
        for pool in pools:
            self.add_pool(pool)

    def add_pool(self, pool: ConcentratedLiquidityPool) -> None:
        """Register a pool, replacing any pool with the same pair and fee."""
        self._pools[_pool_key(pool.token0, pool.token1, pool.fee)] = pool

    def get_pool(self, token_in: str, token_out: str, fee: int) -> ConcentratedLiquidityPool | None:
        """Look up the pool for a token pair and fee tier."""
        return self._pools.get(_pool_key(token_in, token_out, fee))

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
    ) -> int | None:
        """Get output amount for exact input."""
        pool = self.get_pool(token_in, token_out, fee)
        if pool is None:
            logger.warning(
                "quote_pool_not_found",
                token_in=token_in,
                token_out=token_out,
                fee=fee,
            )
            return None

        zero_for_one = pool.is_token0(token_in)
        try:
            result = simulate_swap(pool, zero_for_one, amount_in, config=self.config)
        except (UniswapMathError, SafeIntError, SwapError, ValueError) as e:
            logger.warning(
                "quote_exact_input_failed",
                pool=pool.address,
                token_in=token_in,
                amount_in=amount_in,
                error=str(e),
            )
            return None

        return -(result.amount1 if zero_for_one else result.amount0)

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
    ) -> int | None:
        """Get input amount for exact output.

        Returns None when the pool runs out of liquidity before the full
        output amount can be delivered.
        """
        pool = self.get_pool(token_in, token_out, fee)
        if pool is None:
            logger.warning(
                "quote_pool_not_found",
                token_in=token_in,
                token_out=token_out,
                fee=fee,
            )
            return None

        zero_for_one = pool.is_token0(token_in)
        try:
            result = simulate_swap(pool, zero_for_one, -amount_out, config=self.config)
        except (UniswapMathError, SafeIntError, SwapError, ValueError) as e:
            logger.warning(
                "quote_exact_output_failed",
                pool=pool.address,
                token_in=token_in,
                amount_out=amount_out,
                error=str(e),
            )
            return None

        received = -(result.amount1 if zero_for_one else result.amount0)
        if received < amount_out:
            logger.warning(
                "quote_exact_output_insufficient_liquidity",
                pool=pool.address,
                token_in=token_in,
                amount_out=amount_out,
                received=received,
            )
            return None

        return result.amount0 if zero_for_one else result.amount1


__all__ = [
    "Quoter",
    "LocalQuoter",
]
