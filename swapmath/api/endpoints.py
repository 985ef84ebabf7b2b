"""API endpoints for swap step and swap simulation."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from swapmath.config import SwapConfig
from swapmath.math.errors import UniswapMathError
from swapmath.math.swap_math import SwapStep, compute_swap_step
from swapmath.models.swap import (
    SwapRequest,
    SwapResponse,
    SwapStepRequest,
    SwapStepResponse,
)
from swapmath.pool import ConcentratedLiquidityPool
from swapmath.safe_int import SafeIntError
from swapmath.swap import SwapError, simulate_swap

logger = structlog.get_logger()

router = APIRouter()


def get_swap_config() -> SwapConfig:
    """Dependency provider for the swap loop configuration.

    Override this in tests to inject a different config:
        app.dependency_overrides[get_swap_config] = lambda: SwapConfig(max_steps=1)
    """
    return SwapConfig.from_env()


def _step_response(step: SwapStep) -> SwapStepResponse:
    return SwapStepResponse(
        sqrt_price_next_x96=str(step.sqrt_ratio_next_x96),
        amount_in=str(step.amount_in),
        amount_out=str(step.amount_out),
        fee_amount=str(step.fee_amount),
    )


@router.post("/swap-step")
async def swap_step(request: SwapStepRequest) -> SwapStepResponse:
    """Compute one swap step within a single liquidity range.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - Math failure (overflow, invalid price): Returns 400 with detail
    """
    try:
        step = compute_swap_step(
            int(request.sqrt_price_current_x96),
            int(request.sqrt_price_target_x96),
            int(request.liquidity),
            int(request.amount_remaining),
            request.fee_pips,
        )
    except (UniswapMathError, SafeIntError) as e:
        logger.warning("swap_step_failed", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return _step_response(step)


@router.post("/swap")
async def swap(
    request: SwapRequest,
    config: SwapConfig = Depends(get_swap_config),
) -> SwapResponse:
    """Simulate a full swap across the initialized ticks of one pool.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - Invalid price limit, step limit or math failure: Returns 400 with detail
    """
    state = request.pool
    pool = ConcentratedLiquidityPool(
        address=state.address,
        token0="0x" + "00" * 20,
        token1="0x" + "00" * 19 + "01",
        fee=state.fee,
        sqrt_price_x96=int(state.sqrt_price_x96),
        liquidity=int(state.liquidity),
        tick=state.tick,
        liquidity_net={tick: int(net) for tick, net in state.liquidity_net.items()},
        tick_spacing=state.tick_spacing,
    )

    logger.info(
        "received_swap",
        pool=pool.address,
        zero_for_one=request.zero_for_one,
        amount_specified=request.amount_specified,
        initialized_ticks=len(pool.liquidity_net),
    )

    limit = request.sqrt_price_limit_x96
    try:
        result = simulate_swap(
            pool,
            request.zero_for_one,
            int(request.amount_specified),
            sqrt_price_limit_x96=int(limit) if limit is not None else None,
            config=config,
        )
    except (SwapError, UniswapMathError, SafeIntError, ValueError) as e:
        logger.warning("swap_failed", pool=pool.address, error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return SwapResponse(
        amount0=str(result.amount0),
        amount1=str(result.amount1),
        sqrt_price_x96=str(result.sqrt_price_x96),
        tick=result.tick,
        liquidity=str(result.liquidity),
        ticks_crossed=result.ticks_crossed,
        steps=[_step_response(step) for step in result.steps],
    )
