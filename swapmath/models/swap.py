"""Pydantic models for the swap step and swap simulation endpoints."""

from pydantic import BaseModel, Field, field_validator, model_validator

from swapmath.constants import FEE_PIPS_DENOMINATOR, default_tick_spacing
from swapmath.models.types import Address, Int256, Uint128, Uint160, Uint256


class SwapStepRequest(BaseModel):
    """Inputs of a single swap step."""

    sqrt_price_current_x96: Uint160 = Field(alias="sqrtPriceCurrentX96")
    sqrt_price_target_x96: Uint160 = Field(alias="sqrtPriceTargetX96")
    liquidity: Uint128
    amount_remaining: Int256 = Field(
        alias="amountRemaining",
        description="Exact input if positive, negated exact output if negative.",
    )
    fee_pips: int = Field(alias="feePips", ge=0, lt=FEE_PIPS_DENOMINATOR)

    model_config = {"populate_by_name": True}

    @field_validator("amount_remaining")
    @classmethod
    def amount_nonzero(cls, value: str) -> str:
        if int(value) == 0:
            raise ValueError("amountRemaining must be nonzero")
        return value


class SwapStepResponse(BaseModel):
    """Outputs of a single swap step."""

    sqrt_price_next_x96: Uint160 = Field(alias="sqrtPriceNextX96")
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    fee_amount: Uint256 = Field(alias="feeAmount")

    model_config = {"populate_by_name": True}


class PoolState(BaseModel):
    """Pool state to simulate a swap against."""

    address: Address = Field(default="0x" + "00" * 20)
    sqrt_price_x96: Uint160 = Field(alias="sqrtPriceX96")
    liquidity: Uint128
    tick: int
    fee: int = Field(ge=0, lt=FEE_PIPS_DENOMINATOR)
    tick_spacing: int | None = Field(default=None, alias="tickSpacing", gt=0)
    liquidity_net: dict[int, Int256] = Field(
        default_factory=dict,
        alias="liquidityNet",
        description="Net liquidity change per initialized tick.",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def ticks_on_spacing(self) -> "PoolState":
        """Initialized ticks must be multiples of the pool's tick spacing."""
        spacing = self.tick_spacing or default_tick_spacing(self.fee)
        off_spacing = sorted(t for t in self.liquidity_net if t % spacing)
        if off_spacing:
            raise ValueError(
                f"liquidityNet ticks {off_spacing} are not multiples of tick spacing {spacing}"
            )
        return self


class SwapRequest(BaseModel):
    """A swap to simulate against a pool."""

    pool: PoolState
    zero_for_one: bool = Field(alias="zeroForOne")
    amount_specified: Int256 = Field(
        alias="amountSpecified",
        description="Exact input if positive, negated exact output if negative.",
    )
    sqrt_price_limit_x96: Uint160 | None = Field(default=None, alias="sqrtPriceLimitX96")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    """Signed pool amounts and post-swap state."""

    amount0: Int256
    amount1: Int256
    sqrt_price_x96: Uint160 = Field(alias="sqrtPriceX96")
    tick: int
    liquidity: Uint128
    ticks_crossed: int = Field(alias="ticksCrossed")
    steps: list[SwapStepResponse] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
