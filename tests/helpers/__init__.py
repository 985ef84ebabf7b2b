"""Test helpers module for shared test utilities.

- constants: Token addresses and common amounts
- factories: Price encoding and pool factory functions
"""

from tests.helpers.constants import (
    DAI,
    ONE_ETHER,
    SQRT_PRICE_1_1,
    USDC,
    USDC_WETH_POOL,
    WETH,
)
from tests.helpers.factories import (
    active_liquidity,
    encode_price_sqrt,
    expand_to_18_decimals,
    liquidity_net_for,
    make_pool,
)

__all__ = [
    # Constants
    "USDC",
    "WETH",
    "DAI",
    "USDC_WETH_POOL",
    "ONE_ETHER",
    "SQRT_PRICE_1_1",
    # Factories
    "encode_price_sqrt",
    "expand_to_18_decimals",
    "make_pool",
    "liquidity_net_for",
    "active_liquidity",
]
