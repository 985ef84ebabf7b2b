"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from swapmath.api.main import app
from swapmath.math.tick_math import get_sqrt_ratio_at_tick
from swapmath.pool import ConcentratedLiquidityPool
from tests.helpers import active_liquidity, liquidity_net_for, make_pool

# Three overlapping positions around a USDC/WETH-like price
POSITIONS = [
    (199_980, 200_700, 2 * 10**18),
    (200_280, 200_400, 8 * 10**18),
    (200_400, 200_520, 4 * 10**18),
]


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the API."""
    # Ensure dependency overrides are cleared after test
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def layered_pool() -> ConcentratedLiquidityPool:
    """Pool just above tick 200_350 with three overlapping positions."""
    liquidity_net = liquidity_net_for(POSITIONS)
    return make_pool(
        sqrt_price_x96=get_sqrt_ratio_at_tick(200_350) + 12345,
        liquidity=active_liquidity(liquidity_net, 200_350),
        liquidity_net=liquidity_net,
    )
