"""Constants shared by the pool math and the swap loop."""

# Q64.96 fixed point used for sqrt prices
RESOLUTION = 96
Q96 = 1 << RESOLUTION

# Fees are expressed in pips (hundredths of a basis point)
# Fee = pips / 1,000,000 (e.g., 3000 = 0.3%)
FEE_PIPS_DENOMINATOR = 1_000_000

FEE_LOWEST = 100  # 0.01% - stable pairs
FEE_LOW = 500  # 0.05% - stable pairs
FEE_MEDIUM = 3000  # 0.30% - most pairs
FEE_HIGH = 10000  # 1.00% - exotic pairs

# Tick spacing per fee tier
TICK_SPACING = {
    FEE_LOWEST: 1,
    FEE_LOW: 10,
    FEE_MEDIUM: 60,
    FEE_HIGH: 200,
}


def default_tick_spacing(fee: int) -> int:
    """Tick spacing of a standard fee tier, medium spacing for any other fee."""
    return TICK_SPACING.get(fee, TICK_SPACING[FEE_MEDIUM])


__all__ = [
    "RESOLUTION",
    "Q96",
    "FEE_PIPS_DENOMINATOR",
    "FEE_LOWEST",
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "TICK_SPACING",
    "default_tick_spacing",
]
