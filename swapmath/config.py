"""Configuration for swap simulation."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SwapConfig:
    """Settings for the multi-step swap loop.

    Attributes:
        max_steps: Upper bound on swap steps per simulation. A swap that
            needs more steps raises SwapStepLimitExceeded instead of
            looping over an unexpectedly dense tick map.
        log_steps: If True, every step is logged at debug level.
    """

    max_steps: int = 10_000
    log_steps: bool = False

    @classmethod
    def from_env(cls) -> "SwapConfig":
        """Build a config from SWAPMATH_* environment variables."""
        return cls(
            max_steps=int(os.environ.get("SWAPMATH_MAX_STEPS", str(cls.max_steps))),
            log_steps=os.environ.get("SWAPMATH_LOG_STEPS", "false").lower() in ("true", "1", "yes"),
        )


# Default configuration instance
DEFAULT_SWAP_CONFIG = SwapConfig()
