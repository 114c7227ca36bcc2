"""
Stochastic speed variation.

Natural pace fluctuation is roughly normal around the intended speed.
Samples come from a Box-Muller transform over an injectable
random.Random so runs can be reproduced with a seed.
"""

import math
import random
from typing import Optional

# Hard bounds relative to the base speed
MIN_SPEED_RATIO = 0.2
MAX_SPEED_RATIO = 1.8

DEFAULT_VARIATION_FACTOR = 0.15


def clamp_speed(speed_kmh: float, base_speed_kmh: float) -> float:
    """Clamp to [0.2 x base, 1.8 x base]."""
    return max(
        base_speed_kmh * MIN_SPEED_RATIO,
        min(base_speed_kmh * MAX_SPEED_RATIO, speed_kmh)
    )


class SpeedVariator:
    """
    Applies bounded Gaussian noise to a base speed.

    Example:
        variator = SpeedVariator(random.Random(42))
        variator.vary(10.0)  # e.g. 11.2, always within [2.0, 18.0]
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def gaussian(self) -> float:
        """Standard normal sample (Box-Muller)."""
        u1 = 1.0 - self.rng.random()  # (0, 1], keeps log() finite
        u2 = self.rng.random()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def vary(
        self,
        base_speed_kmh: float,
        variation_factor: float = DEFAULT_VARIATION_FACTOR
    ) -> float:
        """
        Base speed scaled by (1 + N(0, 1) * variation_factor), clamped.

        Args:
            base_speed_kmh: Intended speed for the segment
            variation_factor: Standard deviation as a fraction of base speed

        Returns:
            Speed in km/h within [0.2 x base, 1.8 x base]
        """
        variation = self.gaussian() * variation_factor
        return clamp_speed(base_speed_kmh * (1.0 + variation), base_speed_kmh)
