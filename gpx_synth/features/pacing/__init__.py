"""
Pacing models.

Components:
- PacingCurveGenerator: warmup/peak/fatigue multiplier curve
- SpeedVariator: bounded Gaussian speed noise
- grade_speed_multiplier: gradient -> speed multiplier table
"""

from .curve import (
    PacingCurveGenerator,
    PacingPattern,
    PACING_PATTERNS,
    WARMUP_END,
    PEAK_END,
    PEAK_OSCILLATION,
    generate_pacing_curve,
)
from .variation import (
    SpeedVariator,
    clamp_speed,
    MIN_SPEED_RATIO,
    MAX_SPEED_RATIO,
    DEFAULT_VARIATION_FACTOR,
)
from .grade import grade_speed_multiplier

__all__ = [
    # Curve
    "PacingCurveGenerator",
    "PacingPattern",
    "PACING_PATTERNS",
    "WARMUP_END",
    "PEAK_END",
    "PEAK_OSCILLATION",
    "generate_pacing_curve",
    # Variation
    "SpeedVariator",
    "clamp_speed",
    "MIN_SPEED_RATIO",
    "MAX_SPEED_RATIO",
    "DEFAULT_VARIATION_FACTOR",
    # Grade
    "grade_speed_multiplier",
]
