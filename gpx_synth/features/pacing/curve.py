"""
Pacing Curve Generator

Per-point speed multipliers modelling how unassisted effort evolves
over an activity:

1. Warmup (first 20%): linear ramp from a floor up to 1.0
2. Peak (20% to 70%): above target, with one full sine cycle of +-0.03
3. Fatigue (last 30%): linear decay from peak down to a floor

Patterns per activity:
    Run:  0.85 -> 1.08 -> 0.92
    Bike: 0.90 -> 1.05 -> 0.95
    Walk: 0.95 -> 1.02 -> 0.98
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from gpx_synth.shared.constants import ActivityType


# Phase boundaries as fraction of the route
WARMUP_END = 0.2
PEAK_END = 0.7

# Amplitude of the sine oscillation during the peak phase
PEAK_OSCILLATION = 0.03


@dataclass(frozen=True)
class PacingPattern:
    """Multipliers that shape one activity's curve."""
    warmup: float   # value at the very start
    peak: float     # plateau value between WARMUP_END and PEAK_END
    fatigue: float  # value at the very end


PACING_PATTERNS: Dict[ActivityType, PacingPattern] = {
    ActivityType.RUN: PacingPattern(warmup=0.85, peak=1.08, fatigue=0.92),
    ActivityType.BIKE: PacingPattern(warmup=0.90, peak=1.05, fatigue=0.95),
    ActivityType.WALK: PacingPattern(warmup=0.95, peak=1.02, fatigue=0.98),
}


class PacingCurveGenerator:
    """
    Builds the warmup/peak/fatigue multiplier curve.

    Example usage:
        generator = PacingCurveGenerator()
        curve = generator.generate(11, ActivityType.RUN)
        curve[0]   # 0.85
        curve[10]  # 0.92
    """

    def __init__(self, patterns: Optional[Dict[ActivityType, PacingPattern]] = None):
        self.patterns = patterns or PACING_PATTERNS

    def multiplier_at(self, progress: float, activity: ActivityType) -> float:
        """
        Multiplier for a position along the route.

        Args:
            progress: 0.0 (start) to 1.0 (finish)
            activity: Activity whose pattern to use
        """
        pattern = self.patterns[activity]

        if progress < WARMUP_END:
            warmup_progress = progress / WARMUP_END
            return pattern.warmup + (1.0 - pattern.warmup) * warmup_progress

        if progress < PEAK_END:
            peak_progress = (progress - WARMUP_END) / (PEAK_END - WARMUP_END)
            oscillation = math.sin(peak_progress * math.pi * 2) * PEAK_OSCILLATION
            return pattern.peak + oscillation

        fatigue_progress = (progress - PEAK_END) / (1.0 - PEAK_END)
        return pattern.peak - (pattern.peak - pattern.fatigue) * fatigue_progress

    def generate(self, point_count: int, activity: ActivityType) -> List[float]:
        """
        Multiplier curve, one value per point.

        A single point has no segment to pace; its value is 1.0.
        """
        if point_count <= 0:
            return []
        if point_count == 1:
            return [1.0]

        return [
            self.multiplier_at(i / (point_count - 1), activity)
            for i in range(point_count)
        ]


def generate_pacing_curve(point_count: int, activity: ActivityType) -> List[float]:
    """Shortcut for PacingCurveGenerator().generate()."""
    return PacingCurveGenerator().generate(point_count, activity)
