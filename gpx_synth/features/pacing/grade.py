"""
Grade-based speed adjustment.

Maps a segment's gradient to a speed multiplier. Steeper climbs slow
down more, descents speed up.

| gradient          | multiplier |
|-------------------|------------|
| > 5%              | 0.6        |
| 2% to 5%          | 0.8        |
| -5% to -2%        | 1.1        |
| < -5%             | 1.2        |
| otherwise         | 1.0        |
"""

from gpx_synth.shared.geo import calculate_gradient

STEEP_GRADIENT = 0.05
MODERATE_GRADIENT = 0.02

STEEP_UPHILL_MULTIPLIER = 0.6
MODERATE_UPHILL_MULTIPLIER = 0.8
MODERATE_DOWNHILL_MULTIPLIER = 1.1
STEEP_DOWNHILL_MULTIPLIER = 1.2


def grade_speed_multiplier(
    elevation_change_m: float,
    segment_distance_km: float
) -> float:
    """
    Speed multiplier for a segment.

    Args:
        elevation_change_m: End minus start elevation (positive = climb)
        segment_distance_km: Horizontal segment length

    Returns:
        Multiplier, 1.0 for zero-length segments
    """
    if segment_distance_km <= 0:
        return 1.0

    gradient = calculate_gradient(segment_distance_km, elevation_change_m)

    if gradient > STEEP_GRADIENT:
        return STEEP_UPHILL_MULTIPLIER
    if gradient > MODERATE_GRADIENT:
        return MODERATE_UPHILL_MULTIPLIER
    if gradient < -STEEP_GRADIENT:
        return STEEP_DOWNHILL_MULTIPLIER
    if gradient < -MODERATE_GRADIENT:
        return MODERATE_DOWNHILL_MULTIPLIER
    return 1.0
