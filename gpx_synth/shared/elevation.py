"""
Elevation statistics for generated tracks.

Points without elevation are skipped; a track with fewer than
two elevations has no gain or loss.
"""
from typing import List, Optional, Sequence, Tuple

# Default smoothing window size (should be odd)
DEFAULT_SMOOTHING_WINDOW = 5


def smooth_elevations(
    elevations: List[float],
    window_size: int = DEFAULT_SMOOTHING_WINDOW
) -> List[float]:
    """
    Centered moving average.

    Sequences not longer than the window are returned unchanged.
    """
    if len(elevations) <= window_size:
        return list(elevations)

    half_window = window_size // 2
    smoothed = []
    for i in range(len(elevations)):
        start = max(0, i - half_window)
        end = min(len(elevations), i + half_window + 1)
        smoothed.append(sum(elevations[start:end]) / (end - start))
    return smoothed


def elevation_gain_loss(
    elevations: Sequence[Optional[float]],
    smoothing_window: int = DEFAULT_SMOOTHING_WINDOW
) -> Tuple[float, float]:
    """
    Total ascent and descent in meters.

    Args:
        elevations: Per-point elevations, None where unknown
        smoothing_window: Moving-average window applied before summing,
                          hides the +-5 m jitter of simulated profiles

    Returns:
        (gain_m, loss_m)
    """
    known = [e for e in elevations if e is not None]
    if len(known) < 2:
        return 0.0, 0.0

    known = smooth_elevations(known, smoothing_window)

    gain = sum(max(0.0, b - a) for a, b in zip(known, known[1:]))
    loss = sum(max(0.0, a - b) for a, b in zip(known, known[1:]))
    return gain, loss
