"""
Tests for the warmup/peak/fatigue pacing curve.
"""

import pytest

from gpx_synth.features.pacing import (
    PacingCurveGenerator,
    PacingPattern,
    PACING_PATTERNS,
    PEAK_OSCILLATION,
    generate_pacing_curve,
)
from gpx_synth.shared.constants import ActivityType


@pytest.fixture
def generator():
    return PacingCurveGenerator()


# =============================================================================
# Test Curve Shape
# =============================================================================

class TestRunCurve:
    """11-point Run curve: progress 0.0, 0.1, ..., 1.0."""

    @pytest.fixture
    def curve(self, generator):
        return generator.generate(11, ActivityType.RUN)

    def test_length(self, curve):
        assert len(curve) == 11

    def test_starts_at_warmup_floor(self, curve):
        assert curve[0] == pytest.approx(0.85)

    def test_ends_at_fatigue_floor(self, curve):
        assert curve[10] == pytest.approx(0.92)

    def test_warmup_ramps_up(self, curve):
        assert curve[0] < curve[1] < 1.0

    def test_peak_within_oscillation(self, curve):
        """Points at 20%..60% stay within peak +- 0.03."""
        for value in curve[2:7]:
            assert 1.08 - PEAK_OSCILLATION - 1e-9 <= value <= 1.08 + PEAK_OSCILLATION + 1e-9

    def test_fatigue_decays(self, curve):
        assert curve[8] > curve[9] > curve[10]


class TestPatterns:
    """Per-activity endpoints."""

    @pytest.mark.parametrize("activity,start,end", [
        (ActivityType.RUN, 0.85, 0.92),
        (ActivityType.BIKE, 0.90, 0.95),
        (ActivityType.WALK, 0.95, 0.98),
    ])
    def test_endpoints(self, generator, activity, start, end):
        curve = generator.generate(21, activity)
        assert curve[0] == pytest.approx(start)
        assert curve[-1] == pytest.approx(end)

    def test_peak_at_phase_start(self, generator):
        """sin(0) = 0, so the multiplier at exactly 20% is the peak value."""
        assert generator.multiplier_at(0.2, ActivityType.BIKE) == pytest.approx(1.05)

    def test_custom_patterns(self):
        flat = PacingPattern(warmup=1.0, peak=1.0, fatigue=1.0)
        generator = PacingCurveGenerator({ActivityType.RUN: flat})
        assert generator.multiplier_at(0.0, ActivityType.RUN) == 1.0
        assert generator.multiplier_at(1.0, ActivityType.RUN) == 1.0

    def test_every_activity_has_pattern(self):
        assert set(PACING_PATTERNS) == set(ActivityType)


# =============================================================================
# Test Edge Cases
# =============================================================================

class TestEdgeCases:
    """Degenerate point counts."""

    def test_zero_points(self, generator):
        assert generator.generate(0, ActivityType.RUN) == []

    def test_single_point(self, generator):
        assert generator.generate(1, ActivityType.RUN) == [1.0]

    def test_two_points(self, generator):
        curve = generator.generate(2, ActivityType.WALK)
        assert curve == [pytest.approx(0.95), pytest.approx(0.98)]

    def test_shortcut(self):
        assert generate_pacing_curve(5, ActivityType.RUN) == PacingCurveGenerator().generate(5, ActivityType.RUN)
