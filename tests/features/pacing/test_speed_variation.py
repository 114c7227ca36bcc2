"""
Tests for Gaussian speed noise and the speed clamp.
"""

import random
import statistics

import pytest

from gpx_synth.features.pacing import (
    SpeedVariator,
    clamp_speed,
    MIN_SPEED_RATIO,
    MAX_SPEED_RATIO,
)


class TestClampSpeed:
    """Tests for clamp_speed."""

    def test_within_bounds(self):
        assert clamp_speed(12.0, 10.0) == 12.0

    def test_lower_bound(self):
        assert clamp_speed(0.5, 10.0) == pytest.approx(10.0 * MIN_SPEED_RATIO)

    def test_upper_bound(self):
        assert clamp_speed(50.0, 10.0) == pytest.approx(10.0 * MAX_SPEED_RATIO)


class TestSpeedVariator:
    """Tests for SpeedVariator."""

    def test_seeded_runs_repeat(self):
        first = SpeedVariator(random.Random(42))
        second = SpeedVariator(random.Random(42))
        assert [first.vary(10.0) for _ in range(20)] == [second.vary(10.0) for _ in range(20)]

    def test_always_within_clamp(self):
        """Even an extreme variation factor stays within [0.2, 1.8] x base."""
        variator = SpeedVariator(random.Random(1))
        for _ in range(1000):
            speed = variator.vary(10.0, variation_factor=5.0)
            assert 2.0 - 1e-9 <= speed <= 18.0 + 1e-9

    def test_zero_variation(self):
        variator = SpeedVariator(random.Random(3))
        assert variator.vary(10.0, variation_factor=0.0) == pytest.approx(10.0)

    def test_gaussian_is_standard_normal(self):
        variator = SpeedVariator(random.Random(7))
        samples = [variator.gaussian() for _ in range(5000)]
        assert abs(statistics.mean(samples)) < 0.1
        assert statistics.stdev(samples) == pytest.approx(1.0, abs=0.1)
