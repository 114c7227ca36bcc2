"""
Tests for elevation gain/loss statistics.
"""

import pytest

from gpx_synth.shared.elevation import elevation_gain_loss, smooth_elevations


class TestSmoothElevations:
    """Tests for the moving average."""

    def test_short_sequence_unchanged(self):
        assert smooth_elevations([100.0, 110.0, 105.0]) == [100.0, 110.0, 105.0]

    def test_spike_flattened(self):
        values = [100.0] * 5 + [150.0] + [100.0] * 5
        smoothed = smooth_elevations(values)
        assert len(smoothed) == len(values)
        assert max(smoothed) < 150.0


class TestElevationGainLoss:
    """Tests for elevation_gain_loss."""

    def test_no_elevations(self):
        assert elevation_gain_loss([None, None, None]) == (0.0, 0.0)

    def test_single_elevation(self):
        assert elevation_gain_loss([120.0]) == (0.0, 0.0)

    def test_monotonic_climb(self):
        gain, loss = elevation_gain_loss([100.0, 110.0, 120.0], smoothing_window=1)
        assert gain == pytest.approx(20.0)
        assert loss == 0.0

    def test_up_and_down(self):
        gain, loss = elevation_gain_loss([100.0, 130.0, 110.0], smoothing_window=1)
        assert gain == pytest.approx(30.0)
        assert loss == pytest.approx(20.0)

    def test_missing_values_skipped(self):
        gain, loss = elevation_gain_loss([100.0, None, 110.0], smoothing_window=1)
        assert gain == pytest.approx(10.0)
        assert loss == 0.0
