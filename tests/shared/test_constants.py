"""
Tests for activity, terrain and elevation enums.
"""

import pytest

from gpx_synth.shared.constants import (
    ActivityType,
    ElevationPolicy,
    DEFAULT_SPEEDS_KMH,
)


class TestActivityType:
    """Tests for ActivityType.from_label."""

    @pytest.mark.parametrize("label,expected", [
        ("Run", ActivityType.RUN),
        ("bike", ActivityType.BIKE),
        ("WALK", ActivityType.WALK),
        ("running", ActivityType.RUN),
        ("cycling", ActivityType.BIKE),
        (" walking ", ActivityType.WALK),
    ])
    def test_labels(self, label, expected):
        assert ActivityType.from_label(label) is expected

    def test_unknown_label(self):
        with pytest.raises(ValueError):
            ActivityType.from_label("swimming")

    def test_every_activity_has_default_speed(self):
        assert set(DEFAULT_SPEEDS_KMH) == set(ActivityType)


class TestElevationPolicy:
    """Tests for ElevationPolicy.enabled."""

    def test_none_disabled(self):
        assert not ElevationPolicy.NONE.enabled

    @pytest.mark.parametrize("policy", [
        ElevationPolicy.SIMULATED_FLAT,
        ElevationPolicy.SIMULATED_PROFILE,
        ElevationPolicy.REAL,
    ])
    def test_others_enabled(self, policy):
        assert policy.enabled
