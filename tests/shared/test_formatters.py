"""
Tests for formatting and unit conversion helpers.
"""

import pytest

from gpx_synth.shared.formatters import (
    pace_to_speed,
    speed_to_pace,
    format_pace,
    format_duration,
    format_distance_km,
    suggested_filename,
)


class TestConversions:
    """Pace <-> speed."""

    def test_pace_to_speed(self):
        """6 min/km is 10 km/h."""
        assert pace_to_speed(6.0) == pytest.approx(10.0)

    def test_speed_to_pace(self):
        assert speed_to_pace(12.0) == pytest.approx(5.0)

    def test_round_trip(self):
        assert speed_to_pace(pace_to_speed(5.5)) == pytest.approx(5.5)


class TestFormatPace:
    """Tests for format_pace."""

    def test_half_minute(self):
        assert format_pace(5.5) == "5:30 min/km"

    def test_whole_minutes(self):
        assert format_pace(6.0) == "6:00 min/km"

    def test_seconds_carry_over(self):
        """5.999 min would round to 5:60; it must read 6:00."""
        assert format_pace(5.999) == "6:00 min/km"

    def test_none(self):
        assert format_pace(None) == "—"


class TestFormatDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize("seconds,expected", [
        (3661, "1:01:01"),
        (125, "2:05"),
        (59, "0:59"),
        (0, "0:00"),
        (7200, "2:00:00"),
    ])
    def test_formats(self, seconds, expected):
        assert format_duration(seconds) == expected


class TestFormatDistance:
    """Tests for format_distance_km."""

    def test_meters_under_one_km(self):
        assert format_distance_km(0.85) == "850 m"

    def test_kilometers(self):
        assert format_distance_km(12.54) == "12.5 km"


class TestSuggestedFilename:
    """Tests for suggested_filename."""

    def test_spaces_replaced(self):
        assert suggested_filename("Morning Run") == "morning_run.gpx"

    def test_punctuation_replaced(self):
        assert suggested_filename("Test & Run!") == "test___run_.gpx"

    def test_digits_kept(self):
        assert suggested_filename("Loop 5K") == "loop_5k.gpx"
