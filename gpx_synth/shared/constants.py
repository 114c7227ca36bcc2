"""
Unified constants for activity types, terrain and elevation policies.

This module provides a single source of truth for enum naming
across the entire package.
"""

from enum import Enum


class ActivityType(str, Enum):
    """
    Activity types written into the GPX <type> element.

    Used in:
    - Generation options
    - Pacing curve patterns
    - Default speeds and realism ranges
    """
    RUN = "Run"
    BIKE = "Bike"
    WALK = "Walk"

    @classmethod
    def from_label(cls, label: str) -> "ActivityType":
        """
        Resolve an activity from its GPX name or a legacy route label.

        Raises:
            ValueError: If the label is not a known activity
        """
        normalized = label.strip().lower()
        activity = LEGACY_ACTIVITY_LABELS.get(normalized)
        if activity is not None:
            return activity
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValueError(f"Unsupported activity type: {label!r}")


# Mapping: saved-route labels -> ActivityType
LEGACY_ACTIVITY_LABELS: dict[str, ActivityType] = {
    "running": ActivityType.RUN,
    "cycling": ActivityType.BIKE,
    "walking": ActivityType.WALK,
}


class TerrainProfile(str, Enum):
    """Simulated terrain roughness."""
    FLAT = "flat"
    HILLY = "hilly"
    MOUNTAINOUS = "mountainous"


class ElevationPolicy(str, Enum):
    """How elevation is assigned to generated points."""
    NONE = "none"
    SIMULATED_FLAT = "simulated_flat"
    SIMULATED_PROFILE = "simulated_profile"
    REAL = "real"

    @property
    def enabled(self) -> bool:
        return self is not ElevationPolicy.NONE


class ElevationSource(str, Enum):
    """Where the emitted elevations actually came from."""
    NONE = "none"
    SIMULATED = "simulated"
    REAL = "real"
    SIMULATED_FALLBACK = "simulated_fallback"


# Default speeds for different activities (km/h)
DEFAULT_SPEEDS_KMH: dict[ActivityType, float] = {
    ActivityType.RUN: 10.0,     # 6 min/km pace
    ActivityType.BIKE: 25.0,    # recreational cycling
    ActivityType.WALK: 5.0,     # casual walking
}

# Realistic input ranges: (min, max)
REALISTIC_SPEED_RANGES_KMH: dict[ActivityType, tuple[float, float]] = {
    ActivityType.RUN: (3.0, 25.0),
    ActivityType.BIKE: (5.0, 60.0),
}

REALISTIC_PACE_RANGES_MIN_KM: dict[ActivityType, tuple[float, float]] = {
    ActivityType.RUN: (2.4, 20.0),   # 3-25 km/h
    ActivityType.BIKE: (1.0, 12.0),  # 5-60 km/h
}
