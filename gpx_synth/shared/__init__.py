"""
Shared utilities (NOT business logic).

Usage:
    from gpx_synth.shared import haversine, Coordinate, RoutePoint
    from gpx_synth.shared.formatters import format_pace
"""
from .errors import (
    GpxSynthError,
    InvalidRouteError,
    ElevationError,
    ElevationServiceError,
    ElevationRateLimitError,
    ElevationUnavailableError,
)
from .track_types import (
    Coordinate,
    RoutePoint,
    coordinates_from_lng_lat,
    coordinates_from_lat_lng,
)
from .geo import (
    haversine,
    distance_km,
    route_distance_km,
    cumulative_distances_km,
    calculate_gradient,
    gradient_to_percent,
    EARTH_RADIUS_KM,
)
from .elevation import (
    smooth_elevations,
    elevation_gain_loss,
)
from .formatters import (
    pace_to_speed,
    speed_to_pace,
    format_pace,
    format_duration,
    format_distance_km,
    suggested_filename,
)
from .constants import (
    ActivityType,
    TerrainProfile,
    ElevationPolicy,
    ElevationSource,
    DEFAULT_SPEEDS_KMH,
    REALISTIC_SPEED_RANGES_KMH,
    REALISTIC_PACE_RANGES_MIN_KM,
    LEGACY_ACTIVITY_LABELS,
)

__all__ = [
    # errors
    "GpxSynthError",
    "InvalidRouteError",
    "ElevationError",
    "ElevationServiceError",
    "ElevationRateLimitError",
    "ElevationUnavailableError",
    # types
    "Coordinate",
    "RoutePoint",
    "coordinates_from_lng_lat",
    "coordinates_from_lat_lng",
    # geo
    "haversine",
    "distance_km",
    "route_distance_km",
    "cumulative_distances_km",
    "calculate_gradient",
    "gradient_to_percent",
    "EARTH_RADIUS_KM",
    # elevation
    "smooth_elevations",
    "elevation_gain_loss",
    # formatters
    "pace_to_speed",
    "speed_to_pace",
    "format_pace",
    "format_duration",
    "format_distance_km",
    "suggested_filename",
    # constants
    "ActivityType",
    "TerrainProfile",
    "ElevationPolicy",
    "ElevationSource",
    "DEFAULT_SPEEDS_KMH",
    "REALISTIC_SPEED_RANGES_KMH",
    "REALISTIC_PACE_RANGES_MIN_KM",
    "LEGACY_ACTIVITY_LABELS",
]
