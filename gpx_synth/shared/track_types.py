"""
Base types for track synthesis.

This module contains only dataclasses with NO imports from features
to avoid circular dependencies.

Coordinate convention: everything inside gpx_synth is (lat, lon).
Routing services hand out [lng, lat] pairs; convert them with
coordinates_from_lng_lat() at the boundary.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .errors import InvalidRouteError


@dataclass(frozen=True)
class Coordinate:
    """A (latitude, longitude) pair in degrees."""
    lat: float
    lon: float

    def __post_init__(self):
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise InvalidRouteError(
                f"Coordinate must be finite, got ({self.lat}, {self.lon})"
            )
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidRouteError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise InvalidRouteError(f"Longitude out of range: {self.lon}")

    @classmethod
    def from_lng_lat(cls, pair: Sequence[float]) -> "Coordinate":
        """Build from a GeoJSON-style [lng, lat] pair."""
        lng, lat = pair
        return cls(lat=float(lat), lon=float(lng))

    @classmethod
    def from_lat_lng(cls, pair: Sequence[float]) -> "Coordinate":
        """Build from a map-style (lat, lng) pair."""
        lat, lng = pair
        return cls(lat=float(lat), lon=float(lng))


def coordinates_from_lng_lat(pairs: Iterable[Sequence[float]]) -> List[Coordinate]:
    """Convert routing output ([lng, lat] pairs) to coordinates."""
    return [Coordinate.from_lng_lat(pair) for pair in pairs]


def coordinates_from_lat_lng(pairs: Iterable[Sequence[float]]) -> List[Coordinate]:
    """Convert (lat, lng) pairs or {"lat", "lng"} mappings to coordinates."""
    result = []
    for pair in pairs:
        if isinstance(pair, dict):
            lng = pair["lng"] if "lng" in pair else pair["lon"]
            result.append(Coordinate(lat=float(pair["lat"]), lon=float(lng)))
        else:
            result.append(Coordinate.from_lat_lng(pair))
    return result


@dataclass(frozen=True)
class RoutePoint:
    """
    A synthesized track sample.

    Created once by the synthesis engine, consumed by the GPX serializer.
    """
    coordinate: Coordinate
    time: Optional[datetime] = None
    elevation_m: Optional[float] = None
    speed_kmh: Optional[float] = None

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lon(self) -> float:
        return self.coordinate.lon
