"""
Route file reader.

Loads the coordinate sequence the synthesis engine works on from:
- GPX files (track points first, route points if there are no tracks)
- JSON / GeoJSON files holding [lng, lat] pairs
"""

import json
import logging
from pathlib import Path
from typing import Any, List

import gpxpy
import gpxpy.gpx

from gpx_synth.shared.errors import InvalidRouteError
from gpx_synth.shared.track_types import Coordinate, coordinates_from_lng_lat

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json", ".geojson"}


class RouteFileReader:
    """Reads route geometry from disk or memory."""

    @staticmethod
    def read(path: Path) -> List[Coordinate]:
        """
        Read coordinates from a .gpx, .json or .geojson file.

        Raises:
            InvalidRouteError: If the file holds no usable coordinates
        """
        path = Path(path)
        content = path.read_bytes()
        if path.suffix.lower() in JSON_SUFFIXES:
            return RouteFileReader.parse_json(content)
        return RouteFileReader.parse_gpx(content)

    @staticmethod
    def parse_gpx(content: bytes) -> List[Coordinate]:
        """
        Extract coordinates from GPX content.

        Raises:
            InvalidRouteError: If GPX is invalid or has no points
        """
        try:
            gpx = gpxpy.parse(content.decode('utf-8'))
        except (UnicodeDecodeError, gpxpy.gpx.GPXException) as e:
            logger.error(f"Failed to parse GPX: {e}")
            raise InvalidRouteError(f"Invalid GPX file: {e}") from e

        coordinates: List[Coordinate] = []

        # From tracks
        for track in gpx.tracks:
            for segment in track.segments:
                for point in segment.points:
                    coordinates.append(Coordinate(lat=point.latitude, lon=point.longitude))

        # From routes (if no tracks)
        if not coordinates:
            for route in gpx.routes:
                for point in route.points:
                    coordinates.append(Coordinate(lat=point.latitude, lon=point.longitude))

        if not coordinates:
            raise InvalidRouteError("GPX file contains no track or route points")

        logger.debug(f"Read {len(coordinates)} points from GPX")
        return coordinates

    @staticmethod
    def parse_json(content: bytes) -> List[Coordinate]:
        """
        Extract coordinates from JSON content.

        Accepted shapes (all [lng, lat]):
        - [[lng, lat], ...]
        - {"coordinates": [[lng, lat], ...]}
        - GeoJSON LineString geometry, Feature or FeatureCollection

        Raises:
            InvalidRouteError: If no coordinate list can be found
        """
        try:
            data = json.loads(content)
        except (UnicodeDecodeError, ValueError) as e:
            raise InvalidRouteError(f"Invalid JSON route file: {e}") from e

        pairs = _find_coordinate_pairs(data)
        if not pairs:
            raise InvalidRouteError("Route file contains no coordinates")

        try:
            return coordinates_from_lng_lat(pairs)
        except (TypeError, ValueError) as e:
            raise InvalidRouteError(f"Invalid coordinate pair: {e}") from e


def _find_coordinate_pairs(data: Any) -> list:
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return []

    if data.get("type") == "FeatureCollection":
        for feature in data.get("features", []):
            pairs = _find_coordinate_pairs(feature)
            if pairs:
                return pairs
        return []

    if data.get("type") == "Feature":
        return _find_coordinate_pairs(data.get("geometry") or {})

    coordinates = data.get("coordinates")
    return coordinates if isinstance(coordinates, list) else []
