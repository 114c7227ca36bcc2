"""
GPX file handling module.

Usage:
    from gpx_synth.features.gpx import GPXSerializer, RouteFileReader

Components:
- GPXSerializer: render RoutePoints as a GPX 1.1 document
- RouteFileReader: load route coordinates from GPX / GeoJSON files
"""

from .serializer import (
    GPXSerializer,
    serialize_track,
    escape_xml,
    format_gpx_time,
    STANDARD_PRECISION,
    REALISTIC_PRECISION,
)
from .parser import RouteFileReader

__all__ = [
    # Serializer
    "GPXSerializer",
    "serialize_track",
    "escape_xml",
    "format_gpx_time",
    "STANDARD_PRECISION",
    "REALISTIC_PRECISION",
    # Reader
    "RouteFileReader",
]
