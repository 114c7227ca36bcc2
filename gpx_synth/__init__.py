"""
GPX Synth - synthetic GPS activity tracks.

Turns an ordered route into a timestamped GPX track that looks like a
recorded run, ride or walk.

Usage:
    from gpx_synth import GenerationOptions, TrackGenerationService

    options = GenerationOptions(name="Morning Run", average_pace_min_per_km=5.5)
    track = await TrackGenerationService().generate(coordinates, options)
"""

from gpx_synth.features.synthesis import (
    GenerationOptions,
    TrackSynthesizer,
    TrackGenerationService,
    GeneratedTrack,
    synthesize,
    generate_gpx,
)
from gpx_synth.shared.track_types import (
    Coordinate,
    RoutePoint,
    coordinates_from_lng_lat,
    coordinates_from_lat_lng,
)
from gpx_synth.shared.constants import (
    ActivityType,
    ElevationPolicy,
    ElevationSource,
    TerrainProfile,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationOptions",
    "TrackSynthesizer",
    "TrackGenerationService",
    "GeneratedTrack",
    "synthesize",
    "generate_gpx",
    "Coordinate",
    "RoutePoint",
    "coordinates_from_lng_lat",
    "coordinates_from_lat_lng",
    "ActivityType",
    "ElevationPolicy",
    "ElevationSource",
    "TerrainProfile",
]
