"""
Track Generation Service

End-to-end generation: coordinates + options -> points -> GPX document,
plus a cheap preview that needs no synthesis.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from gpx_synth.features.gpx import (
    GPXSerializer,
    REALISTIC_PRECISION,
    STANDARD_PRECISION,
)
from gpx_synth.shared.constants import (
    ActivityType,
    DEFAULT_SPEEDS_KMH,
    ElevationSource,
    REALISTIC_PACE_RANGES_MIN_KM,
    REALISTIC_SPEED_RANGES_KMH,
)
from gpx_synth.shared.elevation import elevation_gain_loss
from gpx_synth.shared.formatters import (
    format_duration,
    speed_to_pace,
    suggested_filename,
)
from gpx_synth.shared.geo import route_distance_km
from gpx_synth.shared.track_types import Coordinate, RoutePoint

from .engine import TrackSynthesizer
from .schemas import GenerationOptions

logger = logging.getLogger(__name__)


@dataclass
class TrackSummary:
    """Statistics of a generated track."""
    point_count: int
    distance_km: float
    duration_s: float
    elevation_gain_m: float
    elevation_loss_m: float

    @property
    def average_speed_kmh(self) -> Optional[float]:
        if self.duration_s <= 0:
            return None
        return self.distance_km / (self.duration_s / 3600)

    @property
    def duration_formatted(self) -> str:
        return format_duration(self.duration_s)


@dataclass
class TrackPreview:
    """Estimate shown before generating."""
    distance_km: float
    estimated_duration_s: float
    estimated_duration_formatted: str
    average_speed_kmh: float
    average_pace_min_km: float


@dataclass
class GeneratedTrack:
    """Complete generation result."""
    points: List[RoutePoint]
    gpx: str
    filename: str
    elevation_source: ElevationSource
    summary: TrackSummary
    warnings: List[str] = field(default_factory=list)


def estimate_activity_duration(distance_m: float, activity: ActivityType) -> int:
    """
    Duration in whole seconds at the activity's default speed.

    Example:
        estimate_activity_duration(10000, ActivityType.RUN)  # 3600
    """
    hours = (distance_m / 1000) / DEFAULT_SPEEDS_KMH[activity]
    return round(hours * 3600)


def realism_warnings(options: GenerationOptions) -> List[str]:
    """
    Advisory notes for speed/pace outside the plausible range.

    Only Run and Bike have ranges; nothing is rejected.
    """
    activity = options.activity_type
    if options.average_speed_kmh is not None:
        bounds = REALISTIC_SPEED_RANGES_KMH.get(activity)
        value, unit, label = options.average_speed_kmh, "km/h", "Speed"
    else:
        bounds = REALISTIC_PACE_RANGES_MIN_KM.get(activity)
        value, unit, label = options.average_pace_min_per_km, "min/km", "Pace"

    if bounds is None:
        return []
    low, high = bounds
    if low <= value <= high:
        return []
    return [
        f"{label} {value:g} {unit} is outside the realistic range "
        f"{low:g}-{high:g} {unit} for {activity.value}"
    ]


class TrackGenerationService:
    """
    Generates GPX tracks.

    Example usage:
        service = TrackGenerationService()
        track = await service.generate(coordinates, options)
        Path(track.filename).write_text(track.gpx)
    """

    def __init__(
        self,
        synthesizer: Optional[TrackSynthesizer] = None,
        creator: Optional[str] = None,
    ):
        self.synthesizer = synthesizer or TrackSynthesizer()
        self.creator = creator

    async def generate(
        self,
        coordinates: Sequence[Coordinate],
        options: GenerationOptions,
        rng: Optional[random.Random] = None,
    ) -> GeneratedTrack:
        """
        Synthesize points and render them.

        Args:
            coordinates: Ordered route, (lat, lon)
            options: Generation options
            rng: Random source override (default: seeded from options)

        Returns:
            GeneratedTrack with document, filename and summary
        """
        result = await self.synthesizer.run(coordinates, options, rng)

        precision = REALISTIC_PRECISION if options.realistic_timing else STANDARD_PRECISION
        serializer = GPXSerializer(creator=self.creator, coordinate_precision=precision)
        document = serializer.serialize(
            result.points,
            name=options.name,
            description=options.resolved_description,
            activity_type=options.activity_type,
            generated_at=options.start_time,
        )

        summary = self.summarize(result.points)
        warnings = realism_warnings(options) + result.warnings

        logger.info(
            f"Generated '{options.name}': {summary.point_count} points, "
            f"{summary.distance_km:.2f} km, {summary.duration_formatted}, "
            f"elevation={result.elevation_source.value}"
        )

        return GeneratedTrack(
            points=result.points,
            gpx=document,
            filename=suggested_filename(options.name),
            elevation_source=result.elevation_source,
            summary=summary,
            warnings=warnings,
        )

    @staticmethod
    def preview(
        coordinates: Sequence[Coordinate],
        options: GenerationOptions
    ) -> TrackPreview:
        """Distance and duration at the resolved average speed."""
        distance = route_distance_km(coordinates)
        speed = options.resolve_speed_kmh()
        duration_s = distance / speed * 3600
        return TrackPreview(
            distance_km=distance,
            estimated_duration_s=duration_s,
            estimated_duration_formatted=format_duration(duration_s),
            average_speed_kmh=speed,
            average_pace_min_km=speed_to_pace(speed),
        )

    @staticmethod
    def summarize(points: Sequence[RoutePoint]) -> TrackSummary:
        """Distance, elapsed time and elevation change of a point sequence."""
        distance = route_distance_km([p.coordinate for p in points])

        times = [p.time for p in points if p.time is not None]
        duration_s = (times[-1] - times[0]).total_seconds() if len(times) > 1 else 0.0

        gain, loss = elevation_gain_loss([p.elevation_m for p in points])

        return TrackSummary(
            point_count=len(points),
            distance_km=distance,
            duration_s=duration_s,
            elevation_gain_m=gain,
            elevation_loss_m=loss,
        )


async def generate_gpx(
    coordinates: Sequence[Coordinate],
    options: GenerationOptions,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate and return only the GPX document."""
    track = await TrackGenerationService().generate(coordinates, options, rng)
    return track.gpx
