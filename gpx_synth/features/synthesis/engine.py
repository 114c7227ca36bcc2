"""
Timestamp Synthesis Engine

Turns a coordinate sequence and GenerationOptions into timestamped,
speed- and elevation-annotated RoutePoints.

Per segment i (1..n-1):
1. speed = base x pacing_curve[i]
2. Gaussian noise (when add_noise or realistic_timing)
3. Grade multiplier (standard path only, when elevation is tracked)
4. Clamp to [0.2 x base, 1.8 x base]
5. time = distance / speed, at least the sampling-rate floor
6. Occasional pause (pause_probability, 50-100% of pause_duration_s)

The two timing paths are alternatives, never combined:
- standard: pacing + noise + grade, per-point simulated elevation
- realistic: pacing + noise, smoothed simulated elevation

Real elevation failures never reach the caller: the engine switches to
simulated elevation for the rest of the call and adds a warning.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Sequence, Tuple

from gpx_synth.features.elevation import (
    BASE_ELEVATION_M,
    ElevationProvider,
    RealElevationProvider,
    SimulatedElevationProvider,
)
from gpx_synth.features.pacing import (
    PacingCurveGenerator,
    SpeedVariator,
    clamp_speed,
    grade_speed_multiplier,
)
from gpx_synth.shared.constants import ElevationPolicy, ElevationSource, TerrainProfile
from gpx_synth.shared.geo import distance_km
from gpx_synth.shared.track_types import Coordinate, RoutePoint

from .schemas import GenerationOptions

logger = logging.getLogger(__name__)

MS_PER_HOUR = 3_600_000


@dataclass
class SynthesisResult:
    """Engine output plus what happened along the way."""
    points: List[RoutePoint]
    elevation_source: ElevationSource
    base_speed_kmh: float
    warnings: List[str] = field(default_factory=list)


class TrackSynthesizer:
    """
    Timestamp/elevation synthesis engine.

    Holds no per-call state: the clock, curve and random source live
    inside each call, so one instance can serve concurrent calls. The
    real elevation provider (and its cache) is shared across calls.

    Usage:
        synthesizer = TrackSynthesizer()
        points = await synthesizer.synthesize(coordinates, options)
    """

    def __init__(
        self,
        real_elevation: Optional[ElevationProvider] = None,
        pacing: Optional[PacingCurveGenerator] = None,
    ):
        self._real_elevation = real_elevation
        self.pacing = pacing or PacingCurveGenerator()

    @property
    def real_elevation(self) -> ElevationProvider:
        """Real elevation provider, created on first use and kept with its cache."""
        if self._real_elevation is None:
            self._real_elevation = RealElevationProvider()
        return self._real_elevation

    async def synthesize(
        self,
        coordinates: Sequence[Coordinate],
        options: GenerationOptions,
        rng: Optional[random.Random] = None,
    ) -> List[RoutePoint]:
        """Generate the annotated point sequence."""
        result = await self.run(coordinates, options, rng)
        return result.points

    async def run(
        self,
        coordinates: Sequence[Coordinate],
        options: GenerationOptions,
        rng: Optional[random.Random] = None,
    ) -> SynthesisResult:
        """
        Generate points and report the elevation source and warnings.

        Args:
            coordinates: Ordered route, (lat, lon)
            options: Generation options
            rng: Random source; defaults to random.Random(options.seed)

        Returns:
            SynthesisResult with len(points) == len(coordinates)
        """
        coordinates = list(coordinates)
        rng = rng or random.Random(options.seed)
        base_speed = options.resolve_speed_kmh()

        if not coordinates:
            return SynthesisResult([], ElevationSource.NONE, base_speed)

        if len(coordinates) == 1:
            return self._single_point(coordinates[0], options, base_speed)

        elevations, source, warnings = await self._resolve_elevations(
            coordinates, options, rng
        )
        curve = self.pacing.generate(len(coordinates), options.activity_type)
        variator = SpeedVariator(rng)

        add_noise = options.add_noise or options.realistic_timing
        apply_grade = not options.realistic_timing and source is not ElevationSource.NONE
        floor_ms = options.sampling_rate_s * 1000

        clock = options.start_time
        points = [RoutePoint(coordinates[0], clock, elevations[0], base_speed)]

        for i in range(1, len(coordinates)):
            segment_km = distance_km(coordinates[i - 1], coordinates[i])

            speed = base_speed * curve[i]
            if add_noise:
                speed = variator.vary(speed, options.speed_variation)
            if apply_grade:
                speed *= grade_speed_multiplier(
                    elevations[i] - elevations[i - 1], segment_km
                )
            speed = clamp_speed(speed, base_speed)

            segment_ms = segment_km / speed * MS_PER_HOUR
            elapsed_ms = max(segment_ms, floor_ms) + self._pause_ms(options, rng)

            clock = clock + timedelta(milliseconds=elapsed_ms)
            points.append(RoutePoint(coordinates[i], clock, elevations[i], speed))

        logger.debug(
            f"Synthesized {len(points)} points, "
            f"{(clock - options.start_time).total_seconds():.0f}s, "
            f"elevation={source.value}"
        )
        return SynthesisResult(points, source, base_speed, warnings)

    # -------------------------------------------------------------------------
    # Elevation
    # -------------------------------------------------------------------------

    async def _resolve_elevations(
        self,
        coordinates: List[Coordinate],
        options: GenerationOptions,
        rng: random.Random,
    ) -> Tuple[List[Optional[float]], ElevationSource, List[str]]:
        policy = options.elevation_policy

        if policy is ElevationPolicy.NONE:
            return [None] * len(coordinates), ElevationSource.NONE, []

        if policy is ElevationPolicy.REAL:
            try:
                elevations = await self.real_elevation.get_elevations(coordinates)
                if len(elevations) != len(coordinates):
                    raise ValueError(
                        f"Provider returned {len(elevations)} elevations "
                        f"for {len(coordinates)} points"
                    )
                return [max(0.0, e) for e in elevations], ElevationSource.REAL, []
            except Exception as e:
                logger.warning(f"Real elevation unavailable, using simulated: {e}")
                simulated = self._simulated_provider(options, rng).generate(coordinates)
                return simulated, ElevationSource.SIMULATED_FALLBACK, [
                    "Real elevation data unavailable; simulated elevation used instead"
                ]

        simulated = self._simulated_provider(options, rng).generate(coordinates)
        return simulated, ElevationSource.SIMULATED, []

    @staticmethod
    def _simulated_provider(
        options: GenerationOptions,
        rng: random.Random
    ) -> SimulatedElevationProvider:
        if options.elevation_policy is ElevationPolicy.SIMULATED_FLAT:
            profile = TerrainProfile.FLAT
        else:
            profile = options.terrain_profile

        # Realistic path without explicit gain/profile starts at a random 50-200 m
        random_start = (
            options.realistic_timing
            and options.elevation_gain_m is None
            and options.elevation_policy is not ElevationPolicy.SIMULATED_PROFILE
        )
        return SimulatedElevationProvider(
            profile=profile,
            total_gain_m=options.elevation_gain_m or 0.0,
            smoothed=options.realistic_timing,
            random_start=random_start,
            rng=rng,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _pause_ms(options: GenerationOptions, rng: random.Random) -> float:
        if options.pause_duration_s <= 0:
            return 0.0
        if rng.random() >= options.pause_probability:
            return 0.0
        return options.pause_duration_s * 1000 * rng.uniform(0.5, 1.0)

    @staticmethod
    def _single_point(
        coordinate: Coordinate,
        options: GenerationOptions,
        base_speed: float
    ) -> SynthesisResult:
        if options.elevation_policy.enabled:
            elevation, source = BASE_ELEVATION_M, ElevationSource.SIMULATED
        else:
            elevation, source = None, ElevationSource.NONE
        point = RoutePoint(coordinate, options.start_time, elevation, base_speed)
        return SynthesisResult([point], source, base_speed)


async def synthesize(
    coordinates: Sequence[Coordinate],
    options: GenerationOptions,
    rng: Optional[random.Random] = None,
) -> List[RoutePoint]:
    """Shortcut for TrackSynthesizer().synthesize()."""
    return await TrackSynthesizer().synthesize(coordinates, options, rng)
