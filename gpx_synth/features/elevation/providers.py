"""
Elevation providers.

Two implementations behind one interface:
- SimulatedElevationProvider: procedural elevation, no I/O
- RealElevationProvider: batched Open-Elevation lookups with retries

Simulated model:
    elevation = 100 + gain x progress + oscillation(profile) + noise(+-5 m)

Terrain profiles (oscillation, meters):
    flat:        0 + 10 x sin(2 pi progress)
    hilly:       20 + 30 x sin(2 pi progress)
    mountainous: 50 + 50 x sin(2 pi progress)

The smoothing variant blends the previous elevation with a fresh
target (0.7 old / 0.3 new) so consecutive points never jump.
All values are floored at 0.
"""

import asyncio
import functools
import logging
import math
import random
import time
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from gpx_synth.config import settings
from gpx_synth.shared.constants import ElevationSource, TerrainProfile
from gpx_synth.shared.geo import cumulative_distances_km
from gpx_synth.shared.track_types import Coordinate

from .client import MAX_BATCH_SIZE, OpenElevationClient
from .retry import RetryPolicy, RetryStateMachine

logger = logging.getLogger(__name__)


BASE_ELEVATION_M = 100.0
ELEVATION_NOISE_M = 5.0

# Smoothing variant
SMOOTHING_RETAIN = 0.7
SMOOTHING_NOISE_M = 10.0
START_ELEVATION_RANGE_M = (50.0, 200.0)

# Oscillation bounds per terrain profile (meters)
ELEVATION_PROFILES: Dict[TerrainProfile, Tuple[float, float]] = {
    TerrainProfile.FLAT: (0.0, 10.0),
    TerrainProfile.HILLY: (20.0, 50.0),
    TerrainProfile.MOUNTAINOUS: (50.0, 100.0),
}


def profile_oscillation(progress: float, profile: TerrainProfile) -> float:
    """One sine cycle across the route, shaped by the terrain profile."""
    low, high = ELEVATION_PROFILES[profile]
    return low + (high - low) * math.sin(progress * math.pi * 2)


def simulate_elevation(
    progress: float,
    total_gain_m: float,
    profile: TerrainProfile,
    rng: random.Random,
    noise_m: float = ELEVATION_NOISE_M,
) -> float:
    """
    Simulated elevation at a position along the route.

    Args:
        progress: 0.0 (start) to 1.0 (finish)
        total_gain_m: Net gain spread linearly over the route
        profile: Terrain profile for the oscillation
        rng: Random source for the +-noise_m jitter

    Returns:
        Elevation in meters, >= 0
    """
    elevation = (
        BASE_ELEVATION_M
        + total_gain_m * progress
        + profile_oscillation(progress, profile)
        + rng.uniform(-noise_m, noise_m)
    )
    return max(0.0, elevation)


def smooth_toward(previous_m: float, target_m: float) -> float:
    """Exponential blend of previous elevation and target, floored at 0."""
    blended = previous_m * SMOOTHING_RETAIN + target_m * (1 - SMOOTHING_RETAIN)
    return max(0.0, blended)


class ElevationProvider(ABC):
    """Assigns one elevation to every coordinate of a route."""

    source: ElevationSource = ElevationSource.NONE

    @abstractmethod
    async def get_elevations(self, coordinates: Sequence[Coordinate]) -> List[float]:
        """
        Elevations in meters, same length and order as coordinates.

        Raises:
            ElevationError: If the provider cannot produce values
        """
        pass


class SimulatedElevationProvider(ElevationProvider):
    """
    Procedural elevation.

    Two modes:
    - Standard: independent sample per point, progress by point index,
      rounded to the meter
    - Smoothed: exponential blend toward a noisy target, progress by
      distance, optionally starting from a random 50-200 m elevation
    """

    source = ElevationSource.SIMULATED

    def __init__(
        self,
        profile: TerrainProfile = TerrainProfile.FLAT,
        total_gain_m: float = 0.0,
        smoothed: bool = False,
        random_start: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self.profile = profile
        self.total_gain_m = total_gain_m
        self.smoothed = smoothed
        self.random_start = random_start
        self.rng = rng or random.Random()

    async def get_elevations(self, coordinates: Sequence[Coordinate]) -> List[float]:
        return self.generate(coordinates)

    def generate(self, coordinates: Sequence[Coordinate]) -> List[float]:
        """Synchronous variant of get_elevations()."""
        count = len(coordinates)
        if count == 0:
            return []
        if self.smoothed:
            return self._generate_smoothed(coordinates)

        return [
            float(round(simulate_elevation(
                self._index_progress(i, count),
                self.total_gain_m,
                self.profile,
                self.rng,
            )))
            for i in range(count)
        ]

    def _generate_smoothed(self, coordinates: Sequence[Coordinate]) -> List[float]:
        count = len(coordinates)
        cumulative = cumulative_distances_km(coordinates)
        total_km = cumulative[-1]

        if self.random_start:
            current = self.rng.uniform(*START_ELEVATION_RANGE_M)
        else:
            current = simulate_elevation(0.0, self.total_gain_m, self.profile, self.rng)

        elevations = [current]
        for i in range(1, count):
            if total_km > 0:
                progress = cumulative[i] / total_km
            else:
                progress = self._index_progress(i, count)
            target = simulate_elevation(
                progress,
                self.total_gain_m,
                self.profile,
                self.rng,
                noise_m=SMOOTHING_NOISE_M,
            )
            current = smooth_toward(current, target)
            elevations.append(current)

        return elevations

    @staticmethod
    def _index_progress(index: int, count: int) -> float:
        return index / (count - 1) if count > 1 else 0.0


class ElevationCache:
    """
    In-memory TTL cache keyed by coordinates rounded to ~1 m.

    Only touched between awaits, so concurrent generation calls on
    one event loop can share it.
    """

    PRECISION = 5

    def __init__(self, ttl_s: Optional[float] = None):
        self.ttl_s = settings.elevation_cache_ttl_s if ttl_s is None else ttl_s
        self._entries: dict[tuple[float, float], tuple[float, float]] = {}  # key -> (elevation, expires_at)

    def _key(self, coordinate: Coordinate) -> tuple[float, float]:
        return (round(coordinate.lat, self.PRECISION), round(coordinate.lon, self.PRECISION))

    def get(self, coordinate: Coordinate) -> Optional[float]:
        entry = self._entries.get(self._key(coordinate))
        if entry is None:
            return None
        elevation, expires_at = entry
        if time.monotonic() >= expires_at:
            self._entries.pop(self._key(coordinate), None)
            return None
        return elevation

    def put(self, coordinate: Coordinate, elevation: float) -> None:
        if self.ttl_s <= 0:
            return
        self._entries[self._key(coordinate)] = (elevation, time.monotonic() + self.ttl_s)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RealElevationProvider(ElevationProvider):
    """
    Looks up real elevation in batches of at most 100 points.

    Each batch goes through its own RetryStateMachine. If any batch
    ends in FALLBACK the whole lookup raises ElevationUnavailableError.

    Usage:
        provider = RealElevationProvider()
        elevations = await provider.get_elevations(coordinates)
    """

    source = ElevationSource.REAL

    def __init__(
        self,
        client: Optional[OpenElevationClient] = None,
        batch_size: Optional[int] = None,
        policy: Optional[RetryPolicy] = None,
        cache: Optional[ElevationCache] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client or OpenElevationClient()
        self.batch_size = min(batch_size or settings.elevation_batch_size, MAX_BATCH_SIZE)
        self.policy = policy or RetryPolicy.from_settings()
        self.cache = cache if cache is not None else ElevationCache()
        self._sleep = sleep

    async def get_elevations(self, coordinates: Sequence[Coordinate]) -> List[float]:
        cached = [self.cache.get(c) for c in coordinates]
        missing = [c for c, value in zip(coordinates, cached) if value is None]

        fetched: List[float] = []
        batches = [
            missing[i:i + self.batch_size]
            for i in range(0, len(missing), self.batch_size)
        ]
        for number, batch in enumerate(batches, start=1):
            machine = RetryStateMachine(self.policy, sleep=self._sleep)
            values = await machine.run(
                functools.partial(self.client.lookup, batch),
                description=f"Elevation batch {number}/{len(batches)}",
            )
            for coordinate, value in zip(batch, values):
                self.cache.put(coordinate, value)
            fetched.extend(values)

        if batches:
            logger.info(
                f"Fetched {len(fetched)} elevations in {len(batches)} batches "
                f"({len(coordinates) - len(missing)} cached)"
            )

        remaining = iter(fetched)
        return [
            max(0.0, value if value is not None else next(remaining))
            for value in cached
        ]
