"""
Elevation module.

Usage:
    from gpx_synth.features.elevation import RealElevationProvider
    from gpx_synth.features.elevation import SimulatedElevationProvider

Components:
- OpenElevationClient: httpx client for one <=100 point batch
- RetryStateMachine: ATTEMPT -> BACKOFF -> RETRY -> FALLBACK
- ElevationProvider: interface shared by both providers
- SimulatedElevationProvider: procedural terrain
- RealElevationProvider: batched lookups with cache and retries
"""

from .client import OpenElevationClient, MAX_BATCH_SIZE
from .retry import (
    RetryPolicy,
    RetryState,
    RetryStateMachine,
    next_state,
)
from .providers import (
    ElevationProvider,
    SimulatedElevationProvider,
    RealElevationProvider,
    ElevationCache,
    ELEVATION_PROFILES,
    BASE_ELEVATION_M,
    START_ELEVATION_RANGE_M,
    profile_oscillation,
    simulate_elevation,
    smooth_toward,
)

__all__ = [
    # Client
    "OpenElevationClient",
    "MAX_BATCH_SIZE",
    # Retry
    "RetryPolicy",
    "RetryState",
    "RetryStateMachine",
    "next_state",
    # Providers
    "ElevationProvider",
    "SimulatedElevationProvider",
    "RealElevationProvider",
    "ElevationCache",
    "ELEVATION_PROFILES",
    "BASE_ELEVATION_M",
    "START_ELEVATION_RANGE_M",
    "profile_oscillation",
    "simulate_elevation",
    "smooth_toward",
]
