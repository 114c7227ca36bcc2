"""
Track synthesis module.

Usage:
    from gpx_synth.features.synthesis import GenerationOptions, TrackGenerationService

Components:
- GenerationOptions: Pydantic schema for a generation request
- TrackSynthesizer: timestamp/elevation synthesis engine
- TrackGenerationService: synthesis + GPX rendering + summary
"""

from .schemas import GenerationOptions
from .engine import TrackSynthesizer, SynthesisResult, synthesize
from .service import (
    TrackGenerationService,
    GeneratedTrack,
    TrackPreview,
    TrackSummary,
    estimate_activity_duration,
    realism_warnings,
    generate_gpx,
)

__all__ = [
    # Schemas
    "GenerationOptions",
    # Engine
    "TrackSynthesizer",
    "SynthesisResult",
    "synthesize",
    # Service
    "TrackGenerationService",
    "GeneratedTrack",
    "TrackPreview",
    "TrackSummary",
    "estimate_activity_duration",
    "realism_warnings",
    "generate_gpx",
]
