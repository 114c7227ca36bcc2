"""
Generation schemas.

Pydantic models for track generation requests.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gpx_synth.config import settings
from gpx_synth.shared.constants import (
    ActivityType,
    ElevationPolicy,
    TerrainProfile,
)
from gpx_synth.shared.formatters import pace_to_speed


class GenerationOptions(BaseModel):
    """
    Everything the synthesis engine needs besides the coordinates.

    Exactly one of average_speed_kmh / average_pace_min_per_km must be
    given; if both are, speed wins. Never mutated after construction.
    """

    model_config = ConfigDict(frozen=True)

    # Metadata
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    activity_type: ActivityType = ActivityType.RUN
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Speed / pace (mutually exclusive)
    average_speed_kmh: Optional[float] = Field(default=None, ge=1, le=100)
    average_pace_min_per_km: Optional[float] = Field(default=None, ge=1, le=30)

    # Elevation
    elevation_policy: ElevationPolicy = ElevationPolicy.NONE
    terrain_profile: TerrainProfile = TerrainProfile.FLAT
    elevation_gain_m: Optional[float] = Field(default=None, ge=0)

    # Timing
    realistic_timing: bool = Field(
        default=False,
        description="Pacing curve + noise with smoothed elevation, no grade adjustment"
    )
    add_noise: bool = True
    speed_variation: float = Field(
        default_factory=lambda: settings.default_speed_variation,
        ge=0,
        le=0.5
    )
    sampling_rate_s: float = Field(
        default_factory=lambda: settings.default_sampling_rate_s,
        ge=0,
        le=60,
        description="Minimum time between consecutive points"
    )

    # Pauses
    pause_duration_s: float = Field(default=0, ge=0, le=300)
    pause_probability: float = Field(default=0.1, ge=0, le=1)

    # Deterministic runs
    seed: Optional[int] = None

    @field_validator('activity_type', mode='before')
    @classmethod
    def parse_activity_label(cls, v):
        """Accept 'Run' as well as legacy labels like 'running'."""
        if isinstance(v, str):
            return ActivityType.from_label(v)
        return v

    @field_validator('start_time')
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Naive datetimes are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @model_validator(mode='after')
    def require_speed_or_pace(self) -> "GenerationOptions":
        if self.average_speed_kmh is None and self.average_pace_min_per_km is None:
            raise ValueError(
                "Either average_speed_kmh or average_pace_min_per_km is required"
            )
        return self

    def resolve_speed_kmh(self) -> float:
        """Base speed in km/h; speed takes precedence over pace."""
        if self.average_speed_kmh is not None:
            return self.average_speed_kmh
        return pace_to_speed(self.average_pace_min_per_km)

    @property
    def resolved_description(self) -> str:
        return self.description or f"{self.activity_type.value} activity"
