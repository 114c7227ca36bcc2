"""
Package Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import Annotated, List
from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Elevation API ===
    elevation_api_url: str = Field(
        default="https://api.open-elevation.com/api/v1/lookup",
        description="Elevation API endpoint"
    )
    elevation_timeout_s: float = Field(default=30.0, gt=0)
    elevation_batch_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Max points per lookup request"
    )
    elevation_max_retries: int = Field(default=2, ge=0)
    elevation_backoff_s: Annotated[List[float], NoDecode] = Field(
        default_factory=lambda: [1.0, 2.0],
        description="Delay before each retry"
    )
    elevation_rate_limit_wait_s: float = Field(
        default=5.0,
        ge=0,
        description="Extra wait after an HTTP 429"
    )
    elevation_cache_ttl_s: float = Field(default=3600.0, ge=0)

    # === Generation defaults ===
    default_sampling_rate_s: float = Field(default=4.0, ge=0)
    default_speed_variation: float = Field(default=0.15, ge=0, le=0.5)
    gpx_creator: str = Field(default="GPX Synth")

    @field_validator('elevation_backoff_s', mode='before')
    @classmethod
    def parse_backoff(cls, v):
        """Parse backoff delays from comma-separated string."""
        if isinstance(v, str):
            return [float(delay.strip()) for delay in v.split(',') if delay.strip()]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
