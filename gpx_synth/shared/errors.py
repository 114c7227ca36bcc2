"""
Exception hierarchy.

Elevation errors are raised by the elevation feature and absorbed by the
synthesis engine. Route errors propagate to the caller.
"""

from typing import Optional


class GpxSynthError(Exception):
    """Base gpx-synth error."""
    pass


class InvalidRouteError(GpxSynthError, ValueError):
    """Route coordinates are missing, non-finite or out of range."""
    pass


# =============================================================================
# Elevation
# =============================================================================

class ElevationError(GpxSynthError):
    """Base elevation lookup error."""
    pass


class ElevationServiceError(ElevationError):
    """Transport failure, timeout, non-200 status or malformed response."""
    pass


class ElevationRateLimitError(ElevationServiceError):
    """Elevation service answered with HTTP 429."""
    pass


class ElevationUnavailableError(ElevationError):
    """All lookup attempts failed."""

    def __init__(self, message: str, last_error: Optional[Exception] = None):
        super().__init__(message)
        self.last_error = last_error
