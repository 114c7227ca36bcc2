"""
Open-Elevation API client.

Batch lookup of ground elevation for a list of coordinates.

API Limits:
- At most 100 locations per request (enforced here)
- 30 second timeout per request
- HTTP 429 when rate limited

Request:
    POST {"locations": [{"latitude": 43.2, "longitude": 76.9}, ...]}
Response:
    {"results": [{"latitude": ..., "longitude": ..., "elevation": 812.4}, ...]}
"""

import logging
import math
from typing import List, Optional, Sequence

import httpx

from gpx_synth.config import settings
from gpx_synth.shared.errors import ElevationRateLimitError, ElevationServiceError
from gpx_synth.shared.track_types import Coordinate

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


class OpenElevationClient:
    """
    Async client for the Open-Elevation lookup endpoint.

    Every failure is raised as ElevationServiceError (or its rate-limit
    subclass) so the retry machine has a single type to handle.

    Usage:
        client = OpenElevationClient()
        elevations = await client.lookup(coordinates[:100])
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url or settings.elevation_api_url
        self.timeout_s = timeout_s or settings.elevation_timeout_s
        self._transport = transport

    async def lookup(self, coordinates: Sequence[Coordinate]) -> List[float]:
        """
        Fetch elevations for one batch.

        Args:
            coordinates: Up to MAX_BATCH_SIZE coordinates

        Returns:
            Elevations in meters, rounded to the meter, same order as input

        Raises:
            ValueError: If the batch is larger than MAX_BATCH_SIZE
            ElevationRateLimitError: On HTTP 429
            ElevationServiceError: On any other failure
        """
        if len(coordinates) > MAX_BATCH_SIZE:
            raise ValueError(
                f"Too many locations: {len(coordinates)} > {MAX_BATCH_SIZE}"
            )
        if not coordinates:
            return []

        payload = {
            "locations": [
                {"latitude": c.lat, "longitude": c.lon}
                for c in coordinates
            ]
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s,
                transport=self._transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.TimeoutException as e:
            raise ElevationServiceError(
                f"Elevation API timed out after {self.timeout_s}s"
            ) from e
        except httpx.HTTPError as e:
            raise ElevationServiceError(f"Elevation API transport error: {e}") from e

        if response.status_code == 429:
            raise ElevationRateLimitError("Elevation API rate limit (429)")

        if response.status_code != 200:
            raise ElevationServiceError(
                f"Elevation API error: {response.status_code} {response.text[:200]}"
            )

        return self._parse_results(response, len(coordinates))

    @staticmethod
    def _parse_results(response: httpx.Response, expected: int) -> List[float]:
        try:
            data = response.json()
        except ValueError as e:
            raise ElevationServiceError("Elevation API returned invalid JSON") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise ElevationServiceError("Invalid elevation API response format")

        if len(results) != expected:
            raise ElevationServiceError(
                f"Elevation API returned {len(results)} results for {expected} points"
            )

        elevations = []
        for result in results:
            value = result.get("elevation") if isinstance(result, dict) else None
            if (
                not isinstance(value, (int, float))
                or isinstance(value, bool)
                or not math.isfinite(value)
            ):
                raise ElevationServiceError(f"Invalid elevation value: {value!r}")
            elevations.append(float(round(value)))

        logger.debug(f"Elevation API returned {len(elevations)} values")
        return elevations
