"""
Tests for the Open-Elevation client.

Uses httpx.MockTransport, no network access.
"""

import asyncio
import json

import httpx
import pytest

from gpx_synth.features.elevation import OpenElevationClient, MAX_BATCH_SIZE
from gpx_synth.shared.errors import ElevationRateLimitError, ElevationServiceError
from gpx_synth.shared.track_types import Coordinate

API_URL = "https://elevation.test/api/v1/lookup"


def make_client(handler) -> OpenElevationClient:
    return OpenElevationClient(api_url=API_URL, transport=httpx.MockTransport(handler))


def coords(count: int) -> list[Coordinate]:
    return [Coordinate(lat=40.0 + i * 0.001, lon=-74.0) for i in range(count)]


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Elevation = 100 + index, with a fractional part to test rounding."""
    locations = json.loads(request.content)["locations"]
    return httpx.Response(200, json={
        "results": [
            {**location, "elevation": 100 + i + 0.4}
            for i, location in enumerate(locations)
        ]
    })


# =============================================================================
# Test Successful Lookups
# =============================================================================

class TestLookup:
    """Happy path."""

    def test_returns_rounded_elevations_in_order(self):
        client = make_client(echo_handler)
        assert asyncio.run(client.lookup(coords(3))) == [100.0, 101.0, 102.0]

    def test_request_payload(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return echo_handler(request)

        asyncio.run(make_client(handler).lookup([Coordinate(lat=40.7829, lon=-73.9654)]))

        assert seen["method"] == "POST"
        assert seen["url"] == API_URL
        assert seen["body"] == {"locations": [{"latitude": 40.7829, "longitude": -73.9654}]}

    def test_empty_batch_makes_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert asyncio.run(make_client(handler).lookup([])) == []

    def test_batch_limit(self):
        client = make_client(echo_handler)
        with pytest.raises(ValueError):
            asyncio.run(client.lookup(coords(MAX_BATCH_SIZE + 1)))

    def test_full_batch_allowed(self):
        result = asyncio.run(make_client(echo_handler).lookup(coords(MAX_BATCH_SIZE)))
        assert len(result) == MAX_BATCH_SIZE


# =============================================================================
# Test Failures
# =============================================================================

class TestFailures:
    """Every failure maps to ElevationServiceError."""

    def test_rate_limit(self):
        client = make_client(lambda request: httpx.Response(429))
        with pytest.raises(ElevationRateLimitError):
            asyncio.run(client.lookup(coords(2)))

    def test_server_error(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(ElevationServiceError) as exc_info:
            asyncio.run(client.lookup(coords(2)))
        assert not isinstance(exc_info.value, ElevationRateLimitError)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ElevationServiceError):
            asyncio.run(make_client(handler).lookup(coords(2)))

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ElevationServiceError):
            asyncio.run(make_client(handler).lookup(coords(2)))

    def test_count_mismatch(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"results": [{"elevation": 10}]})
        )
        with pytest.raises(ElevationServiceError):
            asyncio.run(client.lookup(coords(2)))

    def test_missing_results(self):
        client = make_client(lambda request: httpx.Response(200, json={"error": "nope"}))
        with pytest.raises(ElevationServiceError):
            asyncio.run(client.lookup(coords(1)))

    def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ElevationServiceError):
            asyncio.run(client.lookup(coords(1)))

    def test_non_numeric_elevation(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"results": [{"elevation": None}]})
        )
        with pytest.raises(ElevationServiceError):
            asyncio.run(client.lookup(coords(1)))
