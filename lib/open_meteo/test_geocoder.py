"""
Tests for Geocoder
"""

from typing import Any, Dict, List

import httpx
import pytest

from .exceptions import (
    InvalidPlaceNameError,
    LocationNotFoundError,
    MalformedResponseError,
    OpenMeteoNetworkError,
)
from .geocoder import Geocoder
from .http_client import OpenMeteoHttpClient
from .models import Coordinates

LONDON_RESPONSE = {
    "results": [
        {
            "id": 2643743,
            "name": "London",
            "latitude": 51.50853,
            "longitude": -0.12574,
            "country_code": "GB",
            "country": "United Kingdom",
        }
    ],
    "generationtime_ms": 0.6,
}


class RecordingHandler:
    """MockTransport handler returning a canned response and keeping requests"""

    def __init__(self, status: int = 200, body: Any = None):
        self.status = status
        self.body = body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)

    @property
    def lastParams(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


def makeGeocoder(handler, geocodingUrl=None) -> Geocoder:
    httpClient = OpenMeteoHttpClient(transport=httpx.MockTransport(handler))
    return Geocoder(httpClient, geocodingUrl=geocodingUrl)


class TestGeocoder:
    """Test suite for place name resolution"""

    @pytest.mark.asyncio
    async def test_resolve_success(self):
        """Test first match is returned as Coordinates"""
        handler = RecordingHandler(body=LONDON_RESPONSE)

        coords = await makeGeocoder(handler).resolve("London")

        assert coords == Coordinates(
            latitude=51.50853,
            longitude=-0.12574,
            resolvedName="London",
            country="United Kingdom",
        )

    @pytest.mark.asyncio
    async def test_request_params(self):
        """Test the exact query sent upstream"""
        handler = RecordingHandler(body=LONDON_RESPONSE)

        await makeGeocoder(handler).resolve("New York")

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.host == "geocoding-api.open-meteo.com"
        assert request.url.path == "/v1/search"
        assert handler.lastParams == {"name": "New York", "count": "1", "format": "json"}

    @pytest.mark.asyncio
    async def test_name_sent_verbatim(self):
        """Test that the place name is neither trimmed nor case folded"""
        handler = RecordingHandler(body=LONDON_RESPONSE)

        await makeGeocoder(handler).resolve("  lONDON ")

        assert handler.lastParams["name"] == "  lONDON "

    @pytest.mark.asyncio
    async def test_custom_url(self):
        """Test endpoint override"""
        handler = RecordingHandler(body=LONDON_RESPONSE)

        await makeGeocoder(handler, geocodingUrl="http://localhost:8080/search").resolve("London")

        assert handler.requests[0].url.host == "localhost"
        assert handler.requests[0].url.port == 8080

    @pytest.mark.asyncio
    @pytest.mark.parametrize("placeName", ["", None, 42])
    async def test_invalid_place_name(self, placeName):
        """Test that invalid names fail before any request is made"""
        handler = RecordingHandler(body=LONDON_RESPONSE)

        with pytest.raises(InvalidPlaceNameError):
            await makeGeocoder(handler).resolve(placeName)

        assert handler.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"generationtime_ms": 0.2},
            {"results": []},
            {"results": None},
        ],
    )
    async def test_no_results(self, body):
        """Test that missing or empty results means location not found"""
        handler = RecordingHandler(body=body)

        with pytest.raises(LocationNotFoundError):
            await makeGeocoder(handler).resolve("Nowhereville")

    @pytest.mark.asyncio
    async def test_api_error_body_is_not_found(self):
        """Test that an error JSON body from the API yields no results"""
        handler = RecordingHandler(status=400, body={"error": True, "reason": "Invalid name"})

        with pytest.raises(LocationNotFoundError):
            await makeGeocoder(handler).resolve("x")

    @pytest.mark.asyncio
    async def test_result_without_coordinates(self):
        """Test that a result lacking latitude is malformed"""
        handler = RecordingHandler(body={"results": [{"name": "London", "longitude": -0.1}]})

        with pytest.raises(MalformedResponseError):
            await makeGeocoder(handler).resolve("London")

    @pytest.mark.asyncio
    async def test_result_not_an_object(self):
        """Test that a non-object result is malformed"""
        handler = RecordingHandler(body={"results": ["London"]})

        with pytest.raises(MalformedResponseError):
            await makeGeocoder(handler).resolve("London")

    @pytest.mark.asyncio
    async def test_missing_name_and_country(self):
        """Test fallbacks when the result has only coordinates"""
        handler = RecordingHandler(body={"results": [{"latitude": 1.5, "longitude": 2.5}]})

        coords = await makeGeocoder(handler).resolve("Somewhere")

        assert coords.resolvedName == "Somewhere"
        assert coords.country == ""

    @pytest.mark.asyncio
    async def test_network_failure_propagates(self):
        """Test that transport errors are not swallowed"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("DNS failure", request=request)

        with pytest.raises(OpenMeteoNetworkError):
            await makeGeocoder(handler).resolve("London")
