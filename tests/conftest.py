"""
Pytest configuration and common fixtures for weather service tests.

This module provides shared fixtures for testing the weather service, its
cache and the Open-Meteo client. All fixtures follow camelCase naming convention.
"""

import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from internal.services.weather import WeatherCache, WeatherQueryService
from lib.cache import DictStore
from lib.open_meteo import ForecastFetcher, Geocoder
from tests.golden_data.open_meteo.provider import GoldenDataProvider
from tests.utils import FakeClock, createConditions, createCoordinates

# ============================================================================
# General Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fakeClock() -> FakeClock:
    """
    Provide manually advanced clock.

    Example:
        def testExpiry(fakeClock, dictStore):
            fakeClock.advance(3600)
    """
    return FakeClock()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sampleCoordinates():
    """Provide London coordinates as returned by the geocoder."""
    return createCoordinates()


@pytest.fixture
def sampleConditions():
    """Provide sample current conditions (Celsius)."""
    return createConditions()


# ============================================================================
# Store & Cache Fixtures
# ============================================================================


@pytest.fixture
def dictStore(fakeClock) -> DictStore:
    """Create in-memory store driven by fakeClock."""
    return DictStore(maxSize=None, timeFunc=fakeClock)


@pytest.fixture
def weatherCache(dictStore) -> WeatherCache:
    return WeatherCache(dictStore)


# ============================================================================
# Collaborator Mock Fixtures
# ============================================================================


@pytest.fixture
def mockGeocoder(sampleCoordinates):
    """
    Create a mock Geocoder resolving everything to London.

    Example:
        def testNotFound(mockGeocoder):
            mockGeocoder.resolve.side_effect = LocationNotFoundError("nope")
    """
    mock = AsyncMock(spec=Geocoder)
    mock.resolve.return_value = sampleCoordinates
    return mock


@pytest.fixture
def mockForecastFetcher(sampleConditions):
    """Create a mock ForecastFetcher returning sampleConditions."""
    mock = AsyncMock(spec=ForecastFetcher)
    mock.fetch.return_value = sampleConditions
    return mock


@pytest.fixture
def weatherService(weatherCache, mockGeocoder, mockForecastFetcher) -> WeatherQueryService:
    """Create WeatherQueryService with mocked upstream and in-memory cache."""
    return WeatherQueryService(
        cache=weatherCache,
        geocoder=mockGeocoder,
        forecastFetcher=mockForecastFetcher,
        cacheTtlSeconds=3600,
    )


# ============================================================================
# Golden Data Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def goldenDataProvider() -> GoldenDataProvider:
    """Provide recorded Open-Meteo responses."""
    return GoldenDataProvider()
