"""
Open-Meteo Async Client Library

This module provides async clients for the free Open-Meteo APIs (no API key):
geocoding (place name → coordinates) and current weather retrieval. The
clients don't cache anything themselves, caching is layered on top by
internal.services.weather.

Example usage:
    from lib.open_meteo import ForecastFetcher, Geocoder, OpenMeteoHttpClient, TemperatureUnit

    httpClient = OpenMeteoHttpClient(requestTimeout=10)
    geocoder = Geocoder(httpClient)
    fetcher = ForecastFetcher(httpClient)

    coords = await geocoder.resolve("London")
    conditions = await fetcher.fetch(coords, TemperatureUnit.CELSIUS)
    print(f"{coords.resolvedName}: {conditions.temperature}°C")
"""

from .exceptions import (
    InvalidPlaceNameError,
    LocationNotFoundError,
    MalformedResponseError,
    OpenMeteoError,
    OpenMeteoNetworkError,
)
from .forecast import ForecastFetcher
from .geocoder import Geocoder
from .http_client import DEFAULT_REQUEST_TIMEOUT, OpenMeteoHttpClient
from .models import Coordinates, CurrentConditions, FailureKind, TemperatureUnit
from .weather_codes import (
    WEATHER_DESCRIPTIONS,
    getTemperatureSymbol,
    getWeatherDescription,
    getWeatherIcon,
    getWindDirection,
)

__all__ = [
    "Coordinates",
    "CurrentConditions",
    "FailureKind",
    "TemperatureUnit",
    "OpenMeteoHttpClient",
    "DEFAULT_REQUEST_TIMEOUT",
    "Geocoder",
    "ForecastFetcher",
    "OpenMeteoError",
    "InvalidPlaceNameError",
    "OpenMeteoNetworkError",
    "LocationNotFoundError",
    "MalformedResponseError",
    "WEATHER_DESCRIPTIONS",
    "getWeatherDescription",
    "getWeatherIcon",
    "getWindDirection",
    "getTemperatureSymbol",
]
