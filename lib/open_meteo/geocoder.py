"""
Open-Meteo geocoding: free-text place name -> Coordinates
"""

import logging
from typing import Optional

from .exceptions import InvalidPlaceNameError, LocationNotFoundError, MalformedResponseError
from .http_client import OpenMeteoHttpClient
from .models import Coordinates

logger = logging.getLogger(__name__)


class Geocoder:
    """
    Resolves place names through the Open-Meteo geocoding API

    Uses: https://geocoding-api.open-meteo.com/v1/search

    The place name is sent exactly as given (no trimming or case folding)
    and only the first match is used.
    """

    GEOCODING_API = "https://geocoding-api.open-meteo.com/v1/search"

    def __init__(self, httpClient: OpenMeteoHttpClient, geocodingUrl: Optional[str] = None):
        """
        Args:
            httpClient: Transport used for the lookup
            geocodingUrl: Endpoint override (defaults to GEOCODING_API)
        """
        self.httpClient = httpClient
        self.geocodingUrl = geocodingUrl or self.GEOCODING_API

    async def resolve(self, placeName: str) -> Coordinates:
        """
        Get coordinates by place name

        Args:
            placeName: Non-empty free-text place name (e.g. "London")

        Returns:
            Coordinates of the first match

        Raises:
            InvalidPlaceNameError: If placeName is empty
            OpenMeteoNetworkError: On transport failure
            LocationNotFoundError: If the API returned no results
            MalformedResponseError: If the first result lacks coordinates
        """
        if not isinstance(placeName, str) or not placeName:
            raise InvalidPlaceNameError("Place name must be a non-empty string")

        params = {"name": placeName, "count": 1, "format": "json"}
        data = await self.httpClient.getJson(self.geocodingUrl, params)

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or not results:
            logger.warning(f"No geocoding results for: {placeName}")
            raise LocationNotFoundError(f"No geocoding results for {placeName!r}")

        apiResult = results[0]
        try:
            return Coordinates(
                latitude=float(apiResult["latitude"]),
                longitude=float(apiResult["longitude"]),
                resolvedName=str(apiResult.get("name") or placeName),
                country=str(apiResult.get("country") or ""),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed geocoding result for {placeName}: {apiResult}")
            raise MalformedResponseError(f"Geocoding result for {placeName!r} lacks coordinates") from e
