"""
Open-Meteo forecast: Coordinates + unit -> CurrentConditions
"""

import logging
from typing import Optional

from .exceptions import MalformedResponseError
from .http_client import OpenMeteoHttpClient
from .models import Coordinates, CurrentConditions, TemperatureUnit, parseObservedAt

logger = logging.getLogger(__name__)


class ForecastFetcher:
    """
    Fetches current conditions from the Open-Meteo forecast API

    Uses: https://api.open-meteo.com/v1/forecast?current_weather=true

    Unit conversion is delegated upstream through ``temperature_unit``, the
    values are taken verbatim. Wind speed is in km/h (the API default).
    """

    FORECAST_API = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, httpClient: OpenMeteoHttpClient, forecastUrl: Optional[str] = None):
        """
        Args:
            httpClient: Transport used for the request
            forecastUrl: Endpoint override (defaults to FORECAST_API)
        """
        self.httpClient = httpClient
        self.forecastUrl = forecastUrl or self.FORECAST_API

    async def fetch(self, coords: Coordinates, unit: TemperatureUnit) -> CurrentConditions:
        """
        Get current weather for coordinates

        Args:
            coords: Location to fetch weather for
            unit: Temperature unit to request

        Returns:
            CurrentConditions with temperature in ``unit``

        Raises:
            OpenMeteoNetworkError: On transport failure
            MalformedResponseError: If ``current_weather`` is missing or incomplete
        """
        params = {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "current_weather": "true",
            "temperature_unit": TemperatureUnit(unit).value,
        }
        data = await self.httpClient.getJson(self.forecastUrl, params)

        currentData = data.get("current_weather") if isinstance(data, dict) else None
        if not isinstance(currentData, dict):
            logger.warning(f"No current weather for: {coords.latitude}, {coords.longitude}")
            raise MalformedResponseError("Forecast response has no current_weather object")

        try:
            return CurrentConditions(
                temperature=float(currentData["temperature"]),
                windSpeedKph=float(currentData["windspeed"]),
                windDirectionDeg=int(round(float(currentData["winddirection"]))) % 360,
                weatherCode=int(currentData["weathercode"]),
                observedAt=parseObservedAt(currentData["time"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.error(f"Malformed current weather for {coords.latitude}, {coords.longitude}: {currentData}")
            raise MalformedResponseError(f"Incomplete current_weather object: {e}") from e
