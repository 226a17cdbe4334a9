"""
Test utility functions and helpers.

This module provides helper functions for creating test objects
and a controllable clock for expiry tests.
"""

import datetime
from typing import Any, Dict, Optional

from lib.open_meteo import Coordinates, CurrentConditions

# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Manually advanced replacement for time.time"""

    def __init__(self, now: float = 1_709_294_400.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Model Creation Utilities
# ============================================================================


def createCoordinates(
    resolvedName: str = "London",
    latitude: float = 51.50853,
    longitude: float = -0.12574,
    country: str = "United Kingdom",
) -> Coordinates:
    return Coordinates(latitude=latitude, longitude=longitude, resolvedName=resolvedName, country=country)


def createConditions(
    temperature: float = 9.8,
    windSpeedKph: float = 18.4,
    windDirectionDeg: int = 236,
    weatherCode: int = 3,
    observedAt: Optional[datetime.datetime] = None,
) -> CurrentConditions:
    """
    Create CurrentConditions with London-in-March defaults.

    Args:
        temperature: Temperature in whatever unit the test needs
        observedAt: Observation time (default: 2024-03-01 12:00 UTC)
    """
    if observedAt is None:
        observedAt = datetime.datetime(2024, 3, 1, 12, 0, tzinfo=datetime.timezone.utc)
    return CurrentConditions(
        temperature=temperature,
        windSpeedKph=windSpeedKph,
        windDirectionDeg=windDirectionDeg,
        weatherCode=weatherCode,
        observedAt=observedAt,
    )


def createForecastBody(conditions: CurrentConditions) -> Dict[str, Any]:
    """Open-Meteo forecast response body carrying given conditions"""
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "timezone": "GMT",
        "current_weather": {
            "time": conditions.observedAt.strftime("%Y-%m-%dT%H:%M"),
            "temperature": conditions.temperature,
            "windspeed": conditions.windSpeedKph,
            "winddirection": conditions.windDirectionDeg,
            "weathercode": conditions.weatherCode,
        },
    }
