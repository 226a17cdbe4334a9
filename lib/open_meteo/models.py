"""
Data models for the Open-Meteo client

Value types are frozen dataclasses: once the geocoder or the forecast
fetcher builds one, nothing mutates it.
"""

import datetime
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, Optional


class TemperatureUnit(StrEnum):
    """Temperature unit requested from the forecast API (values are the wire values)"""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @classmethod
    def fromStr(cls, value: Any, default: Optional["TemperatureUnit"] = None) -> "TemperatureUnit":
        """
        Parse unit from string

        Args:
            value: Raw value, e.g. "celsius" or "fahrenheit" (exact match)
            default: Returned for unknown values; if None, ValueError is raised

        Returns:
            TemperatureUnit
        """
        try:
            return cls(value)
        except ValueError:
            if default is None:
                raise
            return default


class FailureKind(StrEnum):
    """Why a weather query failed"""

    INVALID_INPUT = "invalid-input"  # Empty/malformed place name, caught before any I/O
    NETWORK = "network"  # Transport failure or timeout on either upstream call
    NOT_FOUND = "not-found"  # Geocoder returned zero results
    MALFORMED_RESPONSE = "malformed-response"  # Upstream response missing expected fields


@dataclass(frozen=True)
class Coordinates:
    """Geocoding result for a free-text place name"""

    latitude: float
    longitude: float
    resolvedName: str  # Display name as returned by the geocoder (e.g. "London")
    country: str = ""  # Country name, empty if upstream omits it


@dataclass(frozen=True)
class CurrentConditions:
    """
    Current weather snapshot for one point

    ``temperature`` is in whatever unit was requested from the forecast API,
    the value itself is not unit-tagged.
    """

    temperature: float
    windSpeedKph: float
    windDirectionDeg: int  # 0-359
    weatherCode: int  # WMO weather interpretation code
    observedAt: datetime.datetime  # UTC, timezone-aware

    def toDict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "windSpeedKph": self.windSpeedKph,
            "windDirectionDeg": self.windDirectionDeg,
            "weatherCode": self.weatherCode,
            "observedAt": self.observedAt.isoformat(),
        }

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "CurrentConditions":
        """
        Build from ``toDict()`` output

        Raises:
            KeyError, TypeError, ValueError: If data is incomplete or has wrong types
        """
        return cls(
            temperature=float(data["temperature"]),
            windSpeedKph=float(data["windSpeedKph"]),
            windDirectionDeg=int(data["windDirectionDeg"]),
            weatherCode=int(data["weatherCode"]),
            observedAt=parseObservedAt(data["observedAt"]),
        )


def parseObservedAt(value: Any) -> datetime.datetime:
    """
    Parse observation time as returned by Open-Meteo

    Open-Meteo returns ISO8601 local time without offset (``2024-01-01T12:00``)
    in the requested timezone, which is GMT unless asked otherwise, or unix
    seconds when ``timeformat=unixtime`` is used.

    Raises:
        TypeError, ValueError: If value can't be parsed
    """
    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid observation time")
    if isinstance(value, (int, float)):
        try:
            return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Observation time out of range: {value}") from e
    if not isinstance(value, str):
        raise TypeError(f"Unsupported observation time type: {type(value).__name__}")

    ret = datetime.datetime.fromisoformat(value)
    if ret.tzinfo is None:
        ret = ret.replace(tzinfo=datetime.timezone.utc)
    return ret
