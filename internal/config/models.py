"""
Typed configuration for the weather service.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict

from lib.open_meteo import TemperatureUnit

logger = logging.getLogger(__name__)

MIN_CACHE_TTL = 300
DEFAULT_CACHE_TTL = 3600
DEFAULT_CITY = "London"
DEFAULT_JANITOR_INTERVAL = 3600


class ConfigError(Exception):
    """Raised when configuration can't be loaded or has unusable values."""


class WidgetStyle(StrEnum):
    """Presentation style preference, carried through for the rendering layer."""

    CARD = "card"
    MINIMAL = "minimal"
    DETAILED = "detailed"


class CacheBackend(StrEnum):
    MEMORY = "memory"
    SQLITE = "sqlite"
    NULL = "null"


def _absInt(value: Any) -> int:
    """Lenient non-negative integer parsing: garbage becomes 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, (float, str)):
        try:
            return abs(int(float(value)))
        except (ValueError, OverflowError):
            return 0
    return 0


def _toBool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class WeatherConfig:
    """
    Weather settings from the ``[weather]`` section

    Built once with defaults merged in and every value sanitised, so the
    service never sees an unknown unit or a TTL below MIN_CACHE_TTL.
    """

    defaultUnit: TemperatureUnit = TemperatureUnit.CELSIUS
    cacheTtlSeconds: int = DEFAULT_CACHE_TTL
    defaultCity: str = DEFAULT_CITY
    showIcon: bool = True
    showWind: bool = True
    showHumidity: bool = True
    widgetStyle: WidgetStyle = WidgetStyle.CARD

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "WeatherConfig":
        """
        Build sanitised config from raw section values

        Args:
            data: ``[weather]`` section, keys: default-unit, cache-ttl,
                default-city, show-icon, show-wind, show-humidity, widget-style

        Returns:
            WeatherConfig, unknown unit falls back to celsius, unknown style to
            card, TTL is clamped to at least MIN_CACHE_TTL and empty city is
            replaced with DEFAULT_CITY
        """
        defaultUnit = TemperatureUnit.fromStr(data.get("default-unit"), TemperatureUnit.CELSIUS)

        if "cache-ttl" in data:
            cacheTtl = max(MIN_CACHE_TTL, _absInt(data["cache-ttl"]))
        else:
            cacheTtl = DEFAULT_CACHE_TTL

        defaultCity = str(data.get("default-city") or "").strip() or DEFAULT_CITY

        try:
            widgetStyle = WidgetStyle(data.get("widget-style", WidgetStyle.CARD))
        except ValueError:
            logger.warning(f"Unknown widget style {data.get('widget-style')!r}, using {WidgetStyle.CARD}")
            widgetStyle = WidgetStyle.CARD

        return cls(
            defaultUnit=defaultUnit,
            cacheTtlSeconds=cacheTtl,
            defaultCity=defaultCity,
            showIcon=_toBool(data.get("show-icon"), True),
            showWind=_toBool(data.get("show-wind"), True),
            showHumidity=_toBool(data.get("show-humidity"), True),
            widgetStyle=widgetStyle,
        )

    def toDict(self) -> Dict[str, Any]:
        """Inverse of fromDict, with the config file key names"""
        return {
            "default-unit": str(self.defaultUnit),
            "cache-ttl": self.cacheTtlSeconds,
            "default-city": self.defaultCity,
            "show-icon": self.showIcon,
            "show-wind": self.showWind,
            "show-humidity": self.showHumidity,
            "widget-style": str(self.widgetStyle),
        }
