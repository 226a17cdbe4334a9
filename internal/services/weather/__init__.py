"""Weather service package.

Turns a free-text place name into current weather conditions, serving repeated
queries from a time-bounded cache so they don't hit Open-Meteo again.

Example:
    >>> from internal.config.manager import ConfigManager
    >>> from internal.services.weather import buildWeatherService
    >>> service = buildWeatherService(ConfigManager("config.toml"))
    >>> result = await service.query("London", TemperatureUnit.CELSIUS)
    >>> await service.flushCache()
"""

from .cache import DEFAULT_NAMESPACE, WeatherCache
from .factory import buildCacheJanitor, buildStore, buildWeatherService
from .janitor import CacheJanitor
from .models import CachedWeather, WeatherQueryResult
from .service import CONNECTION_TEST_CITY, WeatherQueryService

__all__ = [
    # Service
    "WeatherQueryService",
    "WeatherCache",
    "CacheJanitor",
    # Factories
    "buildWeatherService",
    "buildStore",
    "buildCacheJanitor",
    # Types
    "CachedWeather",
    "WeatherQueryResult",
    # Constants
    "DEFAULT_NAMESPACE",
    "CONNECTION_TEST_CITY",
]
