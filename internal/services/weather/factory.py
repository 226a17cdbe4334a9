"""
Wiring of WeatherQueryService from configuration.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from internal.config.manager import ConfigManager
from internal.config.models import CacheBackend, ConfigError
from internal.database.kv_store import DatabaseKeyValueStore
from internal.database.wrapper import DatabaseWrapper
from lib.cache import DictStore, KeyValueStoreInterface, NullStore
from lib.open_meteo import ForecastFetcher, Geocoder, OpenMeteoHttpClient

from .cache import WeatherCache
from .janitor import CacheJanitor
from .service import WeatherQueryService

logger = logging.getLogger(__name__)


def buildStore(cacheConfig: Dict[str, Any]) -> KeyValueStoreInterface:
    """
    Create key/value store for the configured backend

    Args:
        cacheConfig: Output of ConfigManager.getCacheConfig()

    Raises:
        ConfigError: On unknown backend
    """
    backend = cacheConfig["backend"]
    match backend:
        case CacheBackend.MEMORY:
            return DictStore(maxSize=cacheConfig.get("max-size"))
        case CacheBackend.SQLITE:
            return DatabaseKeyValueStore(DatabaseWrapper(cacheConfig["path"]))
        case CacheBackend.NULL:
            return NullStore()
        case _:
            raise ConfigError(f"Unknown cache backend {backend!r}")


def buildWeatherService(
    configManager: ConfigManager,
    *,
    store: Optional[KeyValueStoreInterface] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> WeatherQueryService:
    """
    Build WeatherQueryService from configuration, dood!

    Args:
        configManager: Loaded configuration
        store: Use this store instead of the configured backend
        transport: httpx transport override (tests, proxies)

    Raises:
        ConfigError: On invalid configuration
    """
    weatherConfig = configManager.getWeatherConfig()
    openMeteoConfig = configManager.getOpenMeteoConfig()
    cacheConfig = configManager.getCacheConfig()

    if store is None:
        store = buildStore(cacheConfig)

    httpClient = OpenMeteoHttpClient(requestTimeout=openMeteoConfig["request-timeout"], transport=transport)
    service = WeatherQueryService(
        cache=WeatherCache(store, namespace=cacheConfig["namespace"]),
        geocoder=Geocoder(httpClient, geocodingUrl=openMeteoConfig["geocoding-url"]),
        forecastFetcher=ForecastFetcher(httpClient, forecastUrl=openMeteoConfig["forecast-url"]),
        cacheTtlSeconds=weatherConfig.cacheTtlSeconds,
    )
    logger.info(
        f"Weather service ready: backend={cacheConfig['backend']}, ttl={weatherConfig.cacheTtlSeconds}s, "
        f"timeout={openMeteoConfig['request-timeout']}s"
    )
    return service


def buildCacheJanitor(
    configManager: ConfigManager, service: WeatherQueryService, intervalSeconds: Optional[int] = None
) -> CacheJanitor:
    """Create janitor with the configured (or given) sweep interval"""
    if intervalSeconds is None:
        intervalSeconds = configManager.getCacheConfig()["janitor-interval"]
    return CacheJanitor(service, intervalSeconds=intervalSeconds)
