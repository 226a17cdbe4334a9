"""
Weather query orchestration: cache check, geocode, forecast, cache fill.
"""

import logging

from lib.open_meteo import FailureKind, ForecastFetcher, Geocoder, OpenMeteoError, TemperatureUnit

from .cache import WeatherCache
from .models import CachedWeather, WeatherQueryResult

logger = logging.getLogger(__name__)

CONNECTION_TEST_CITY = "London"


class WeatherQueryService:
    """
    Answers "current weather for this place name" with at most two upstream calls, dood!

    Flow of ``query``:
        1. Empty place name -> InvalidInput failure, no I/O at all
        2. Cache hit -> cached conditions, no network
        3. Geocoder -> Forecast fetcher, any failure is returned as is and
           nothing is cached
        4. Success is cached for ``cacheTtlSeconds`` and returned

    All collaborators are injected, see ``buildWeatherService`` for wiring
    from configuration. Concurrent queries for the same place may all miss
    and all go upstream; the last write wins.

    Example:
        >>> service = WeatherQueryService(WeatherCache(DictStore()), geocoder, fetcher, cacheTtlSeconds=3600)
        >>> result = await service.query("London", TemperatureUnit.CELSIUS)
        >>> if result.ok:
        ...     print(result.resolvedName, result.conditions.temperature)
    """

    def __init__(
        self,
        cache: WeatherCache,
        geocoder: Geocoder,
        forecastFetcher: ForecastFetcher,
        cacheTtlSeconds: int,
    ):
        """
        Args:
            cache: Weather cache
            geocoder: Place name resolver
            forecastFetcher: Current conditions fetcher
            cacheTtlSeconds: TTL for freshly fetched conditions, expected to be
                sanitised already (see WeatherConfig)
        """
        self.cache = cache
        self.geocoder = geocoder
        self.forecastFetcher = forecastFetcher
        self.cacheTtlSeconds = cacheTtlSeconds

    async def query(self, placeName: str, unit: TemperatureUnit) -> WeatherQueryResult:
        """
        Get current weather for a place name

        Args:
            placeName: Free-text place name, used verbatim
            unit: Requested temperature unit

        Returns:
            WeatherQueryResult, never raises for upstream or store problems
        """
        if not isinstance(placeName, str) or not placeName:
            logger.warning(f"Rejecting weather query with empty place name: {placeName!r}")
            return WeatherQueryResult.failed(FailureKind.INVALID_INPUT)

        try:
            unit = TemperatureUnit(unit)
        except ValueError:
            logger.warning(f"Rejecting weather query with unknown unit: {unit!r}")
            return WeatherQueryResult.failed(FailureKind.INVALID_INPUT)

        cached = await self.cache.get(placeName, unit)
        if cached is not None:
            return WeatherQueryResult.success(cached.conditions, cached.resolvedName, fromCache=True)

        result = await self._fetch(placeName, unit)
        if result.conditions is not None and result.resolvedName is not None:
            await self.cache.put(
                placeName,
                unit,
                CachedWeather(conditions=result.conditions, resolvedName=result.resolvedName),
                self.cacheTtlSeconds,
            )
        return result

    async def _fetch(self, placeName: str, unit: TemperatureUnit) -> WeatherQueryResult:
        try:
            coords = await self.geocoder.resolve(placeName)
            conditions = await self.forecastFetcher.fetch(coords, unit)
        except OpenMeteoError as e:
            logger.warning(f"Weather query for {placeName} failed ({e.kind}): {e}")
            return WeatherQueryResult.failed(e.kind)

        logger.debug(f"Fetched weather for {placeName}: {coords.resolvedName}, {conditions}")
        return WeatherQueryResult.success(conditions, coords.resolvedName)

    async def flushCache(self) -> int:
        """Remove every weather cache entry, returns number of removed entries"""
        return await self.cache.invalidateAll()

    async def flushExpired(self) -> int:
        """Remove expired cache entries, returns number of removed entries"""
        return await self.cache.invalidateExpired()

    async def testConnection(self, city: str = CONNECTION_TEST_CITY) -> WeatherQueryResult:
        """
        Check that both upstream APIs answer, bypassing the cache

        Args:
            city: Place name to look up (London by default)

        Returns:
            WeatherQueryResult for ``city`` in Celsius
        """
        if not city:
            return WeatherQueryResult.failed(FailureKind.INVALID_INPUT)

        result = await self._fetch(city, TemperatureUnit.CELSIUS)
        if result.ok:
            logger.info(f"API connection successful, {result.resolvedName}: {result.conditions}")
        else:
            logger.error(f"API connection failed: {result.failure}")
        return result
