"""
Weather cache: (place name, unit) -> CachedWeather on top of a key/value store.
"""

import logging
from typing import Any, Dict, Optional

from lib.cache import JsonValueConverter, KeyValueStoreInterface, PrefixedHashKeyGenerator
from lib.open_meteo import TemperatureUnit

from .models import CachedWeather

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "yt_weather_"


class WeatherCache:
    """
    Namespaced weather cache, dood!

    Keys are ``namespace + md5(placeName + unit)``: the raw place name is
    used, so "London" and "london" are different entries. The store is
    best-effort: any store failure is logged and reported as a miss (or a
    failed write) so it never breaks a weather query.

    Example:
        >>> cache = WeatherCache(DictStore())
        >>> await cache.put("London", TemperatureUnit.CELSIUS, cached, ttlSeconds=3600)
        >>> await cache.get("London", TemperatureUnit.CELSIUS)
        CachedWeather(conditions=..., resolvedName='London')
    """

    def __init__(self, store: KeyValueStoreInterface, namespace: str = DEFAULT_NAMESPACE):
        """
        Args:
            store: Backing key/value store, may be shared with other subsystems
            namespace: Key prefix owned by this cache
        """
        self.store = store
        self.namespace = namespace
        self._keyGenerator = PrefixedHashKeyGenerator(namespace)
        self._valueConverter = JsonValueConverter()

    def cacheKey(self, placeName: str, unit: TemperatureUnit) -> str:
        """Deterministic store key for (placeName, unit)"""
        return self._keyGenerator.generateKey((placeName, TemperatureUnit(unit).value))

    async def get(self, placeName: str, unit: TemperatureUnit) -> Optional[CachedWeather]:
        """
        Get cached weather, None on miss, expiry, undecodable entry or store failure
        """
        key = self.cacheKey(placeName, unit)
        try:
            data = await self.store.get(key)
        except Exception as e:
            logger.error(f"Failed to read cache entry {key}: {e}")
            return None

        if data is None:
            logger.debug(f"Cache miss for {placeName} ({unit})")
            return None

        try:
            ret = CachedWeather.fromDict(self._valueConverter.decode(data))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Dropping undecodable cache entry {key}: {e}")
            return None

        logger.debug(f"Cache hit for {placeName} ({unit})")
        return ret

    async def put(self, placeName: str, unit: TemperatureUnit, value: CachedWeather, ttlSeconds: int) -> bool:
        """
        Store weather, overwriting any previous entry for (placeName, unit)

        Returns:
            True if stored, False if the store refused or failed
        """
        key = self.cacheKey(placeName, unit)
        try:
            ret = await self.store.set(key, self._valueConverter.encode(value.toDict()), ttl=ttlSeconds)
        except Exception as e:
            logger.error(f"Failed to write cache entry {key}: {e}")
            return False

        if not ret:
            logger.warning(f"Store refused cache entry {key}")
        return ret

    async def invalidateAll(self) -> int:
        """Remove every entry under this cache's namespace, other keys in the store stay"""
        try:
            removed = await self.store.deleteByPrefix(self.namespace)
        except Exception as e:
            logger.error(f"Failed to flush weather cache: {e}")
            return 0
        logger.info(f"Flushed {removed} weather cache entries, dood!")
        return removed

    async def invalidateExpired(self) -> int:
        """
        Remove expired entries from the store

        The sweep is store-wide: in a shared store expired rows of other
        namespaces are removed too. Those rows are already invisible to
        their owners, so nothing observable changes for them.
        """
        try:
            removed = await self.store.deleteExpired()
        except Exception as e:
            logger.error(f"Failed to flush expired cache entries: {e}")
            return 0
        logger.info(f"Flushed {removed} expired cache entries")
        return removed

    def getStats(self) -> Dict[str, Any]:
        return {"namespace": self.namespace, **self.store.getStats()}
