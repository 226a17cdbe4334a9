"""
SQLite-backed key/value store, dood!

Plugs the cache_storage table of DatabaseWrapper into the
lib.cache.KeyValueStoreInterface contract, so the weather cache survives
process restarts and can be shared by several processes on one host.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from lib.cache import KeyValueStoreInterface

from .wrapper import DatabaseWrapper

logger = logging.getLogger(__name__)


class DatabaseKeyValueStore(KeyValueStoreInterface):
    """
    Database-backed key/value store with per-entry expiry, dood!

    Expiry is stored as an absolute unix time next to the value. Reads ignore
    expired rows, ``deleteExpired`` removes them physically.

    Example:
        >>> db = DatabaseWrapper("weather_cache.db")
        >>> store = DatabaseKeyValueStore(db)
        >>> await store.set("yt_weather_abc", '{"temperature": 18}', ttl=3600)
        >>> await store.get("yt_weather_abc")
        '{"temperature": 18}'
    """

    def __init__(self, db: DatabaseWrapper, timeFunc: Callable[[], float] = time.time):
        """
        Args:
            db: DatabaseWrapper instance
            timeFunc: Clock used for expiry, injectable for tests
        """
        self.db = db
        self._timeFunc = timeFunc

    async def get(self, key: str) -> Optional[str]:
        return self.db.getCacheEntry(key, now=self._timeFunc())

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        expiresAt = self._timeFunc() + ttl if ttl is not None and ttl > 0 else None
        return self.db.setCacheEntry(key, value, expiresAt=expiresAt)

    async def deleteByPrefix(self, prefix: str) -> int:
        deleted = self.db.deleteCacheByPrefix(prefix)
        logger.debug(f"Deleted {deleted} entries with prefix {prefix}")
        return deleted

    async def deleteExpired(self) -> int:
        return self.db.deleteExpiredCache(now=self._timeFunc())

    def getStats(self) -> Dict[str, Any]:
        return {
            "backend": "sqlite",
            "path": self.db.dbPath,
            "entries": self.db.countCacheEntries(),
        }
