"""
Thread-safe dictionary-based key/value store, dood!

Keeps everything in process memory. Useful for single-process deployments,
tests and as the default backend when nothing else is configured.
"""

import logging
import math
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from .interface import KeyValueStoreInterface

logger = logging.getLogger(__name__)


class DictStore(KeyValueStoreInterface):
    """
    In-memory key/value store with per-entry expiry, dood!

    Entries are kept as ``key -> (value, expiresAt)``. Expired entries are
    dropped lazily on read and in bulk by ``deleteExpired``. When ``maxSize``
    is reached, expired entries are purged first and then the oldest written
    entry is evicted.

    Thread Safety:
        All operations take an RLock, so the store can be shared between
        concurrent page renders running in different threads or tasks.

    Example:
        >>> store = DictStore(maxSize=100)
        >>> await store.set("key", "value", ttl=300)
        >>> await store.get("key")
        'value'
    """

    def __init__(self, maxSize: Optional[int] = 1000, timeFunc: Callable[[], float] = time.time):
        """
        Initialize empty store

        Args:
            maxSize: Maximum number of entries (None or <= 0 means unbounded)
            timeFunc: Clock used for expiry, injectable for tests
        """
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._maxSize = maxSize if maxSize is not None and maxSize > 0 else None
        self._timeFunc = timeFunc
        self._lock = threading.RLock()

    def _isExpired(self, expiresAt: float) -> bool:
        return expiresAt <= self._timeFunc()

    def _purgeExpiredLocked(self) -> int:
        expiredKeys = [key for key, (_, expiresAt) in self._entries.items() if self._isExpired(expiresAt)]
        for key in expiredKeys:
            del self._entries[key]
        return len(expiredKeys)

    def _evictIfNeededLocked(self) -> None:
        if self._maxSize is None or len(self._entries) < self._maxSize:
            return

        self._purgeExpiredLocked()
        while len(self._entries) >= self._maxSize:
            # Dicts keep insertion order and set() reinserts, so the first key is the oldest write
            oldestKey = next(iter(self._entries))
            del self._entries[oldestKey]
            logger.debug(f"Evicted oldest entry {oldestKey}, dood!")

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expiresAt = entry
            if self._isExpired(expiresAt):
                del self._entries[key]
                logger.debug(f"Dropped expired entry: {key}")
                return None

            return value

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        expiresAt = self._timeFunc() + ttl if ttl is not None and ttl > 0 else math.inf
        with self._lock:
            # Pop first so the rewritten key moves to the end of the eviction order
            self._entries.pop(key, None)
            self._evictIfNeededLocked()
            self._entries[key] = (value, expiresAt)
        return True

    async def deleteByPrefix(self, prefix: str) -> int:
        with self._lock:
            matchingKeys = [key for key in self._entries if key.startswith(prefix)]
            for key in matchingKeys:
                del self._entries[key]
        logger.debug(f"Deleted {len(matchingKeys)} entries with prefix '{prefix}'")
        return len(matchingKeys)

    async def deleteExpired(self) -> int:
        with self._lock:
            removed = self._purgeExpiredLocked()
        if removed:
            logger.debug(f"Cleaned up {removed} expired entries, dood!")
        return removed

    def getStats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "backend": "memory",
                "entries": len(self._entries),
                "maxSize": self._maxSize,
                "threadSafe": True,
            }
