"""
Abstract key/value store interface for lib.cache, dood!

Every backend the weather cache can sit on (in-memory dict, SQLite table,
no-op store) implements this contract. Values are plain strings, callers are
responsible for serialization (see value_converter.py).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class KeyValueStoreInterface(ABC):
    """
    String key/value store with optional per-entry expiry, dood!

    Expiry semantics:
        - ttl > 0: entry becomes invisible ``ttl`` seconds after ``set``
        - ttl is None or <= 0: entry never expires on its own

    Expired entries must never be returned by ``get``. Whether they are
    physically removed on read or only by ``deleteExpired`` is up to the
    implementation.

    Example:
        >>> store = DictStore()
        >>> await store.set("yt_weather_abc", '{"temperature": 18}', ttl=3600)
        >>> await store.get("yt_weather_abc")
        '{"temperature": 18}'
        >>> await store.deleteByPrefix("yt_weather_")
        1
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get stored value by key

        Args:
            key: Store key

        Returns:
            Optional[str]: Stored value if present and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Store value under key, replacing any previous entry wholesale

        Args:
            key: Store key
            value: String value to store
            ttl: Time to live in seconds (None or <= 0 means no expiry)

        Returns:
            bool: True if the value was stored, False otherwise
        """
        pass

    @abstractmethod
    async def deleteByPrefix(self, prefix: str) -> int:
        """
        Delete every entry whose key starts with prefix

        Args:
            prefix: Key prefix (namespace) to delete

        Returns:
            int: Number of removed entries
        """
        pass

    @abstractmethod
    async def deleteExpired(self) -> int:
        """
        Delete every entry whose expiry instant has passed

        Returns:
            int: Number of removed entries
        """
        pass

    @abstractmethod
    def getStats(self) -> Dict[str, Any]:
        """
        Get implementation-specific store statistics

        Returns:
            Dict[str, Any]: Statistics such as entry count and backend name
        """
        pass
