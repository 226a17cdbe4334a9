"""
Null key/value store implementation for lib.cache, dood!

Implements KeyValueStoreInterface without storing anything. Plug it in to
disable caching entirely: every weather query then goes upstream.
"""

from typing import Any, Dict, Optional

from .interface import KeyValueStoreInterface


class NullStore(KeyValueStoreInterface):
    """No-op store that never keeps anything, dood!

    Useful for:
    - Testing without cache side effects
    - Disabling cache in production
    - Benchmarking cache impact
    """

    async def get(self, key: str) -> Optional[str]:
        """Always return None (cache miss)"""
        return None

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """Do nothing, but pretend to succeed"""
        return True

    async def deleteByPrefix(self, prefix: str) -> int:
        return 0

    async def deleteExpired(self) -> int:
        return 0

    def getStats(self) -> Dict[str, Any]:
        return {"backend": "null", "enabled": False}
