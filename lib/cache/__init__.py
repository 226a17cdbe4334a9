"""
lib.cache - Key/value store abstractions for the weather cache, dood!

Core Components:
- KeyValueStoreInterface: Abstract base class for all store backends
- DictStore: Thread-safe in-memory store with per-entry expiry
- NullStore: No-op store for testing and for disabling the cache
- PrefixedHashKeyGenerator: Namespaced MD5 key derivation
- JsonValueConverter: dict <-> JSON string conversion

Example Usage:
    >>> from lib.cache import DictStore, PrefixedHashKeyGenerator
    >>>
    >>> store = DictStore(maxSize=1000)
    >>> keyGenerator = PrefixedHashKeyGenerator("yt_weather_")
    >>> key = keyGenerator.generateKey(("London", "celsius"))
    >>> await store.set(key, '{"temperature": 18.0}', ttl=3600)
    >>> await store.get(key)
    '{"temperature": 18.0}'
"""

from .dict_store import DictStore
from .interface import KeyValueStoreInterface
from .key_generator import PrefixedHashKeyGenerator
from .null_store import NullStore
from .types import KeyGenerator, V, ValueConverter
from .value_converter import JsonValueConverter

__all__ = [
    # Core types
    "KeyGenerator",
    "ValueConverter",
    "V",
    # Interfaces
    "KeyValueStoreInterface",
    # Implementations
    "DictStore",
    "NullStore",
    # Key generators
    "PrefixedHashKeyGenerator",
    # Value Converters
    "JsonValueConverter",
]
