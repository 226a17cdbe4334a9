"""
Built-in key generator implementations for lib.cache, dood!

Available Generators:
    - PrefixedHashKeyGenerator: namespace prefix + MD5 digest of concatenated parts
"""

import hashlib
from typing import Sequence

from .types import KeyGenerator


class PrefixedHashKeyGenerator(KeyGenerator[Sequence[str]]):
    """
    Namespaced one-way hash key generator, dood!

    Concatenates the parts as-is (no separator, no case folding, no trimming),
    hashes the result with MD5 and prepends a fixed namespace. The namespace
    makes every key written through this generator enumerable and deletable
    as a group by prefix without a secondary index.

    MD5 is used as a stable digest for key derivation only, not for security.

    Example:
        >>> generator = PrefixedHashKeyGenerator("yt_weather_")
        >>> generator.generateKey(("London", "celsius"))
        'yt_weather_...'  # 11-char prefix + 32 hex chars
    """

    __slots__ = ("prefix",)

    def __init__(self, prefix: str):
        """
        Args:
            prefix: Namespace prepended to every generated key
        """
        self.prefix = prefix

    def generateKey(self, obj: Sequence[str]) -> str:
        """
        Generate namespaced MD5 key from a sequence of string parts

        Args:
            obj: Parts to concatenate, e.g. ``(placeName, unit)``

        Returns:
            str: ``prefix`` followed by the 32-character hex digest

        Raises:
            TypeError: If any part is not a string
        """
        if isinstance(obj, str):
            obj = (obj,)
        for part in obj:
            if not isinstance(part, str):
                raise TypeError(f"PrefixedHashKeyGenerator expects string parts, got {type(part).__name__}")

        digest = hashlib.md5("".join(obj).encode("utf-8")).hexdigest()
        return f"{self.prefix}{digest}"
