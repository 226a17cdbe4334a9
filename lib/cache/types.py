"""
Core type definitions and protocols for lib.cache, dood!

Key generators turn domain objects into store keys, value converters turn
domain objects into the strings the stores actually keep.
"""

from typing import Protocol, TypeVar

# Type variables for generic cache operations, dood!
V = TypeVar("V")  # Value type - can be any type
T = TypeVar("T", contravariant=True)  # Generic object type for key generators


class KeyGenerator(Protocol[T]):
    """
    Protocol for generating store keys from objects, dood!

    Implementations must be deterministic: the same object always produces
    the same key, otherwise cached entries can never be found again.
    """

    def generateKey(self, obj: T) -> str:
        """
        Generate string store key from object

        Args:
            obj: The object to convert to a key

        Returns:
            str: A string suitable for use as a store key
        """
        ...


class ValueConverter(Protocol[V]):
    """
    Protocol for converting objects to store values and back

    Type Parameters:
        V: The type of objects that can be converted to store values
    """

    def encode(self, obj: V) -> str:
        """Convert object to a string store value"""
        ...

    def decode(self, value: str) -> V:
        """Decode a string store value back to object"""
        ...
