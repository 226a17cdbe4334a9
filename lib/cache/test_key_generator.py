"""
Tests for key generators and value converters, dood!
"""

import hashlib

import pytest

from .key_generator import PrefixedHashKeyGenerator
from .value_converter import JsonValueConverter


class TestPrefixedHashKeyGenerator:
    """Test namespaced MD5 key derivation, dood!"""

    def test_key_matches_md5_of_concatenation(self):
        """Test the exact key format, dood!"""
        generator = PrefixedHashKeyGenerator("yt_weather_")

        expected = "yt_weather_" + hashlib.md5("Londoncelsius".encode("utf-8")).hexdigest()
        assert generator.generateKey(("London", "celsius")) == expected

    def test_key_is_deterministic(self):
        """Test that the same parts always produce the same key, dood!"""
        generator = PrefixedHashKeyGenerator("ns_")

        assert generator.generateKey(("Paris", "celsius")) == generator.generateKey(["Paris", "celsius"])

    def test_key_is_unit_sensitive(self):
        """Test that different units produce different keys, dood!"""
        generator = PrefixedHashKeyGenerator("ns_")

        assert generator.generateKey(("Paris", "celsius")) != generator.generateKey(("Paris", "fahrenheit"))

    def test_key_is_case_and_whitespace_sensitive(self):
        """Test that place names are not normalized, dood!"""
        generator = PrefixedHashKeyGenerator("ns_")

        keys = {
            generator.generateKey(("London", "celsius")),
            generator.generateKey(("london", "celsius")),
            generator.generateKey(("London ", "celsius")),
        }
        assert len(keys) == 3

    def test_single_string_is_accepted(self):
        """Test that a bare string is treated as one part, dood!"""
        generator = PrefixedHashKeyGenerator("ns_")

        assert generator.generateKey("abc") == generator.generateKey(("abc",))

    def test_non_string_part_rejected(self):
        """Test that non-string parts raise TypeError, dood!"""
        generator = PrefixedHashKeyGenerator("ns_")

        with pytest.raises(TypeError):
            generator.generateKey(("London", 1))  # type: ignore[arg-type]


class TestJsonValueConverter:
    """Test JSON value conversion, dood!"""

    def test_decode_encoded_dict(self):
        converter = JsonValueConverter()
        data = {"temperature": 18.5, "resolvedName": "Zürich"}

        encoded = converter.encode(data)
        assert "Zürich" in encoded
        assert converter.decode(encoded) == data

    def test_decode_rejects_non_object(self):
        converter = JsonValueConverter()

        with pytest.raises(ValueError):
            converter.decode("[1, 2, 3]")
