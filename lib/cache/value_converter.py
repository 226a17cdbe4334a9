"""
Value converter implementations for store values, dood!

Stores only keep strings; these converters bridge Python objects and
their stored representation.
"""

import json
from typing import Any, Dict

import lib.utils as utils

from .types import ValueConverter


class JsonValueConverter(ValueConverter[Dict[str, Any]]):
    """
    JSON converter for serializable dicts, dood!

    Non-JSON types (datetimes, enums) are written through ``str()``, so callers
    that need them back must parse them on decode.
    """

    def encode(self, obj: Dict[str, Any]) -> str:
        return utils.jsonDumps(obj, sort_keys=False)

    def decode(self, value: str) -> Dict[str, Any]:
        ret = json.loads(value)
        if not isinstance(ret, dict):
            raise ValueError(f"Expected JSON object, got {type(ret).__name__}")
        return ret
