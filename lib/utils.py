"""
Common utilities for the weather service.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        # If indent is passed, then user want pretty-printed JSON,
        #  no need to use compact separators
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Just read file line by line and put key-value pairs into dictionary.

    Args:
        path: Path to .env file (default ".env")
        populateEnv: Whether to populate environment variables (default True).
            Variables already present in the environment are not overridden.

    Returns:
        Dictionary of key-value pairs from .env file (empty if file is missing)
    """
    ret: Dict[str, str] = {}
    if not Path(path).is_file():
        logger.debug(f"No dotenv file at {path}")
        return ret

    with open(path, "rt") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if sep:
                ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ.setdefault(k, v)
    return ret


def parseDelay(delayStr: str) -> int:
    """
    Parse a human friendly duration into seconds.

    Args:
        delayStr: String in one of formats:
            1. `[DDd][HHh][MMm][SSs]` (e.g., "1d2h30m15s"), at least one section present
            2. `HH:MM[:SS]` (e.g., "2:30" or "2:30:15")
            3. plain integer seconds (e.g., "3600")

    Returns:
        Total duration in seconds as integer.

    Raises:
        ValueError: If the string doesn't match any supported format.
    """
    delayStr = delayStr.strip()
    if delayStr.isdigit():
        return int(delayStr)

    # Format 1: [DDd][HHh][MMm][SSs]
    if delayStr and any(c in delayStr for c in "dhms"):
        totalSeconds = 0
        remaining = delayStr
        try:
            for suffix, multiplier in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
                if suffix in remaining:
                    value, _, remaining = remaining.partition(suffix)
                    totalSeconds += int(value) * multiplier
            if remaining == "":
                return totalSeconds
        except ValueError:
            pass  # Will try next format

    # Format 2: HH:MM[:SS]
    timeParts = delayStr.split(":")
    if 2 <= len(timeParts) <= 3:
        try:
            hours = int(timeParts[0])
            minutes = int(timeParts[1])
            seconds = int(timeParts[2]) if len(timeParts) == 3 else 0
            if 0 <= minutes < 60 and 0 <= seconds < 60:
                return hours * 3600 + minutes * 60 + seconds
        except ValueError:
            pass  # Will raise ValueError at end

    raise ValueError(
        f"Invalid delay format: {delayStr}. Expected formats: '[DDd][HHh][MMm][SSs]', 'HH:MM[:SS]' or seconds"
    )
