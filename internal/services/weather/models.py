"""
Result and cache value types of the weather service.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from lib.open_meteo import CurrentConditions, FailureKind


@dataclass(frozen=True)
class CachedWeather:
    """What a cache entry holds: conditions plus the label they were resolved for"""

    conditions: CurrentConditions
    resolvedName: str

    def toDict(self) -> Dict[str, Any]:
        return {
            "conditions": self.conditions.toDict(),
            "resolvedName": self.resolvedName,
        }

    @classmethod
    def fromDict(cls, data: Dict[str, Any]) -> "CachedWeather":
        """
        Raises:
            KeyError, TypeError, ValueError: If data is incomplete
        """
        resolvedName = data["resolvedName"]
        if not isinstance(resolvedName, str):
            raise TypeError(f"resolvedName must be str, got {type(resolvedName).__name__}")
        return cls(conditions=CurrentConditions.fromDict(data["conditions"]), resolvedName=resolvedName)


@dataclass(frozen=True)
class WeatherQueryResult:
    """
    Outcome of a weather query: either conditions with a city label or a failure kind

    Exactly one of (``conditions``, ``failure``) is set, use ``success()`` and
    ``failed()`` to build instances.
    """

    conditions: Optional[CurrentConditions] = None
    resolvedName: Optional[str] = None
    failure: Optional[FailureKind] = None
    fromCache: bool = False

    def __post_init__(self):
        if (self.conditions is None) == (self.failure is None):
            raise ValueError("WeatherQueryResult needs either conditions or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(
        cls, conditions: CurrentConditions, resolvedName: str, *, fromCache: bool = False
    ) -> "WeatherQueryResult":
        return cls(conditions=conditions, resolvedName=resolvedName, fromCache=fromCache)

    @classmethod
    def failed(cls, failure: FailureKind) -> "WeatherQueryResult":
        return cls(failure=failure)

    def toDict(self) -> Dict[str, Any]:
        if self.conditions is None:
            return {"ok": False, "failure": str(self.failure)}
        return {
            "ok": True,
            "resolvedName": self.resolvedName,
            "fromCache": self.fromCache,
            "conditions": self.conditions.toDict(),
        }
