"""
Open-Meteo client exceptions

Every failure raised by the client carries a FailureKind, so callers can
turn any of them into a single tagged result without string matching.
"""

from .models import FailureKind


class OpenMeteoError(Exception):
    """
    Base exception for all Open-Meteo client errors.

    Catch this to handle any client error generically, use ``kind``
    to tell them apart.
    """

    kind: FailureKind = FailureKind.NETWORK


class InvalidPlaceNameError(OpenMeteoError):
    """Raised before any I/O when the place name is empty or not a string."""

    kind = FailureKind.INVALID_INPUT


class OpenMeteoNetworkError(OpenMeteoError):
    """
    Raised on transport failures:
    - connection errors and timeouts
    - non-2xx responses without a parseable JSON body
    """

    kind = FailureKind.NETWORK


class LocationNotFoundError(OpenMeteoError):
    """Raised when the geocoder returns no result for a place name."""

    kind = FailureKind.NOT_FOUND


class MalformedResponseError(OpenMeteoError):
    """Raised when an upstream response lacks the expected fields or isn't JSON."""

    kind = FailureKind.MALFORMED_RESPONSE
