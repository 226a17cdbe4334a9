"""
HTTP transport for the Open-Meteo APIs

Thin wrapper over httpx that turns every way a GET can go wrong into one
of the client's exceptions.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .exceptions import MalformedResponseError, OpenMeteoNetworkError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 10.0


class OpenMeteoHttpClient:
    """
    Async JSON-over-HTTP GET client

    Creates a new HTTP session for each request to support proper concurrent
    requests. Every request carries ``requestTimeout``; a timeout surfaces as
    OpenMeteoNetworkError like any other transport failure. No retries.

    Example:
        >>> client = OpenMeteoHttpClient(requestTimeout=10)
        >>> data = await client.getJson(
        ...     "https://geocoding-api.open-meteo.com/v1/search",
        ...     {"name": "London", "count": 1, "format": "json"},
        ... )
    """

    def __init__(
        self,
        requestTimeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client

        Args:
            requestTimeout: Per-request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.requestTimeout = requestTimeout
        self._transport = transport

    async def getJson(self, url: str, params: Dict[str, Any]) -> Any:
        """
        Issue GET request and parse JSON body

        Non-2xx responses with a JSON body are returned as-is, so callers can
        classify them by content (the geocoder reports them as not found, the
        forecast fetcher as malformed).

        Args:
            url: Endpoint URL
            params: Query parameters

        Returns:
            Parsed JSON body

        Raises:
            OpenMeteoNetworkError: On connection failure, timeout, or non-2xx
                response without a JSON body
            MalformedResponseError: On a 2xx response whose body isn't JSON
        """
        logger.debug(f"Making request to {url} with params: {params}")
        try:
            async with httpx.AsyncClient(timeout=self.requestTimeout, transport=self._transport) as session:
                response = await session.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"Request timeout for {url}: {e}")
            raise OpenMeteoNetworkError(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error for {url}: {e}")
            raise OpenMeteoNetworkError(f"Request to {url} failed: {e}") from e

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if response.is_success:
                logger.error(f"Failed to parse JSON response from {url}: {e}")
                raise MalformedResponseError(f"Response from {url} is not valid JSON") from e
            logger.error(f"API request failed: {response.status_code}")
            raise OpenMeteoNetworkError(f"HTTP {response.status_code} from {url}") from e

        if not response.is_success:
            logger.warning(f"API request returned {response.status_code}: {data}")
        else:
            logger.debug(f"API request successful: {response.status_code}")
        return data
