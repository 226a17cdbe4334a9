"""
Periodic removal of expired weather cache entries.
"""

import asyncio
import logging
from typing import Optional

from .service import WeatherQueryService

logger = logging.getLogger(__name__)


class CacheJanitor:
    """
    Runs ``flushExpired()`` every ``intervalSeconds`` on the event loop, dood!

    Stores with lazy expiry (DictStore, SQLite) never return expired entries,
    but keep them around until swept. The janitor does the sweeping.

    Example:
        >>> janitor = CacheJanitor(service, intervalSeconds=3600)
        >>> janitor.start()
        >>> ...
        >>> await janitor.stop()
    """

    def __init__(self, service: WeatherQueryService, intervalSeconds: float):
        if intervalSeconds <= 0:
            raise ValueError(f"intervalSeconds must be positive, got {intervalSeconds}")
        self.service = service
        self.intervalSeconds = intervalSeconds
        self._task: Optional[asyncio.Task] = None

    @property
    def isRunning(self) -> bool:
        return self._task is not None and not self._task.done()

    async def runOnce(self) -> int:
        """Sweep expired entries once, returns number of removed entries"""
        removed = await self.service.flushExpired()
        logger.debug(f"Janitor removed {removed} expired entries")
        return removed

    async def run(self) -> None:
        """Sweep forever (until cancelled), errors of a single sweep are logged"""
        logger.info(f"Cache janitor started, interval: {self.intervalSeconds}s")
        while True:
            await asyncio.sleep(self.intervalSeconds)
            try:
                await self.runOnce()
            except Exception as e:
                logger.error(f"Error in cache janitor: {e}")
                logger.exception(e)

    def start(self) -> None:
        """Start sweeping in a background task of the running loop"""
        if self.isRunning:
            logger.warning("Cache janitor is already running")
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel background sweeping and wait for it to finish"""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Cache janitor stopped")
