"""
Tests for CacheJanitor
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from internal.services.weather import CacheJanitor, WeatherQueryService
from lib.open_meteo import TemperatureUnit


@pytest.fixture
def mockService():
    service = AsyncMock(spec=WeatherQueryService)
    service.flushExpired.return_value = 3
    return service


class TestCacheJanitor:

    def testRejectsNonPositiveInterval(self, mockService):
        with pytest.raises(ValueError):
            CacheJanitor(mockService, intervalSeconds=0)

    @pytest.mark.asyncio
    async def testRunOnce(self, mockService):
        janitor = CacheJanitor(mockService, intervalSeconds=60)

        assert await janitor.runOnce() == 3
        mockService.flushExpired.assert_awaited_once()

    @pytest.mark.asyncio
    async def testPeriodicSweep(self, mockService):
        janitor = CacheJanitor(mockService, intervalSeconds=0.01)

        janitor.start()
        assert janitor.isRunning
        await asyncio.sleep(0.1)
        await janitor.stop()

        assert not janitor.isRunning
        assert mockService.flushExpired.await_count >= 2

    @pytest.mark.asyncio
    async def testStopHaltsSweeping(self, mockService):
        janitor = CacheJanitor(mockService, intervalSeconds=0.01)
        janitor.start()
        await asyncio.sleep(0.05)
        await janitor.stop()
        sweeps = mockService.flushExpired.await_count

        await asyncio.sleep(0.05)

        assert mockService.flushExpired.await_count == sweeps

    @pytest.mark.asyncio
    async def testSweepErrorDoesNotStopJanitor(self, mockService):
        mockService.flushExpired.side_effect = [RuntimeError("boom"), 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1]
        janitor = CacheJanitor(mockService, intervalSeconds=0.01)

        janitor.start()
        await asyncio.sleep(0.05)
        assert janitor.isRunning
        await janitor.stop()

        assert mockService.flushExpired.await_count >= 2

    @pytest.mark.asyncio
    async def testStartTwiceKeepsOneTask(self, mockService):
        janitor = CacheJanitor(mockService, intervalSeconds=60)

        janitor.start()
        task = janitor._task
        janitor.start()

        assert janitor._task is task
        await janitor.stop()

    @pytest.mark.asyncio
    async def testStopWithoutStart(self, mockService):
        await CacheJanitor(mockService, intervalSeconds=60).stop()

    @pytest.mark.asyncio
    async def testSweepsRealCache(self, weatherService, dictStore, fakeClock):
        await weatherService.query("London", TemperatureUnit.CELSIUS)
        fakeClock.advance(3600)
        janitor = CacheJanitor(weatherService, intervalSeconds=60)

        assert await janitor.runOnce() == 1
        assert dictStore.getStats()["entries"] == 0
