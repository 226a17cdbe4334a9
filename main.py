"""
Meteocache - current weather lookups for place names, cached, via Open-Meteo.
Command line entry point.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from internal.config.models import ConfigError
from internal.services.weather import (
    CONNECTION_TEST_CITY,
    WeatherQueryResult,
    WeatherQueryService,
    buildCacheJanitor,
    buildWeatherService,
)
from lib.logging_utils import initLogging
from lib.open_meteo import (
    TemperatureUnit,
    getTemperatureSymbol,
    getWeatherDescription,
    getWeatherIcon,
    getWindDirection,
)

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def parseInterval(value: str) -> int:
    """argparse type for sweep intervals: a parseDelay duration above zero"""
    try:
        seconds = utils.parseDelay(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"interval must be positive, got {value!r}")
    return seconds


def formatResult(result: WeatherQueryResult, unit: TemperatureUnit) -> Dict[str, Any]:
    """Result as JSON-ready dict, with human readable extras for successful queries"""
    ret = result.toDict()
    if result.conditions is not None:
        conditions = result.conditions
        ret["unit"] = str(unit)
        ret["display"] = {
            "temperature": f"{round(conditions.temperature)}{getTemperatureSymbol(unit)}",
            "description": getWeatherDescription(conditions.weatherCode),
            "icon": getWeatherIcon(conditions.weatherCode),
            "wind": f"{round(conditions.windSpeedKph)} km/h {getWindDirection(conditions.windDirectionDeg)}",
        }
    return ret


class MeteocacheApp:
    """Wires configuration, logging and the weather service for CLI commands."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)
        initLogging(self.configManager.getLoggingConfig())
        self.weatherConfig = self.configManager.getWeatherConfig()
        self.service: WeatherQueryService = buildWeatherService(self.configManager)

    async def query(self, city: Optional[str], unit: Optional[str]) -> int:
        placeName = self.weatherConfig.defaultCity if city is None else city
        temperatureUnit = self.weatherConfig.defaultUnit if unit is None else TemperatureUnit(unit)

        result = await self.service.query(placeName, temperatureUnit)
        print(utils.jsonDumps(formatResult(result, temperatureUnit), indent=2))
        return 0 if result.ok else 1

    async def flushCache(self) -> int:
        removed = await self.service.flushCache()
        print(f"Removed {removed} cache entries")
        return 0

    async def flushExpired(self) -> int:
        removed = await self.service.flushExpired()
        print(f"Removed {removed} expired cache entries")
        return 0

    async def testApi(self, city: str) -> int:
        result = await self.service.testConnection(city)
        if result.conditions is not None:
            print(
                f"API connection successful! {result.resolvedName}: "
                f"{result.conditions.temperature}°C, {getWeatherDescription(result.conditions.weatherCode)}"
            )
            return 0
        print(f"API connection failed: {result.failure}")
        return 1

    async def runJanitor(self, interval: Optional[int]) -> int:
        janitor = buildCacheJanitor(self.configManager, self.service, intervalSeconds=interval)
        await janitor.runOnce()
        await janitor.run()
        return 0


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Meteocache - cached current weather from Open-Meteo, dood!",
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    queryParser = subparsers.add_parser("query", help="Get current weather for a place name")
    queryParser.add_argument("city", nargs="?", help="Place name (default: weather.default-city)")
    queryParser.add_argument(
        "--unit",
        choices=[str(unit) for unit in TemperatureUnit],
        help="Temperature unit (default: weather.default-unit)",
    )

    subparsers.add_parser("flush-cache", help="Remove all cached weather entries")
    subparsers.add_parser("flush-expired", help="Remove expired cache entries")

    testParser = subparsers.add_parser("test-api", help="Check connection to Open-Meteo (bypasses cache)")
    testParser.add_argument("--city", default=CONNECTION_TEST_CITY, help="Place name to look up (default: London)")

    janitorParser = subparsers.add_parser("janitor", help="Periodically remove expired cache entries")
    janitorParser.add_argument(
        "--interval",
        type=parseInterval,
        help="Sweep interval, e.g. 600, 10m or 1h (default: cache.janitor-interval)",
    )

    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    if args.command is None and not args.print_config:
        parser.error("a command is required (query, flush-cache, flush-expired, test-api, janitor)")

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration, dood!"""
    print("=== Meteocache Configuration ===")
    print()
    try:
        print(json.dumps(configManager.config, indent=2, ensure_ascii=False, sort_keys=True))
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not serialize config as JSON: {e}")
        for key, value in sorted(configManager.config.items()):
            print(f"{key}: {value}")
    print()
    print("=== Effective weather settings ===")
    print(utils.jsonDumps(configManager.getWeatherConfig().toDict(), indent=2))


async def runCommand(app: MeteocacheApp, args) -> int:
    match args.command:
        case "query":
            return await app.query(args.city, args.unit)
        case "flush-cache":
            return await app.flushCache()
        case "flush-expired":
            return await app.flushExpired()
        case "test-api":
            return await app.testApi(args.city)
        case "janitor":
            return await app.runJanitor(args.interval)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            sys.exit(0)

        app = MeteocacheApp(configPath=args.config, configDirs=args.config_dir)
        sys.exit(asyncio.run(runCommand(app, args)))
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
