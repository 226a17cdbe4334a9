"""
Configuration management for the weather service.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from lib.open_meteo import DEFAULT_REQUEST_TIMEOUT

from .models import DEFAULT_JANITOR_INTERVAL, CacheBackend, ConfigError, WeatherConfig

logger = logging.getLogger(__name__)


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholders with actual values.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in strings, dicts and lists.

    Values of other types are returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Loads TOML configuration and hands out per-section settings, dood!"""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories.

        Raises:
            ConfigError: If the main config file exists but can't be parsed.
        """
        self.config_path = configPath
        self.config_dirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())
        self._weatherConfig: Optional[WeatherConfig] = None

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        tomlFiles: List[Path] = []
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping, dood!")
            return tomlFiles

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping")
            return tomlFiles

        for tomlFile in dirPath.rglob("*.toml"):
            if tomlFile.is_file():
                tomlFiles.append(tomlFile)
                logger.debug(f"Found config file: {tomlFile}")

        return sorted(tomlFiles)  # Sort for consistent ordering

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, dood!"""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        The main file is read first, then every ``*.toml`` found in the config
        directories is merged on top in sorted order. A missing main file is
        not an error: built-in defaults apply to everything not configured.
        Broken files in config directories are logged and skipped.
        """
        config: Dict[str, Any] = {}
        configFile = Path(self.config_path)

        if configFile.exists():
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration from {self.config_path}: {e}")
                raise ConfigError(f"Can't load {self.config_path}: {e}") from e
            logger.info(f"Loaded main config from {self.config_path}")
        else:
            logger.warning(f"Configuration file {self.config_path} not found, using defaults")

        if self.config_dirs:
            logger.info(f"Scanning {len(self.config_dirs)} config directories for .toml files")

            for configDir in self.config_dirs:
                tomlFiles = self._findTomlFilesRecursive(configDir)
                logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

                for tomlFile in tomlFiles:
                    try:
                        with open(tomlFile, "rb") as f:
                            dirConfig = tomli.load(f)
                    except (OSError, tomli.TOMLDecodeError) as e:
                        logger.error(f"Failed to load config file {tomlFile}: {e}")
                        # Continue with other files
                        continue

                    config = self._mergeConfigs(config, dirConfig)
                    logger.info(f"Merged config from {tomlFile}")

        logger.info("Configuration loaded, dood!")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def _getSection(self, key: str) -> Dict[str, Any]:
        section = self.get(key, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{key}] must be a table, got {type(section).__name__}")
        return section

    def getWeatherConfig(self) -> WeatherConfig:
        """
        Get sanitised weather settings

        Returns:
            WeatherConfig built from the ``[weather]`` section (cached after
            the first call)
        """
        if self._weatherConfig is None:
            self._weatherConfig = WeatherConfig.fromDict(self._getSection("weather"))
        return self._weatherConfig

    def getOpenMeteoConfig(self) -> Dict[str, Any]:
        """
        Get Open-Meteo client configuration

        Returns:
            Dict with ``geocoding-url``, ``forecast-url`` (None means the public
            endpoint) and ``request-timeout`` in seconds

        Raises:
            ConfigError: If request-timeout isn't a positive number
        """
        section = self._getSection("open-meteo")
        timeout = section.get("request-timeout", DEFAULT_REQUEST_TIMEOUT)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"open-meteo.request-timeout must be a positive number, got {timeout!r}")

        return {
            "geocoding-url": section.get("geocoding-url") or None,
            "forecast-url": section.get("forecast-url") or None,
            "request-timeout": float(timeout),
        }

    def getCacheConfig(self) -> Dict[str, Any]:
        """
        Get cache storage configuration.

        Returns a dictionary with the following structure:
        - backend: CacheBackend ("memory", "sqlite" or "null")
        - path: SQLite database path (sqlite backend only)
        - namespace: Key prefix shared by all weather entries
        - max-size: Entry limit for the memory backend (None for unlimited)
        - janitor-interval: Seconds between expired-entry sweeps

        Example:
            [cache]
            backend = "sqlite"
            path = "weather.db"
            janitor-interval = 600

        Raises:
            ConfigError: On unknown backend or non-positive sizes/intervals
        """
        section = self._getSection("cache")

        backendStr = section.get("backend", CacheBackend.MEMORY)
        try:
            backend = CacheBackend(backendStr)
        except ValueError as e:
            raise ConfigError(f"Unknown cache backend {backendStr!r}") from e

        maxSize = section.get("max-size", 1000)
        if maxSize is not None and (not isinstance(maxSize, int) or maxSize <= 0):
            raise ConfigError(f"cache.max-size must be a positive integer, got {maxSize!r}")

        janitorInterval = section.get("janitor-interval", DEFAULT_JANITOR_INTERVAL)
        if isinstance(janitorInterval, str):
            try:
                janitorInterval = utils.parseDelay(janitorInterval)
            except ValueError as e:
                raise ConfigError(f"cache.janitor-interval: {e}") from e
        if isinstance(janitorInterval, bool) or not isinstance(janitorInterval, int) or janitorInterval <= 0:
            raise ConfigError(f"cache.janitor-interval must be positive, got {janitorInterval!r}")

        return {
            "backend": backend,
            "path": str(section.get("path", "weather_cache.db")),
            "namespace": str(section.get("namespace", "yt_weather_")),
            "max-size": maxSize,
            "janitor-interval": janitorInterval,
        }

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})
