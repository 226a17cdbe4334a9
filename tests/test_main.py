"""
Tests for the command line entry point.
"""

import json
from unittest.mock import patch

import pytest

import main
from internal.config.manager import ConfigManager
from internal.services.weather import buildWeatherService


@pytest.fixture
def configPath(tempDir):
    path = tempDir / "config.toml"
    path.write_text(
        """
[weather]
default-city = "London"
default-unit = "celsius"

[cache]
backend = "memory"
""",
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def goldenServiceBuilder(goldenDataProvider):
    """Patch service wiring so CLI commands hit golden data instead of the network."""
    transport = goldenDataProvider.makeTransport()

    def builder(configManager: ConfigManager, **kwargs):
        return buildWeatherService(configManager, transport=transport)

    with patch("main.buildWeatherService", side_effect=builder):
        yield transport


def runMain(argv) -> int:
    with pytest.raises(SystemExit) as excInfo:
        main.main(argv)
    return excInfo.value.code


class TestParseArguments:

    def testQueryArguments(self):
        args = main.parse_arguments(["-c", "my.toml", "query", "Paris", "--unit", "fahrenheit"])

        assert args.command == "query"
        assert args.city == "Paris"
        assert args.unit == "fahrenheit"
        assert args.config.endswith("my.toml")

    def testJanitorIntervalAcceptsDurations(self):
        assert main.parse_arguments(["janitor", "--interval", "10m"]).interval == 600
        assert main.parse_arguments(["janitor"]).interval is None

    @pytest.mark.parametrize("interval", ["0", "0s", "0:00", "soon"])
    def testJanitorIntervalMustBePositive(self, interval):
        with pytest.raises(SystemExit) as excInfo:
            main.parse_arguments(["janitor", "--interval", interval])

        assert excInfo.value.code == 2

    def testCommandIsRequired(self):
        with pytest.raises(SystemExit):
            main.parse_arguments([])

    def testUnknownUnitIsRejected(self):
        with pytest.raises(SystemExit):
            main.parse_arguments(["query", "London", "--unit", "kelvin"])


class TestCommands:

    def testQueryPrintsJson(self, configPath, goldenServiceBuilder, capsys):
        assert runMain(["-c", configPath, "query", "London"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["ok"] is True
        assert output["resolvedName"] == "London"
        assert output["unit"] == "celsius"
        assert output["conditions"]["temperature"] == 9.8
        assert output["display"] == {
            "temperature": "10°C",
            "description": "Overcast",
            "icon": "⛅",
            "wind": "18 km/h SW",
        }

    def testQueryUsesDefaultCity(self, configPath, goldenServiceBuilder, capsys):
        assert runMain(["-c", configPath, "query", "--unit", "fahrenheit"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["conditions"]["temperature"] == 49.6
        assert output["display"]["temperature"] == "50°F"

    def testQueryFailureExitCode(self, configPath, goldenServiceBuilder, capsys):
        assert runMain(["-c", configPath, "query", "Nowhereville"]) == 1

        assert json.loads(capsys.readouterr().out) == {"ok": False, "failure": "not-found"}

    def testTestApi(self, configPath, goldenServiceBuilder, capsys):
        assert runMain(["-c", configPath, "test-api"]) == 0

        assert "API connection successful! London" in capsys.readouterr().out

    def testFlushCommands(self, configPath, goldenServiceBuilder, capsys):
        assert runMain(["-c", configPath, "flush-cache"]) == 0
        assert "Removed 0 cache entries" in capsys.readouterr().out

        assert runMain(["-c", configPath, "flush-expired"]) == 0
        assert "Removed 0 expired cache entries" in capsys.readouterr().out

    def testPrintConfig(self, configPath, capsys):
        assert runMain(["-c", configPath, "--print-config"]) == 0

        output = capsys.readouterr().out
        assert '"default-city": "London"' in output
        assert '"cache-ttl": 3600' in output

    def testConfigErrorExitCode(self, tempDir):
        path = tempDir / "broken.toml"
        path.write_text("[cache]\nbackend = 'redis'\n", encoding="utf-8")

        assert runMain(["-c", str(path), "flush-cache"]) == 2
