"""
Lookup helpers for presenting CurrentConditions

WMO weather interpretation codes as used by Open-Meteo:
https://open-meteo.com/en/docs#weathervariables
"""

from typing import Dict

from .models import TemperatureUnit

WEATHER_DESCRIPTIONS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

DEFAULT_ICON = "🌡️"


def getWeatherDescription(code: int) -> str:
    """Human readable description of a WMO code, "Unknown" for unmapped codes"""
    return WEATHER_DESCRIPTIONS.get(code, "Unknown")


def getWeatherIcon(code: int) -> str:
    """Emoji icon for a WMO code"""
    if code in (0, 1):
        return "☀️"
    elif code in (2, 3):
        return "⛅"
    elif 45 <= code <= 48:
        return "🌫️"
    elif 51 <= code <= 65:
        return "🌧️"
    elif 71 <= code <= 77:
        return "❄️"
    elif 80 <= code <= 82:
        return "🌦️"
    elif 85 <= code <= 86:
        return "🌨️"
    elif 95 <= code <= 99:
        return "⛈️"
    return DEFAULT_ICON


def getWindDirection(degrees: float) -> str:
    """8-point compass direction for wind bearing in degrees"""
    # int(x + 0.5) rounds halves up like PHP round() for the non-negative bearings we get
    index = int(degrees / 45 + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def getTemperatureSymbol(unit: TemperatureUnit) -> str:
    return "°C" if unit == TemperatureUnit.CELSIUS else "°F"
