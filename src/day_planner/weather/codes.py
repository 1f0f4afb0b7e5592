# src/day_planner/weather/codes.py

"""WMO weather interpretation codes (as returned by Open-Meteo) -> icon + label."""

from __future__ import annotations

from enum import StrEnum


class WeatherIcon(StrEnum):
    SUN = "sun"
    CLOUD_SUN = "cloud-sun"
    CLOUD = "cloud"
    RAIN = "cloud-rain"
    SNOW = "snowflake"
    BOLT = "bolt"
    UNKNOWN = "question"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_GLYPHS = {
    WeatherIcon.SUN: "☀️",
    WeatherIcon.CLOUD_SUN: "⛅",
    WeatherIcon.CLOUD: "☁️",
    WeatherIcon.RAIN: "🌧️",
    WeatherIcon.SNOW: "❄️",
    WeatherIcon.BOLT: "⚡",
    WeatherIcon.UNKNOWN: "❓",
}

_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Foggy",
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
    80: "Slight showers",
    81: "Moderate showers",
    82: "Violent showers",
    85: "Light snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Thunderstorm with hail",
}


def weather_icon(code: int) -> WeatherIcon:
    if code == 0:
        return WeatherIcon.SUN
    if code in (1, 2):
        return WeatherIcon.CLOUD_SUN
    # Both fog codes render as cloud.
    if code in (3, 45, 48):
        return WeatherIcon.CLOUD
    if code in (51, 53, 55, 61, 63, 65) or 80 <= code <= 82:
        return WeatherIcon.RAIN
    if code in (71, 73, 75, 77) or 85 <= code <= 86:
        return WeatherIcon.SNOW
    if code in (95, 96, 99):
        return WeatherIcon.BOLT
    return WeatherIcon.UNKNOWN


def weather_description(code: int) -> str:
    return _DESCRIPTIONS.get(code, "Unknown")
