# src/day_planner/weather/client.py

"""Open-Meteo weather client.

Two sequential, read-only lookups:
- geocoding: free-text location -> first matching place (lat/lon/name)
- forecast: lat/lon -> current temperature (°F), WMO weather code, wind (mph)

Both services are outside our control and treated as best-effort: this module
raises WeatherError subclasses and leaves recovery (showing "unavailable") to
the caller. No retries here; the next attempt is the next scheduled refresh.

Example:
    >>> async with OpenMeteoClient() as client:
    ...     report = await client.fetch("Berlin")
    >>> print(report.summary())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ..config import DEFAULT_FORECAST_URL, DEFAULT_GEOCODING_URL
from ..core.rounding import round_half_up
from .codes import WeatherIcon, weather_description, weather_icon

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


# =============================================================================
# Exceptions
# =============================================================================


class WeatherError(Exception):
    """Base exception for weather lookups."""


class LocationNotFoundError(WeatherError):
    """Geocoding returned no match for the location name.

    Attributes:
        location: The free-text location that was looked up.
    """

    def __init__(self, location: str) -> None:
        super().__init__(f"Location not found: {location!r}")
        self.location = location


class WeatherFetchError(WeatherError):
    """Network failure, non-2xx response, or a payload we could not read.

    Attributes:
        url: The endpoint that failed.
        status_code: HTTP status code if a response was received.
    """

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"url={self.url}")
        if self.status_code:
            parts.append(f"status={self.status_code}")
        return " ".join(parts)


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class GeoLocation:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class WeatherReport:
    """Current conditions for a resolved location."""

    location: str
    temperature_f: float
    weather_code: int
    wind_mph: float

    @property
    def icon(self) -> WeatherIcon:
        return weather_icon(self.weather_code)

    @property
    def description(self) -> str:
        return weather_description(self.weather_code)

    def summary(self) -> str:
        return (
            f"{self.icon.glyph} {round_half_up(self.temperature_f)}°F {self.description}"
            f" · {self.location} · wind {round_half_up(self.wind_mph)} mph"
        )


# =============================================================================
# Client
# =============================================================================


class OpenMeteoClient:
    """HTTP client for the Open-Meteo geocoding and forecast APIs.

    Args:
        geocoding_url: Geocoding search endpoint.
        forecast_url: Forecast endpoint.
        timeout: Request timeout in seconds.
        http_client: Optional pre-built httpx.AsyncClient (tests inject one
            with a MockTransport). When omitted, the client owns one.
    """

    def __init__(
        self,
        *,
        geocoding_url: str = DEFAULT_GEOCODING_URL,
        forecast_url: str = DEFAULT_FORECAST_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Any) -> OpenMeteoClient:
        return cls(
            geocoding_url=settings.geocoding_url,
            forecast_url=settings.forecast_url,
            timeout=settings.weather_timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> OpenMeteoClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as e:
            raise WeatherFetchError(f"Request failed: {e.__class__.__name__}", url=url) from e

        if response.status_code >= 400:
            raise WeatherFetchError("Unexpected response", url=url, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise WeatherFetchError("Response is not JSON", url=url, status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise WeatherFetchError("Response is not a JSON object", url=url, status_code=response.status_code)
        return data

    async def geocode(self, location: str) -> GeoLocation:
        """Resolve a location name to the first geocoding match."""
        name = (location or "").strip()
        if not name:
            raise LocationNotFoundError(location)

        data = await self._get_json(
            self.geocoding_url,
            {"name": name, "count": 1, "language": "en", "format": "json"},
        )
        results = data.get("results")
        if not isinstance(results, list) or not results:
            raise LocationNotFoundError(name)

        first = results[0]
        try:
            return GeoLocation(
                name=str(first.get("name") or name),
                latitude=float(first["latitude"]),
                longitude=float(first["longitude"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise WeatherFetchError("Malformed geocoding result", url=self.geocoding_url) from e

    async def current(self, place: GeoLocation) -> WeatherReport:
        """Fetch current conditions for a resolved place."""
        data = await self._get_json(
            self.forecast_url,
            {
                "latitude": place.latitude,
                "longitude": place.longitude,
                "current": "temperature_2m,weather_code,wind_speed_10m",
                "temperature_unit": "fahrenheit",
                "wind_speed_unit": "mph",
                "timezone": "auto",
            },
        )
        current = data.get("current")
        try:
            return WeatherReport(
                location=place.name,
                temperature_f=float(current["temperature_2m"]),
                weather_code=int(current["weather_code"]),
                wind_mph=float(current["wind_speed_10m"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherFetchError("Malformed forecast payload", url=self.forecast_url) from e

    async def fetch(self, location: str) -> WeatherReport:
        place = await self.geocode(location)
        logger.debug("Geocoded %r -> %s (%.4f, %.4f)", location, place.name, place.latitude, place.longitude)
        return await self.current(place)


class OfflineWeatherProvider:
    """Provider used when weather is disabled in configuration: always unavailable."""

    async def fetch(self, location: str) -> WeatherReport:
        raise WeatherFetchError("Weather is disabled (DAYPLANNER_WEATHER_ENABLED=false)")

    async def aclose(self) -> None:
        return
