# src/day_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The planner depends on Protocols instead of concrete implementations.
This keeps storage and the weather provider swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..planner.models import Notification
    from ..weather.client import WeatherReport


Notifier = Callable[["Notification"], None]


class KeyValueRepo(Protocol):
    """String-keyed local storage (localStorage-like)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class WeatherProvider(Protocol):
    """Resolves a free-text location to current conditions."""

    async def fetch(self, location: str) -> "WeatherReport": ...
