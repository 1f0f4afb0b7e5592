# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from day_planner.planner.models import Notification
from day_planner.weather.client import LocationNotFoundError, WeatherReport


class FakeClock:
    """Settable wall clock for the controller."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@dataclass(slots=True)
class NotificationRecorder:
    """Notifier that keeps every notification for assertions."""

    items: list[Notification] = field(default_factory=list)

    def __call__(self, note: Notification) -> None:
        self.items.append(note)

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.items]


class FakeWeatherProvider:
    """
    Deterministic WeatherProvider.

    - Known locations return a fixed report
    - Anything else raises LocationNotFoundError
    - Captures every lookup for assertions
    """

    def __init__(self, reports: dict[str, WeatherReport] | None = None) -> None:
        self.reports = reports or {}
        self.calls: list[str] = []

    async def fetch(self, location: str) -> WeatherReport:
        self.calls.append(location)
        report = self.reports.get(location)
        if report is None:
            raise LocationNotFoundError(location)
        return report
