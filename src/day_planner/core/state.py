# src/day_planner/core/state.py

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..planner.controller import PlannerController
from ..weather.client import WeatherReport

WEATHER_UNAVAILABLE = "Weather unavailable"


@dataclass
class AppState:
    """
    The single owned application state.

    Built once by cli/bootstrap.py and passed explicitly to the console
    connector, the command handlers and the timers. Anything that reads or
    mutates `planner` or the weather fields must hold `lock`: the console runs
    in the main thread, the timers in a background event loop.
    """

    settings: Any
    planner: PlannerController

    weather: WeatherReport | None = None
    weather_error: str | None = None

    date_text: str = ""
    time_text: str = ""

    lock: threading.RLock = field(default_factory=threading.RLock)

    # Set by the CLI once the timer thread is running.
    weather_refresh_hook: Callable[[], None] | None = None

    def request_weather_refresh(self) -> None:
        if self.weather_refresh_hook is not None:
            self.weather_refresh_hook()

    def weather_text(self) -> str:
        if self.weather is None:
            return WEATHER_UNAVAILABLE if self.weather_error else "Loading weather..."
        return self.weather.summary()
