# src/day_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value store, planner controller and weather provider into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier, WeatherProvider
from ..core.state import AppState
from ..planner.controller import Clock, PlannerController
from ..planner.models import PlannerSettings
from ..planner.store import KeyValueStore, PlannerStore
from ..weather.client import OfflineWeatherProvider, OpenMeteoClient

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.export_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    notify: Notifier | None = None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = PlannerStore(
        KeyValueStore(settings.db_path),
        default_settings=PlannerSettings(location=settings.default_location),
    )
    planner = PlannerController(store, clock=clock, notify=notify)

    state = AppState(settings=settings, planner=planner)
    planner.on_settings_saved = lambda _saved: state.request_weather_refresh()
    return state


def create_weather_provider(settings) -> WeatherProvider:
    if not getattr(settings, "weather_enabled", True):
        logger.info("Weather disabled; using offline provider.")
        return OfflineWeatherProvider()
    return OpenMeteoClient.from_settings(settings)
