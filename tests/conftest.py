# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from day_planner.cli.bootstrap import create_initial_state
from day_planner.core.state import AppState
from day_planner.planner.controller import PlannerController
from day_planner.planner.store import KeyValueStore, PlannerStore

from .fakes import FakeClock, NotificationRecorder

# Monday morning; most tests place tasks around 10:00.
FIXED_NOW = datetime(2026, 10, 19, 10, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the timers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="day-planner-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "planner.sqlite3",
        export_dir=tmp_path / "exports",
        weather_enabled=False,
        geocoding_url="https://geo.test/v1/search",
        forecast_url="https://wx.test/v1/forecast",
        weather_timeout_seconds=1.0,
        default_location="New York",
        clock_interval_seconds=60.0,
        weather_interval_seconds=1800.0,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture()
def notifications() -> NotificationRecorder:
    return NotificationRecorder()


@pytest.fixture()
def kv(settings: SimpleNamespace) -> KeyValueStore:
    return KeyValueStore(settings.db_path)


@pytest.fixture()
def store(kv: KeyValueStore) -> PlannerStore:
    return PlannerStore(kv)


@pytest.fixture()
def planner(store: PlannerStore, clock: FakeClock, notifications: NotificationRecorder) -> PlannerController:
    """
    Controller on a real SQLite store: persistence is part of what we test.
    """
    return PlannerController(store, clock=clock, notify=notifications)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock, notifications: NotificationRecorder) -> AppState:
    return create_initial_state(settings=settings, notify=notifications, clock=clock)
