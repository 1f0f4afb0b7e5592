# src/day_planner/planner/timers.py

from __future__ import annotations

"""
Recurring planner timers.

Two independent polling loops on the same event loop:
- clock tick: refreshes the date/time header and re-derives the schedule so
  past/present/future transitions show up without user input,
- weather refresh: fetches conditions for the configured location now, then
  every interval, or early when woken (settings saved).

Failures inside a tick are logged and the loop keeps going.
To stop a loop, cancel the coroutine/task.
"""

import asyncio
import logging
from datetime import datetime

from ..core.ports import WeatherProvider
from ..core.state import AppState

logger = logging.getLogger(__name__)


def format_clock(now: datetime) -> tuple[str, str]:
    """("Monday, October 19, 2026", "3:05 PM")"""
    date_text = f"{now:%A}, {now:%B} {now.day}, {now.year}"
    hour12 = now.hour % 12 or 12
    time_text = f"{hour12}:{now:%M} {'AM' if now.hour < 12 else 'PM'}"
    return date_text, time_text


def tick_clock(state: AppState) -> None:
    with state.lock:
        now = state.planner.now()
        state.date_text, state.time_text = format_clock(now)
        views = state.planner.render()
    logger.debug("Clock tick %s %s (%d blocks)", state.date_text, state.time_text, len(views))


async def refresh_weather(state: AppState, provider: WeatherProvider) -> bool:
    """
    One weather lookup for the current location.

    Never raises: any failure (network, bad payload, unknown location) is logged
    and the display falls back to "unavailable". Whatever response arrives last
    is what gets shown.
    """
    with state.lock:
        location = state.planner.settings.location

    try:
        report = await provider.fetch(location)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.warning("Weather fetch error for %r: %s", location, e)
        logger.debug("Weather fetch traceback", exc_info=True)
        with state.lock:
            state.weather = None
            state.weather_error = str(e) or e.__class__.__name__
        return False

    with state.lock:
        state.weather = report
        state.weather_error = None
    logger.info("Weather updated: %s", report.summary())
    return True


async def run_clock_ticker(state: AppState, *, interval_seconds: float = 60.0) -> None:
    sleep_s = max(0.5, float(interval_seconds))

    while True:
        try:
            tick_clock(state)
        except Exception:
            logger.exception("clock tick failed")
        await asyncio.sleep(sleep_s)


async def run_weather_refresher(
        state: AppState,
        provider: WeatherProvider,
        *,
        interval_seconds: float = 30 * 60.0,
        wake: asyncio.Event | None = None,
) -> None:
    """
    Refresh immediately, then every interval_seconds or as soon as `wake` is set.
    """
    sleep_s = max(1.0, float(interval_seconds))
    wake = wake or asyncio.Event()

    while True:
        await refresh_weather(state, provider)

        try:
            await asyncio.wait_for(wake.wait(), timeout=sleep_s)
            logger.debug("Weather refresh requested early")
        except asyncio.TimeoutError:
            pass
        wake.clear()
