# src/day_planner/connectors/background.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass

from ..core.ports import WeatherProvider
from ..core.state import AppState
from ..planner.timers import run_clock_ticker, run_weather_refresher

logger = logging.getLogger(__name__)


async def _run_timers(
    state: AppState,
    provider: WeatherProvider,
    stop_event: asyncio.Event,
    weather_wake: asyncio.Event,
) -> None:
    settings = state.settings
    clock = asyncio.create_task(
        run_clock_ticker(state, interval_seconds=settings.clock_interval_seconds),
        name="clock-ticker",
    )
    weather = asyncio.create_task(
        run_weather_refresher(
            state,
            provider,
            interval_seconds=settings.weather_interval_seconds,
            wake=weather_wake,
        ),
        name="weather-refresher",
    )

    try:
        await stop_event.wait()
    finally:
        for t in (clock, weather):
            t.cancel()
        await asyncio.gather(clock, weather, return_exceptions=True)

        aclose = getattr(provider, "aclose", None)
        if aclose is not None:
            try:
                await aclose()
            except Exception:
                logger.debug("Weather provider close failed.", exc_info=True)


@dataclass(slots=True)
class PlannerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event
    weather_wake: asyncio.Event

    def request_weather_refresh(self) -> None:
        """Thread-safe: wake the weather loop (e.g. after settings were saved)."""
        try:
            self.loop.call_soon_threadsafe(self.weather_wake.set)
        except Exception:
            logger.debug("Failed to request weather refresh.", exc_info=True)

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal timers stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


def start_timers_in_background(state: AppState, provider: WeatherProvider) -> PlannerBackgroundRunner | None:
    """
    Run the clock and weather timers on their own event loop in a daemon thread.

    The console REPL blocks on input(), so the timers cannot share its thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()
        weather_wake = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        holder["weather_wake"] = weather_wake
        ready.set()

        try:
            loop.run_until_complete(_run_timers(state, provider, stop_event, weather_wake))
        finally:
            with contextlib.suppress(Exception):
                loop.stop()
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, daemon=True, name="planner-timers")
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")
    weather_wake = holder.get("weather_wake")

    if (
        not isinstance(loop, asyncio.AbstractEventLoop)
        or not isinstance(stop_event, asyncio.Event)
        or not isinstance(weather_wake, asyncio.Event)
    ):
        logger.error("Timer thread did not initialize properly.")
        return None

    logger.info("Planner timers started (clock=%ss weather=%ss).",
                state.settings.clock_interval_seconds, state.settings.weather_interval_seconds)
    return PlannerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event, weather_wake=weather_wake)
