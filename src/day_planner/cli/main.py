# src/day_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the clock/weather timers in a
background thread, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.background import start_timers_in_background
from ..connectors.console_connector import print_notification, run_console_loop
from ..logging_setup import setup_logging
from ..planner.timers import tick_clock
from .bootstrap import create_initial_state, create_weather_provider

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings, notify=print_notification)
    tick_clock(state)

    runner = start_timers_in_background(state, create_weather_provider(settings))
    if runner is not None:
        state.weather_refresh_hook = runner.request_weather_refresh

    try:
        run_console_loop(state)
    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=10.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
