# src/day_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
- Planner preferences the user edits at runtime (work hours, location, theme)
  are NOT here: they live in the planner store. DEFAULT_LOCATION only seeds them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "DAYPLANNER"

DEFAULT_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment variables win over .env.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path
    export_dir: Path

    # ---- Weather ----
    weather_enabled: bool
    geocoding_url: str
    forecast_url: str
    weather_timeout_seconds: float
    default_location: str

    # ---- Timers ----
    clock_interval_seconds: float
    weather_interval_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "day-planner").strip() or "day-planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/day_planner"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "planner.sqlite3")
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir / "exports")

        weather_enabled = _env_bool(_k("WEATHER_ENABLED"), True)
        geocoding_url = _env(_k("GEOCODING_URL"), DEFAULT_GEOCODING_URL).strip() or DEFAULT_GEOCODING_URL
        forecast_url = _env(_k("FORECAST_URL"), DEFAULT_FORECAST_URL).strip() or DEFAULT_FORECAST_URL
        weather_timeout_seconds = _env_float(_k("WEATHER_TIMEOUT_SECONDS"), 10.0)
        default_location = _env(_k("DEFAULT_LOCATION"), "New York").strip() or "New York"

        clock_interval_seconds = _env_float(_k("CLOCK_INTERVAL_SECONDS"), 60.0)
        weather_interval_seconds = _env_float(_k("WEATHER_INTERVAL_SECONDS"), 30 * 60.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            export_dir=export_dir,
            weather_enabled=weather_enabled,
            geocoding_url=geocoding_url,
            forecast_url=forecast_url,
            weather_timeout_seconds=weather_timeout_seconds,
            default_location=default_location,
            clock_interval_seconds=clock_interval_seconds,
            weather_interval_seconds=weather_interval_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
