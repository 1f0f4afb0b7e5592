# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Planner preferences (work hours, location, theme) are edited in the app with /settings
and stored in the planner database; DAYPLANNER_DEFAULT_LOCATION only seeds the first run.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "DAYPLANNER_APP_NAME": "App display name (default: day-planner).",
    "DAYPLANNER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "DAYPLANNER_DATA_DIR": "Local data directory (default: .local/day_planner).",
    "DAYPLANNER_DB_PATH": "Planner SQLite path (default: <data_dir>/planner.sqlite3).",
    "DAYPLANNER_EXPORT_DIR": "Default /export target directory (default: <data_dir>/exports).",
    # Weather (Open-Meteo, no API key)
    "DAYPLANNER_WEATHER_ENABLED": "Fetch weather at all (true/false, default: true).",
    "DAYPLANNER_GEOCODING_URL": "Geocoding endpoint (default: https://geocoding-api.open-meteo.com/v1/search).",
    "DAYPLANNER_FORECAST_URL": "Forecast endpoint (default: https://api.open-meteo.com/v1/forecast).",
    "DAYPLANNER_WEATHER_TIMEOUT_SECONDS": "HTTP timeout per request (default: 10).",
    "DAYPLANNER_DEFAULT_LOCATION": "Location before any settings were saved (default: New York).",
    # Timers
    "DAYPLANNER_CLOCK_INTERVAL_SECONDS": "Clock/schedule refresh period (default: 60).",
    "DAYPLANNER_WEATHER_INTERVAL_SECONDS": "Weather refresh period (default: 1800).",
}
