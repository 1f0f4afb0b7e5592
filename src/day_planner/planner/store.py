# src/day_planner/planner/store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueRepo
from .models import PlannerSettings, Task

logger = logging.getLogger(__name__)

TASKS_KEY = "plannerTasks"
SETTINGS_KEY = "plannerSettings"
NOTES_KEY = "plannerNotes"


class KeyValueStore:
    """
    SQLite key-value store: the local equivalent of browser localStorage.

    One table, string keys, string values. Last write wins.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "planner.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("KeyValueStore ready db=%s", self._db_path)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row["value"])
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_conn()
        try:
            return [str(r["key"]) for r in conn.execute("SELECT key FROM kv ORDER BY key")]
        finally:
            conn.close()


def tasks_from_records(records: list[Any]) -> list[Task]:
    """Convert raw records to Tasks, skipping (and logging) entries that don't parse."""
    out: list[Task] = []
    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            logger.warning("Skipping task record #%d: not an object", i)
            continue
        try:
            out.append(Task.from_dict(rec))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping task record #%d: %s", i, e)
    return out


class PlannerStore:
    """
    Three independent slots on top of a KeyValueRepo:
    - tasks: JSON array of task records
    - settings: JSON object
    - notes: raw text
    """

    def __init__(self, kv: KeyValueRepo, *, default_settings: PlannerSettings | None = None) -> None:
        self._kv = kv
        self._default_settings = default_settings or PlannerSettings()

    # ---- tasks ----

    def load_tasks(self) -> list[Task]:
        raw = self._kv.get(TASKS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored tasks are not valid JSON; starting with an empty list.")
            return []
        if not isinstance(data, list):
            logger.warning("Stored tasks are not a list (%s); starting with an empty list.", type(data).__name__)
            return []
        tasks = tasks_from_records(data)
        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def save_tasks(self, tasks: list[Task]) -> None:
        self._kv.set(TASKS_KEY, json.dumps([t.to_dict() for t in tasks], ensure_ascii=False))

    # ---- settings ----

    def load_settings(self) -> PlannerSettings:
        raw = self._kv.get(SETTINGS_KEY)
        if not raw:
            return PlannerSettings.from_dict({}, defaults=self._default_settings)
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored settings are not valid JSON; using defaults.")
            data = {}
        if not isinstance(data, dict):
            logger.warning("Stored settings are not an object; using defaults.")
            data = {}
        return PlannerSettings.from_dict(data, defaults=self._default_settings)

    def save_settings(self, settings: PlannerSettings) -> None:
        self._kv.set(SETTINGS_KEY, json.dumps(settings.to_dict(), ensure_ascii=False))

    # ---- notes ----

    def load_notes(self) -> str:
        return self._kv.get(NOTES_KEY) or ""

    def save_notes(self, notes: str) -> None:
        self._kv.set(NOTES_KEY, notes)
