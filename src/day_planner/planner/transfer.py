# src/day_planner/planner/transfer.py

"""JSON export/import of the task list."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path

from .controller import PlannerController
from .store import tasks_from_records

logger = logging.getLogger(__name__)

IMPORT_ERROR_MESSAGE = "Error importing tasks"


def export_filename(today: date) -> str:
    return f"tasks_{today.isoformat()}.json"


def dump_tasks(controller: PlannerController) -> str:
    return json.dumps([t.to_dict() for t in controller.tasks], ensure_ascii=False, indent=2)


def export_tasks(controller: PlannerController, target: str | Path) -> Path:
    """
    Write the full task list as pretty-printed JSON.

    `target` may be a directory (file is named tasks_YYYY-MM-DD.json) or a file path.
    """
    path = Path(target).expanduser()
    if path.is_dir() or not path.suffix:
        path = path / export_filename(controller.now().date())
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(dump_tasks(controller), "utf-8")
    os.replace(tmp, path)

    logger.info("Exported %d tasks to %s", len(controller.tasks), path)
    return path


def import_tasks(controller: PlannerController, source: str | Path) -> int:
    """
    Append tasks from a JSON file to the current list.

    - a JSON array is appended (ids kept verbatim, bad entries skipped)
    - any other JSON value is ignored silently
    - unreadable file / invalid JSON -> "Error importing tasks", no state change

    Returns the number of tasks appended.
    """
    path = Path(source).expanduser()
    try:
        data = json.loads(path.read_text("utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        logger.warning("Import failed for %s", path, exc_info=True)
        controller.notify(IMPORT_ERROR_MESSAGE, "danger")
        return 0

    if not isinstance(data, list):
        logger.info("Import ignored: %s does not contain a list", path)
        return 0

    imported = tasks_from_records(data)
    controller.extend(imported)
    logger.info("Imported %d tasks from %s", len(imported), path)
    controller.notify("Tasks imported successfully!", "success")
    return len(imported)
