# tests/test_transfer.py

from __future__ import annotations

import json
from pathlib import Path

from day_planner.planner.controller import PlannerController
from day_planner.planner.store import KeyValueStore, PlannerStore
from day_planner.planner.transfer import IMPORT_ERROR_MESSAGE, export_tasks, import_tasks


def _seed(planner: PlannerController) -> None:
    planner.add("Standup", "09:00", "meeting", "medium")
    planner.add("Lunch", "12:30", "personal", "low", "with Sam")
    planner.toggle_complete(planner.tasks[0].id)


def test_export_writes_dated_file_in_directory(planner: PlannerController, tmp_path: Path) -> None:
    _seed(planner)

    path = export_tasks(planner, tmp_path / "exports")

    assert path.name == "tasks_2026-10-19.json"
    data = json.loads(path.read_text("utf-8"))
    assert [d["title"] for d in data] == ["Standup", "Lunch"]
    assert data[0]["completed"] is True


def test_export_then_import_into_same_list_concatenates(planner: PlannerController, tmp_path: Path) -> None:
    _seed(planner)
    before = [t.to_dict() for t in planner.tasks]

    path = export_tasks(planner, tmp_path / "out.json")
    assert import_tasks(planner, path) == 2

    assert [t.to_dict() for t in planner.tasks] == before + before


def test_export_then_import_into_empty_list_is_equal(planner: PlannerController, tmp_path: Path, clock) -> None:
    _seed(planner)
    path = export_tasks(planner, tmp_path / "out.json")

    other = PlannerController(PlannerStore(KeyValueStore(tmp_path / "other.sqlite3")), clock=clock)
    import_tasks(other, path)

    assert other.tasks == planner.tasks
    # persisted as well
    assert PlannerStore(KeyValueStore(tmp_path / "other.sqlite3")).load_tasks() == planner.tasks


def test_import_non_list_is_ignored_silently(planner: PlannerController, notifications, tmp_path: Path) -> None:
    _seed(planner)
    notifications.items.clear()
    src = tmp_path / "obj.json"
    src.write_text(json.dumps({"tasks": []}), "utf-8")

    assert import_tasks(planner, src) == 0
    assert len(planner.tasks) == 2
    assert notifications.items == []


def test_import_parse_error_notifies_and_changes_nothing(
    planner: PlannerController, notifications, tmp_path: Path
) -> None:
    _seed(planner)
    src = tmp_path / "bad.json"
    src.write_text("[{oops", "utf-8")

    assert import_tasks(planner, src) == 0
    assert import_tasks(planner, tmp_path / "missing.json") == 0

    assert len(planner.tasks) == 2
    assert notifications.items[-1].message == IMPORT_ERROR_MESSAGE
    assert notifications.items[-1].level == "danger"


def test_import_accepts_browser_export_format(planner: PlannerController, tmp_path: Path) -> None:
    src = tmp_path / "browser.json"
    src.write_text(
        json.dumps(
            [
                {
                    "id": 1760857200000,
                    "title": "Standup",
                    "time": "09:00",
                    "category": "meeting",
                    "priority": "medium",
                    "details": "",
                    "completed": False,
                    "createdAt": "2026-10-19T07:00:00.000Z",
                }
            ]
        ),
        "utf-8",
    )

    assert import_tasks(planner, src) == 1
    task = planner.tasks[0]
    assert task.id == 1760857200000
    assert task.created_at.year == 2026
    assert task.created_at.utcoffset().total_seconds() == 0
