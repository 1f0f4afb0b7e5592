# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from day_planner.cli.commands import CommandRegistry, parse_add_args, registry
from day_planner.cli.formatting import EMPTY_SCHEDULE
from day_planner.core.state import AppState
from day_planner.planner.controller import MISSING_FIELDS_MESSAGE
from day_planner.planner.models import Category, Priority, Theme
from day_planner.planner.store import KeyValueStore, PlannerStore


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    emitted: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=emitted.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert emitted == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_parse_add_args() -> None:
    fields = parse_add_args("9:00 Team standup #meeting !high -- bring notes".split())
    assert fields == {
        "time_str": "9:00",
        "title": "Team standup",
        "details": "bring notes",
        "category": "meeting",
        "priority": "high",
    }
    assert parse_add_args([]) == {"time_str": "", "title": "", "details": ""}


def test_add_and_list(state: AppState) -> None:
    assert registry.handle(state, "/list") == EMPTY_SCHEDULE

    reply = registry.handle(state, "/add 12:30 Lunch #personal !low")
    task = state.planner.tasks[0]
    assert reply == f"#{task.id} 12:30 Lunch [personal, low]"

    registry.handle(state, "/add 09:00 Standup #meeting")
    listing = registry.handle(state, "/ls") or ""
    assert listing.index("Standup") < listing.index("Lunch")
    assert state.planner.tasks[1].priority is Priority.MEDIUM


def test_add_with_missing_title_reports_message(state: AppState) -> None:
    assert registry.handle(state, "/add 09:00") == MISSING_FIELDS_MESSAGE
    assert registry.handle(state, "/add") == MISSING_FIELDS_MESSAGE
    assert state.planner.tasks == []


def test_add_keeps_unknown_markers_in_title(state: AppState) -> None:
    registry.handle(state, "/add 10:00 Fix bug #123 !asap #Important !HIGH")

    task = state.planner.tasks[0]
    assert task.title == "Fix bug #123 !asap"
    assert task.category is Category.IMPORTANT
    assert task.priority is Priority.HIGH


def test_list_filter(state: AppState) -> None:
    registry.handle(state, "/add 16:00 Deploy #work")
    registry.handle(state, "/add 08:00 Dentist #personal")

    reply = registry.handle(state, "/list work") or ""

    assert reply.startswith("Schedule (work):")
    assert "Deploy" in reply
    assert "Dentist" not in reply
    assert state.planner.current_filter == "work"

    assert "Unknown category" in (registry.handle(state, "/list chores") or "")
    assert state.planner.current_filter == "work"


def test_edit_done_show_delete(state: AppState) -> None:
    registry.handle(state, "/add 09:00 Standup #meeting")
    task_id = state.planner.tasks[0].id

    reply = registry.handle(state, f"/edit {task_id} title=Team sync time=9:30 priority=high") or ""
    assert "Team sync" in reply
    task = state.planner.tasks[0]
    assert (task.id, task.title, task.time, task.priority) == (task_id, "Team sync", "09:30", Priority.HIGH)
    assert task.category is Category.MEETING

    assert registry.handle(state, f"/done #{task_id}") == f"#{task_id} Team sync: completed"
    assert registry.handle(state, f"/toggle {task_id}") == f"#{task_id} Team sync: pending"

    assert "Time: 09:30" in (registry.handle(state, f"/show {task_id}") or "")

    assert registry.handle(state, f"/del {task_id}") == f"Removed #{task_id}."
    assert registry.handle(state, f"/del {task_id}") == f"No task #{task_id}."
    assert state.planner.tasks == []


def test_edit_usage_and_unknown(state: AppState) -> None:
    assert (registry.handle(state, "/edit") or "").startswith("Usage:")
    assert (registry.handle(state, "/edit 5 nonsense") or "").startswith("Usage:")
    assert registry.handle(state, "/edit 5 title=x") == "No task #5."
    assert registry.handle(state, "/done abc") == "Usage: /done <id>"


def test_stats_and_upcoming(state: AppState) -> None:
    registry.handle(state, "/add 09:00 Standup #meeting")
    registry.handle(state, "/add 12:30 Lunch #personal")
    registry.handle(state, f"/done {state.planner.tasks[0].id}")

    stats = registry.handle(state, "/stats") or ""
    assert "Total: 2" in stats
    assert "Productivity: 50%" in stats

    upcoming = registry.handle(state, "/upcoming") or ""
    assert "Lunch" in upcoming
    assert "Standup" not in upcoming


def test_notes(state: AppState) -> None:
    assert registry.handle(state, "/notes") == "(no notes)"
    assert registry.handle(state, "/notes buy milk") == "buy milk"
    assert registry.handle(state, "/notes") == "buy milk"


def test_notes_keep_spacing_and_can_be_cleared(state: AppState) -> None:
    registry.handle(state, "/notes a  b\tc")
    assert state.planner.notes == "a  b\tc"

    assert registry.handle(state, "/notes --clear") == "(no notes)"
    assert state.planner.notes == ""
    assert PlannerStore(KeyValueStore(state.settings.db_path)).load_notes() == ""


def test_settings_show_and_update(state: AppState) -> None:
    refreshes: list[int] = []
    state.weather_refresh_hook = lambda: refreshes.append(1)

    reply = registry.handle(state, "/settings start=8:00 location=San Francisco theme=dark") or ""

    assert "Work hours: 08:00 - 17:00" in reply
    assert "Location: San Francisco" in reply
    assert state.planner.settings.theme is Theme.DARK
    assert refreshes == [1]

    assert "Unknown theme" in (registry.handle(state, "/settings theme=neon") or "")
    assert (registry.handle(state, "/settings bogus") or "").startswith("Usage:")


def test_weather_command_requests_refresh(state: AppState) -> None:
    refreshes: list[int] = []
    emitted: list[str] = []
    state.weather_refresh_hook = lambda: refreshes.append(1)

    assert registry.handle(state, "/weather", emit=emitted.append) == "Loading weather..."
    assert refreshes == [1]
    assert emitted == ["[WEATHER] Refresh requested."]


def test_export_then_import(state: AppState, tmp_path: Path) -> None:
    registry.handle(state, "/add 09:00 Standup #meeting")

    reply = registry.handle(state, "/export") or ""
    exported = Path(state.settings.export_dir) / "tasks_2026-10-19.json"
    assert reply == f"Exported 1 tasks to {exported}"
    assert exported.exists()

    assert registry.handle(state, f"/import {exported}") == "Imported 1 tasks."
    assert len(state.planner.tasks) == 2

    assert registry.handle(state, f"/import {tmp_path / 'missing.json'}") == "Imported 0 tasks."
    assert registry.handle(state, "/import") == "Usage: /import <file.json>"


def test_help_lists_commands(state: AppState) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("add", "edit", "done", "del", "list", "stats", "notes", "settings", "export", "import"):
        assert f"/{name} " in text
