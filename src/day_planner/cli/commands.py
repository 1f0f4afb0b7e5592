# src/day_planner/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..planner.errors import PlannerError
from ..planner.models import FILTER_ALL, Category, Priority
from ..planner.timers import tick_clock
from ..planner.transfer import export_tasks, import_tasks
from .formatting import (
    format_focus,
    format_header,
    format_schedule,
    format_stats,
    format_task_details,
    format_upcoming,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_EDIT_KEYS = {"title", "time", "category", "priority", "details"}
_SETTINGS_KEYS = {"start": "work_start", "end": "work_end", "location": "location", "theme": "theme"}
NOTES_CLEAR = "--clear"
_CATEGORY_VALUES = {c.value for c in Category}
_PRIORITY_VALUES = {p.value for p in Priority}


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw: bool = False,
    ) -> None:
        """
        raw=True: the handler gets the rest of the line as a single argument,
        inner whitespace kept (or no arguments), instead of split words.
        """
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        names = [key, *(a.lower() for a in aliases)]
        for n in names[1:]:
            self._handlers[n] = handler
        if raw:
            self._raw.update(names)

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Validation errors are returned as the reply; nothing was changed.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except PlannerError as e:
            logger.debug("/%s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def _parse_pairs(args: list[str], keys: set[str]) -> dict[str, str] | None:
    """
    "title=Team sync time=09:30" -> {"title": "Team sync", "time": "09:30"}.

    A token without a known "key=" prefix continues the previous value.
    Returns None if the first token is not a known key.
    """
    out: dict[str, str] = {}
    current: str | None = None
    for tok in args:
        key, sep, value = tok.partition("=")
        if sep and key.lower() in keys:
            current = key.lower()
            out[current] = value
        elif current is not None:
            out[current] = f"{out[current]} {tok}".strip()
        else:
            return None
    return out


def parse_add_args(args: list[str]) -> dict[str, str]:
    """
    /add <HH:MM> <title words> [#category] [!priority] [-- details]

    "#x" / "!x" are markers only when x is a known category / priority;
    otherwise the token stays in the title ("Fix bug #123").
    """
    fields: dict[str, str] = {"time_str": "", "title": "", "details": ""}
    if not args:
        return fields

    fields["time_str"] = args[0]
    rest = args[1:]
    if "--" in rest:
        cut = rest.index("--")
        fields["details"] = " ".join(rest[cut + 1 :])
        rest = rest[:cut]

    title_words: list[str] = []
    for tok in rest:
        marker = tok[1:].lower()
        if tok.startswith("#") and marker in _CATEGORY_VALUES:
            fields["category"] = marker
        elif tok.startswith("!") and marker in _PRIORITY_VALUES:
            fields["priority"] = marker
        else:
            title_words.append(tok)
    fields["title"] = " ".join(title_words)
    return fields


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_today(state: AppState, args: list[str]) -> str:
    tick_clock(state)
    return f"{format_header(state)}\n\n{format_focus(state.planner.render())}"


def cmd_add(state: AppState, args: list[str]) -> str:
    fields = parse_add_args(args)
    task = state.planner.add(**fields)
    return f"#{task.id} {task.time} {task.title} [{task.category.value}, {task.priority.value}]"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> title=... time=HH:MM category=... priority=... details=...
    """
    usage = "Usage: /edit <id> title=... time=HH:MM category=... priority=... details=..."
    task_id = _parse_id(args)
    if task_id is None:
        return usage
    pairs = _parse_pairs(args[1:], _EDIT_KEYS)
    if not pairs:
        return usage

    if "time" in pairs:
        pairs["time_str"] = pairs.pop("time")
    task = state.planner.edit(task_id, **pairs)
    if task is None:
        return f"No task #{task_id}."
    return format_task_details(task)


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = state.planner.toggle_complete(task_id)
    if task is None:
        return f"No task #{task_id}."
    return f"#{task.id} {task.title}: {'completed' if task.completed else 'pending'}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    if not state.planner.delete(task_id):
        return f"No task #{task_id}."
    return f"Removed #{task_id}."


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    task = state.planner.get(task_id)
    if task is None:
        return f"No task #{task_id}."
    return format_task_details(task)


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list              -> current filter
    /list <category>   -> switch filter (all | work | personal | meeting | important)
    """
    if args:
        state.planner.set_filter(args[0])
    current = state.planner.current_filter
    title = "Schedule" if current == FILTER_ALL else f"Schedule ({current})"
    return format_schedule(state.planner.render(), title=title)


def cmd_stats(state: AppState, args: list[str]) -> str:
    return format_stats(state.planner.stats())


def cmd_upcoming(state: AppState, args: list[str]) -> str:
    return format_upcoming(state.planner.stats().upcoming)


def cmd_notes(state: AppState, args: list[str]) -> str:
    """
    /notes          -> show notes
    /notes <text>   -> replace notes with <text>, spacing kept
    /notes --clear  -> save empty notes
    """
    if not args:
        return state.planner.notes or "(no notes)"
    text = "" if args[0] == NOTES_CLEAR else args[0]
    state.planner.save_notes(text)
    return state.planner.notes or "(no notes)"


def cmd_settings(state: AppState, args: list[str]) -> str:
    """
    /settings                                   -> show
    /settings start=09:00 end=17:00 location=Paris theme=dark
    """
    if args:
        pairs = _parse_pairs(args, set(_SETTINGS_KEYS))
        if not pairs:
            return "Usage: /settings start=HH:MM end=HH:MM location=<name> theme=light|dark"
        state.planner.save_settings(**{_SETTINGS_KEYS[k]: v for k, v in pairs.items()})

    s = state.planner.settings
    return (
        "Settings:\n"
        f"  Work hours: {s.work_start} - {s.work_end}\n"
        f"  Location: {s.location}\n"
        f"  Theme: {s.theme.value}"
    )


def cmd_weather(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.request_weather_refresh()
    if emit:
        emit("[WEATHER] Refresh requested.")
    return state.weather_text()


def cmd_export(state: AppState, args: list[str]) -> str:
    target = Path(" ".join(args)) if args else Path(state.settings.export_dir)
    path = export_tasks(state.planner, target)
    return f"Exported {len(state.planner.tasks)} tasks to {path}"


def cmd_import(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /import <file.json>"
    count = import_tasks(state.planner, " ".join(args))
    return f"Imported {count} tasks."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("today", cmd_today, help_text="Date, time, weather and what's next.", aliases=["now"])
registry.register(
    "add",
    cmd_add,
    help_text=(
        "Add a task: /add HH:MM <title> [#" + "|#".join(c.value for c in Category) + "] "
        "[!" + "|!".join(p.value for p in Priority) + "] [-- details]."
    ),
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> title=... time=... category=...")
registry.register("done", cmd_done, help_text="Toggle completed: /done <id>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["delete", "rm"])
registry.register("show", cmd_show, help_text="Task details: /show <id>.")
registry.register("list", cmd_list, help_text="Schedule, optionally filtered: /list [all|<category>].", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Totals, productivity and per-category counts.")
registry.register("upcoming", cmd_upcoming, help_text="Next five pending tasks today.")
registry.register(
    "notes",
    cmd_notes,
    help_text=f"Show or replace notes: /notes [text], or /notes {NOTES_CLEAR} to empty them.",
    raw=True,
)
registry.register("settings", cmd_settings, help_text="Show or change settings: /settings key=value ...")
registry.register("weather", cmd_weather, help_text="Refresh and show the weather.")
registry.register("export", cmd_export, help_text="Export tasks as JSON: /export [path].")
registry.register("import", cmd_import, help_text="Append tasks from a JSON file: /import <path>.")
