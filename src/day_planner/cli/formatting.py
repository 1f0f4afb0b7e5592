# src/day_planner/cli/formatting.py

"""Plain-text rendering of planner view models for the console."""

from __future__ import annotations

from ..core.state import AppState
from ..planner.models import Task, TimeStatus
from ..planner.views import PlannerStats, TaskView, focus_index

EMPTY_SCHEDULE = "No tasks scheduled. Add one to get started!"
NO_UPCOMING = "No upcoming tasks"

_STATUS_MARK = {
    TimeStatus.PAST: " ",
    TimeStatus.PRESENT: "▶",
    TimeStatus.FUTURE: " ",
}


def format_block(view: TaskView) -> str:
    box = "[x]" if view.completed else "[ ]"
    line = (
        f"{_STATUS_MARK[view.status]} {view.time}  {box} {view.title}"
        f"  · {view.category_label} · {view.priority}  (#{view.id}, {view.status.value})"
    )
    if view.details:
        line += f"\n        {view.details}"
    return line


def format_schedule(views: list[TaskView], *, title: str = "Schedule") -> str:
    if not views:
        return EMPTY_SCHEDULE
    return "\n".join([f"{title}:", *(format_block(v) for v in views)])


def format_focus(views: list[TaskView]) -> str:
    """Schedule starting at the first block that is not in the past."""
    idx = focus_index(views)
    if idx is None:
        return "Nothing left for today."
    return format_schedule(views[idx:], title="From now")


def format_upcoming(tasks: list[Task]) -> str:
    if not tasks:
        return NO_UPCOMING
    lines = ["Upcoming:"]
    for t in tasks:
        lines.append(f"  {t.time}  {t.title}  [{t.category.value}]")
    return "\n".join(lines)


def format_stats(stats: PlannerStats) -> str:
    cats = " · ".join(f"{name} {count}" for name, count in stats.by_category.items())
    return "\n".join(
        [
            "Stats:",
            f"  Total: {stats.total}  Completed: {stats.completed}  Remaining: {stats.remaining}",
            f"  Productivity: {stats.productivity}%",
            f"  By category: {cats}",
            format_upcoming(stats.upcoming),
        ]
    )


def format_task_details(task: Task) -> str:
    status = "Completed" if task.completed else "Pending"
    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        f"{task.title}  (#{task.id})",
        f"  Time: {task.time}    Category: {task.category.label}",
        f"  Priority: {task.priority.value.upper()} ({task.priority.badge})    Status: {status}",
    ]
    if task.details:
        lines.append(f"  Details: {task.details}")
    lines.append(f"  Created: {created}")
    return "\n".join(lines)


def format_header(state: AppState) -> str:
    return "\n".join([state.date_text, state.time_text, state.weather_text()])
