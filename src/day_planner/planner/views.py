# src/day_planner/planner/views.py

"""
Pure view derivation: (tasks, filter, now) -> view models.

Nothing here touches storage or the console. The controller and the timers
recompute these on every change instead of patching a previous result.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from ..core.rounding import round_half_up
from .models import FILTER_ALL, Category, Task, TimeStatus, minutes_of_day

PRESENT_WINDOW_MINUTES = 5
UPCOMING_LIMIT = 5


@dataclass(frozen=True, slots=True)
class TaskView:
    id: int
    time: str
    title: str
    details: str
    category: Category
    category_label: str
    priority: str
    priority_badge: str
    completed: bool
    status: TimeStatus


@dataclass(frozen=True, slots=True)
class PlannerStats:
    total: int
    completed: int
    remaining: int
    productivity: int
    by_category: dict[str, int] = field(default_factory=dict)
    upcoming: list[Task] = field(default_factory=list)


def classify_time(task_time: str, now: datetime) -> TimeStatus:
    """
    Past / present / future at minute resolution.

    "present" means within PRESENT_WINDOW_MINUTES of now on either side.
    The window does not wrap at midnight: 00:02 and 23:58 are 1436 minutes apart.
    """
    delta = minutes_of_day(task_time) - (now.hour * 60 + now.minute)
    if abs(delta) <= PRESENT_WINDOW_MINUTES:
        return TimeStatus.PRESENT
    if delta < 0:
        return TimeStatus.PAST
    return TimeStatus.FUTURE


def filter_tasks(tasks: Iterable[Task], category: str = FILTER_ALL) -> list[Task]:
    """Tasks in the given category (or all), sorted by time of day. Sort is stable."""
    if category == FILTER_ALL:
        selected = list(tasks)
    else:
        selected = [t for t in tasks if t.category == category]
    # Zero-padded HH:MM sorts correctly as a string.
    selected.sort(key=lambda t: t.time)
    return selected


def to_view(task: Task, now: datetime) -> TaskView:
    return TaskView(
        id=task.id,
        time=task.time,
        title=task.title,
        details=task.details,
        category=task.category,
        category_label=task.category.label,
        priority=task.priority.value.upper(),
        priority_badge=task.priority.badge,
        completed=task.completed,
        status=classify_time(task.time, now),
    )


def build_schedule(tasks: Iterable[Task], category: str, now: datetime) -> list[TaskView]:
    return [to_view(t, now) for t in filter_tasks(tasks, category)]


def focus_index(views: list[TaskView]) -> int | None:
    """Index of the first block that is not in the past ("jump to now")."""
    for i, v in enumerate(views):
        if v.status is not TimeStatus.PAST:
            return i
    return None


def _is_later_today(task: Task, now: datetime) -> bool:
    hour, minute = task.time.split(":")
    scheduled = now.replace(hour=int(hour), minute=int(minute), second=0, microsecond=0)
    return scheduled > now


def upcoming_tasks(tasks: Iterable[Task], now: datetime, limit: int = UPCOMING_LIMIT) -> list[Task]:
    """The soonest incomplete tasks scheduled strictly after `now`."""
    pending = [t for t in tasks if not t.completed and _is_later_today(t, now)]
    pending.sort(key=lambda t: t.time)
    return pending[:limit]


def compute_stats(tasks: list[Task], now: datetime) -> PlannerStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    productivity = round_half_up(completed / total * 100) if total > 0 else 0
    by_category = {c.value: sum(1 for t in tasks if t.category == c) for c in Category}
    return PlannerStats(
        total=total,
        completed=completed,
        remaining=total - completed,
        productivity=productivity,
        by_category=by_category,
        upcoming=upcoming_tasks(tasks, now),
    )
