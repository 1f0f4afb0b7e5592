# src/day_planner/planner/controller.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

from ..core.ports import Notifier
from .errors import TaskValidationError
from .models import (
    FILTER_ALL,
    Category,
    Notification,
    PlannerSettings,
    Priority,
    Task,
    Theme,
    parse_hhmm,
)
from .store import PlannerStore
from .views import PlannerStats, TaskView, build_schedule, compute_stats

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in task and time fields"

Clock = Callable[[], datetime]


def _coerce_category(raw: Category | str) -> Category:
    try:
        return Category(str(raw).strip().lower())
    except ValueError:
        raise TaskValidationError(f"Unknown category: {raw}", field="category") from None


def _coerce_priority(raw: Priority | str) -> Priority:
    try:
        return Priority(str(raw).strip().lower())
    except ValueError:
        raise TaskValidationError(f"Unknown priority: {raw}", field="priority") from None


def _require_time(raw: str | None, field: str) -> str:
    hhmm = parse_hhmm(raw)
    if hhmm is None:
        raise TaskValidationError(f"Invalid time for {field}: {raw!r} (expected HH:MM)", field=field)
    return hhmm


class PlannerController:
    """
    Owns the task list, planner settings, notes and the active category filter.

    Every mutation persists the affected slot right away. Views are derived on
    demand from the current state (see views.py).

    Not thread-safe by itself; callers serialize access with AppState.lock.
    """

    def __init__(
        self,
        store: PlannerStore,
        *,
        clock: Clock | None = None,
        notify: Notifier | None = None,
        on_settings_saved: Callable[[PlannerSettings], None] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self._notify = notify
        self.on_settings_saved = on_settings_saved
        self._last_id = 0

        self.current_filter: str = FILTER_ALL
        self.settings: PlannerSettings = store.load_settings()
        self.tasks: list[Task] = store.load_tasks()
        self.notes: str = store.load_notes()

        logger.info(
            "Planner loaded: tasks=%d location=%s theme=%s",
            len(self.tasks),
            self.settings.location,
            self.settings.theme.value,
        )

    # ---- helpers ----

    def now(self) -> datetime:
        return self._clock()

    def notify(self, message: str, level: str = "info") -> None:
        if self._notify is None:
            return
        try:
            self._notify(Notification(message=message, level=level))
        except Exception:
            logger.debug("Notification sink failed.", exc_info=True)

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped so ids stay unique within a burst.
        candidate = time.time_ns() // 1_000_000
        floor = max([self._last_id, *(t.id for t in self.tasks)], default=0)
        new_id = max(candidate, floor + 1)
        self._last_id = new_id
        return new_id

    def _persist_tasks(self) -> None:
        self._store.save_tasks(self.tasks)

    def get(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    # ---- task mutations ----

    def add(
        self,
        title: str,
        time_str: str,
        category: Category | str = Category.WORK,
        priority: Priority | str = Priority.MEDIUM,
        details: str = "",
    ) -> Task:
        title = (title or "").strip()
        if not title or not (time_str or "").strip():
            raise TaskValidationError(MISSING_FIELDS_MESSAGE)

        task = Task(
            id=self._next_id(),
            title=title,
            time=_require_time(time_str, "time"),
            category=_coerce_category(category),
            priority=_coerce_priority(priority),
            details=(details or "").strip(),
            completed=False,
            created_at=datetime.now(timezone.utc),
        )

        self.tasks.append(task)
        self._persist_tasks()
        logger.info("Task added id=%s time=%s category=%s", task.id, task.time, task.category.value)
        self.notify("Task added successfully!", "success")
        return task

    def delete(self, task_id: int) -> bool:
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        removed = len(self.tasks) != before
        self._persist_tasks()
        if removed:
            logger.info("Task deleted id=%s", task_id)
            self.notify("Task deleted!", "info")
        return removed

    def toggle_complete(self, task_id: int) -> Task | None:
        task = self.get(task_id)
        if task is None:
            return None
        task.completed = not task.completed
        self._persist_tasks()
        logger.debug("Task %s completed=%s", task_id, task.completed)
        return task

    def edit(
        self,
        task_id: int,
        *,
        title: str | None = None,
        time_str: str | None = None,
        category: Category | str | None = None,
        priority: Priority | str | None = None,
        details: str | None = None,
    ) -> Task | None:
        """
        Update fields in place. The task keeps its id, creation time and
        position in the list. Only the arguments that are not None change.
        """
        task = self.get(task_id)
        if task is None:
            return None

        # Validate everything before touching the task.
        new_title = task.title if title is None else title.strip()
        if not new_title:
            raise TaskValidationError(MISSING_FIELDS_MESSAGE, field="title")
        if time_str is not None and not time_str.strip():
            raise TaskValidationError(MISSING_FIELDS_MESSAGE, field="time")
        new_time = task.time if time_str is None else _require_time(time_str, "time")
        new_category = task.category if category is None else _coerce_category(category)
        new_priority = task.priority if priority is None else _coerce_priority(priority)

        task.title = new_title
        task.time = new_time
        task.category = new_category
        task.priority = new_priority
        if details is not None:
            task.details = details.strip()

        self._persist_tasks()
        logger.info("Task edited id=%s", task_id)
        self.notify("Task updated!", "success")
        return task

    def extend(self, tasks: list[Task]) -> None:
        """Append already-built tasks (import). Ids are kept as given."""
        self.tasks.extend(tasks)
        self._persist_tasks()

    # ---- views ----

    def set_filter(self, category: str) -> str:
        value = (category or FILTER_ALL).strip().lower()
        if value != FILTER_ALL:
            value = _coerce_category(value).value
        self.current_filter = value
        return value

    def render(self, category: str | None = None) -> list[TaskView]:
        return build_schedule(self.tasks, category or self.current_filter, self.now())

    def stats(self) -> PlannerStats:
        return compute_stats(self.tasks, self.now())

    # ---- settings & notes ----

    def save_settings(
        self,
        *,
        work_start: str | None = None,
        work_end: str | None = None,
        location: str | None = None,
        theme: Theme | str | None = None,
    ) -> PlannerSettings:
        """
        Overwrite the settings record. Omitted values keep their current
        value. Saving always requests a weather refresh.
        """
        current = self.settings
        try:
            new_theme = current.theme if theme is None else Theme(str(theme).strip().lower())
        except ValueError:
            raise TaskValidationError(f"Unknown theme: {theme}", field="theme") from None

        new_location = current.location if location is None else location.strip()
        if not new_location:
            raise TaskValidationError("Location cannot be empty", field="location")

        updated = PlannerSettings(
            work_start=current.work_start if work_start is None else _require_time(work_start, "work_start"),
            work_end=current.work_end if work_end is None else _require_time(work_end, "work_end"),
            location=new_location,
            theme=new_theme,
        )

        self.settings = updated
        self._store.save_settings(updated)
        logger.info("Settings saved location=%s theme=%s", updated.location, updated.theme.value)

        if self.on_settings_saved is not None:
            try:
                self.on_settings_saved(updated)
            except Exception:
                logger.exception("on_settings_saved callback failed")

        self.notify("Settings saved!", "success")
        return updated

    def save_notes(self, text: str) -> None:
        self.notes = text
        self._store.save_notes(text)
        self.notify("Notes saved!", "success")
