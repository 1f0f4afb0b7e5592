# src/day_planner/planner/models.py

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

FILTER_ALL = "all"


class Category(StrEnum):
    WORK = "work"
    PERSONAL = "personal"
    MEETING = "meeting"
    IMPORTANT = "important"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.WORK: "💼 Work",
    Category.PERSONAL: "👤 Personal",
    Category.MEETING: "👥 Meeting",
    Category.IMPORTANT: "⚠️ Important",
}


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def badge(self) -> str:
        """Bootstrap-style badge level: high -> danger, medium -> warning, low -> success."""
        if self is Priority.HIGH:
            return "danger"
        if self is Priority.MEDIUM:
            return "warning"
        return "success"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class TimeStatus(StrEnum):
    PAST = "past"
    PRESENT = "present"
    FUTURE = "future"


def parse_hhmm(raw: str | None) -> str | None:
    """
    Normalize a clock time to zero-padded "HH:MM".

    Accepts "9:05" and "09:05"; returns None for anything that is not a valid
    24-hour time.
    """
    if raw is None:
        return None
    m = _HHMM_RE.match(raw.strip())
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def minutes_of_day(hhmm: str) -> int:
    hour, minute = hhmm.split(":")
    return int(hour) * 60 + int(minute)


def _parse_created_at(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw.strip():
        dt = datetime.fromisoformat(raw.strip())
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    raise ValueError(f"invalid created_at: {raw!r}")


@dataclass(slots=True)
class Task:
    id: int
    title: str
    time: str
    category: Category
    priority: Priority
    details: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "time": self.time,
            "category": self.category.value,
            "priority": self.priority.value,
            "details": self.details,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a stored/imported record.

        Raises ValueError (or KeyError/TypeError) on malformed entries; callers
        decide whether to skip them. Both "created_at" and the browser widget's
        "createdAt" are accepted.
        """
        time_s = parse_hhmm(str(raw["time"]))
        if time_s is None:
            raise ValueError(f"invalid time: {raw.get('time')!r}")

        title = str(raw["title"]).strip()
        if not title:
            raise ValueError("empty title")

        task_id = raw["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, (int, float, str)):
            raise TypeError(f"invalid id: {task_id!r}")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError(f"invalid completed flag: {completed!r}")

        created_raw = raw.get("created_at", raw.get("createdAt"))
        created_at = (
            _parse_created_at(created_raw) if created_raw is not None else datetime.now(timezone.utc)
        )

        return cls(
            id=int(task_id),
            title=title,
            time=time_s,
            category=Category(str(raw.get("category", Category.WORK.value))),
            priority=Priority(str(raw.get("priority", Priority.MEDIUM.value))),
            details=str(raw.get("details") or ""),
            completed=completed,
            created_at=created_at,
        )


@dataclass(slots=True)
class PlannerSettings:
    work_start: str = "09:00"
    work_end: str = "17:00"
    location: str = "New York"
    theme: Theme = Theme.LIGHT

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["theme"] = self.theme.value
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, defaults: PlannerSettings | None = None) -> PlannerSettings:
        """Missing or invalid keys fall back to `defaults`; unknown keys are ignored."""
        base = defaults or cls()

        work_start = parse_hhmm(_str_or_none(raw.get("work_start", raw.get("workStartTime"))))
        work_end = parse_hhmm(_str_or_none(raw.get("work_end", raw.get("workEndTime"))))
        location = _str_or_none(raw.get("location"))

        try:
            theme = Theme(str(raw.get("theme", base.theme.value)))
        except ValueError:
            theme = base.theme

        return cls(
            work_start=work_start or base.work_start,
            work_end=work_end or base.work_end,
            location=location.strip() if location and location.strip() else base.location,
            theme=theme,
        )


def _str_or_none(v: Any) -> str | None:
    return v if isinstance(v, str) else None


@dataclass(frozen=True, slots=True)
class Notification:
    """Transient user-facing message (success / info / danger)."""

    message: str
    level: str = "info"
