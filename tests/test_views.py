# tests/test_views.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from day_planner.planner.models import Category, Priority, Task, TimeStatus
from day_planner.planner.views import (
    build_schedule,
    classify_time,
    compute_stats,
    focus_index,
    upcoming_tasks,
)

NOW = datetime(2026, 10, 19, 10, 0, 30)


def _task(task_id: int, time: str, *, category: Category = Category.WORK, completed: bool = False) -> Task:
    return Task(
        id=task_id,
        title=f"task {task_id}",
        time=time,
        category=category,
        priority=Priority.MEDIUM,
        completed=completed,
        created_at=datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    ("task_time", "expected"),
    [
        ("09:54", TimeStatus.PAST),
        ("09:55", TimeStatus.PRESENT),
        ("10:00", TimeStatus.PRESENT),
        ("10:05", TimeStatus.PRESENT),
        ("10:06", TimeStatus.FUTURE),
        ("08:00", TimeStatus.PAST),
        ("23:59", TimeStatus.FUTURE),
    ],
)
def test_classify_time_window(task_time: str, expected: TimeStatus) -> None:
    assert classify_time(task_time, NOW) is expected


def test_present_window_does_not_wrap_midnight() -> None:
    late = datetime(2026, 10, 19, 23, 58)
    assert classify_time("00:02", late) is TimeStatus.PAST
    early = datetime(2026, 10, 19, 0, 2)
    assert classify_time("23:58", early) is TimeStatus.FUTURE


def test_build_schedule_sorts_and_labels() -> None:
    tasks = [
        _task(1, "12:30", category=Category.PERSONAL),
        _task(2, "09:00", category=Category.MEETING),
        _task(3, "10:02", category=Category.IMPORTANT, completed=True),
    ]

    views = build_schedule(tasks, "all", NOW)

    assert [v.id for v in views] == [2, 3, 1]
    assert [v.status for v in views] == [TimeStatus.PAST, TimeStatus.PRESENT, TimeStatus.FUTURE]
    assert views[0].category_label == "👥 Meeting"
    assert views[1].completed is True
    assert views[2].priority == "MEDIUM"
    assert views[2].priority_badge == "warning"


def test_build_schedule_sort_is_stable_for_equal_times() -> None:
    tasks = [_task(5, "09:00"), _task(4, "09:00"), _task(6, "08:00")]
    assert [v.id for v in build_schedule(tasks, "all", NOW)] == [6, 5, 4]


def test_focus_index() -> None:
    views = build_schedule([_task(1, "08:00"), _task(2, "11:00")], "all", NOW)
    assert focus_index(views) == 1
    assert focus_index(build_schedule([_task(1, "08:00")], "all", NOW)) is None


def test_upcoming_excludes_completed_past_and_now() -> None:
    tasks = [
        _task(1, "10:00"),  # scheduled before NOW (10:00:30)
        _task(2, "10:01"),
        _task(3, "11:00", completed=True),
        _task(4, "09:00"),
        _task(5, "13:00"),
    ]
    assert [t.id for t in upcoming_tasks(tasks, NOW)] == [2, 5]


def test_upcoming_is_capped_at_five_soonest() -> None:
    tasks = [_task(i, f"{11 + i:02d}:00") for i in range(7)]
    tasks.reverse()
    assert [t.time for t in upcoming_tasks(tasks, NOW)] == ["11:00", "12:00", "13:00", "14:00", "15:00"]


def test_stats_counts_and_productivity() -> None:
    tasks = [
        _task(1, "09:00", completed=True),
        _task(2, "11:00", category=Category.MEETING, completed=True),
        _task(3, "12:00", category=Category.MEETING),
    ]

    stats = compute_stats(tasks, NOW)

    assert (stats.total, stats.completed, stats.remaining) == (3, 2, 1)
    assert stats.productivity == 67
    assert stats.by_category == {"work": 1, "personal": 0, "meeting": 2, "important": 0}
    assert [t.id for t in stats.upcoming] == [3]


def test_productivity_rounds_to_nearest() -> None:
    tasks = [_task(1, "09:00", completed=True), _task(2, "09:00"), _task(3, "09:00")]
    assert compute_stats(tasks, NOW).productivity == 33


@pytest.mark.parametrize(("done", "total", "expected"), [(1, 8, 13), (5, 8, 63), (3, 8, 38), (1, 2, 50)])
def test_productivity_rounds_halves_up(done: int, total: int, expected: int) -> None:
    tasks = [_task(i, "09:00", completed=i < done) for i in range(total)]
    assert compute_stats(tasks, NOW).productivity == expected
