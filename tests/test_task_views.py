# tests/test_task_views.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from taskdeck.tasks.task_views import (
    DeadlineKind,
    PriorityFilter,
    SortKey,
    StatusFilter,
    classify_deadline,
    compute_stats,
    filter_tasks,
    project_tasks,
    sort_tasks,
)

from .fakes import make_task

NOW = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


def _deadline(minutes: float) -> str:
    return (NOW + timedelta(minutes=minutes)).isoformat()


def test_stats_counts_and_unknown_priority() -> None:
    tasks = [
        make_task("t1", priority="High", completed=True),
        make_task("t2", priority="Medium"),
        make_task("t3", priority="Low"),
        make_task("t4", priority="Urgent"),
        make_task("t5", priority=None, completed=True),
    ]
    stats = compute_stats(tasks)

    assert stats.total == 5
    assert stats.completed == 2
    assert stats.pending == 3
    assert stats.completed + stats.pending == stats.total
    assert (stats.high, stats.medium, stats.low) == (1, 1, 1)
    assert stats.high + stats.medium + stats.low < stats.total
    assert abs(stats.completion_rate - 0.4) < 1e-9


def test_stats_empty() -> None:
    stats = compute_stats([])
    assert stats.total == stats.completed == stats.pending == 0
    assert stats.completion_rate == 0.0


def test_newest_and_oldest_are_reverse_orders() -> None:
    tasks = [
        make_task("t1", created_at="2025-01-02T10:00:00"),
        make_task("t2", created_at="2025-01-01T09:00:00"),
        make_task("t3", created_at="2025-01-03T08:00:00"),
    ]
    newest = [t.id for t in sort_tasks(tasks, SortKey.NEWEST)]
    oldest = [t.id for t in sort_tasks(tasks, SortKey.OLDEST)]

    assert newest == ["t3", "t1", "t2"]
    assert oldest == list(reversed(newest))


def test_priority_sort_groups_high_medium_low_and_is_stable() -> None:
    tasks = [
        make_task("t1", priority="Low"),
        make_task("t2", priority="High"),
        make_task("t3", priority="Medium"),
        make_task("t4", priority="High"),
        make_task("t5", priority=None),
        make_task("t6", priority="Low"),
    ]
    ordered = [t.id for t in sort_tasks(tasks, SortKey.PRIORITY)]
    assert ordered == ["t2", "t4", "t3", "t1", "t6", "t5"]


def test_search_is_case_insensitive_substring() -> None:
    tasks = [make_task("t1", "Finish Report"), make_task("t2", "Groceries")]

    for term in ("finish", "REPORT", "sh rep"):
        assert [t.id for t in filter_tasks(tasks, term)] == ["t1"]

    assert len(filter_tasks(tasks, "   ")) == 2
    assert filter_tasks(tasks, "nothing") == []


def test_status_and_priority_filters() -> None:
    tasks = [
        make_task("t1", priority="High", completed=True),
        make_task("t2", priority="High"),
        make_task("t3", priority="Low"),
    ]
    assert [t.id for t in filter_tasks(tasks, status=StatusFilter.COMPLETED)] == ["t1"]
    assert [t.id for t in filter_tasks(tasks, status=StatusFilter.PENDING)] == ["t2", "t3"]
    assert [t.id for t in filter_tasks(tasks, priority=PriorityFilter.HIGH)] == ["t1", "t2"]
    assert [
        t.id
        for t in filter_tasks(tasks, status=StatusFilter.PENDING, priority=PriorityFilter.HIGH)
    ] == ["t2"]


def test_project_filters_then_sorts() -> None:
    tasks = [
        make_task("t1", "report A", created_at="2025-01-01"),
        make_task("t2", "report B", created_at="2025-01-03"),
        make_task("t3", "other", created_at="2025-01-02"),
    ]
    out = project_tasks(tasks, "report", sort_key=SortKey.NEWEST)
    assert [t.id for t in out] == ["t2", "t1"]


def test_deadline_due_soon() -> None:
    status = classify_deadline(make_task("t1", deadline=_deadline(45)), NOW)
    assert status is not None
    assert status.kind == DeadlineKind.DUE_SOON
    assert status.minutes_left == 45
    assert status.text == "Due Soon (45 min)"


def test_deadline_boundary_sixty_minutes_is_due_soon() -> None:
    status = classify_deadline(make_task("t1", deadline=_deadline(60)), NOW)
    assert status is not None and status.kind == DeadlineKind.DUE_SOON

    later = classify_deadline(make_task("t1", deadline=_deadline(61)), NOW)
    assert later is not None and later.kind == DeadlineKind.SCHEDULED


def test_deadline_overdue_and_completed() -> None:
    overdue = classify_deadline(make_task("t1", deadline=_deadline(-10)), NOW)
    assert overdue is not None and overdue.kind == DeadlineKind.OVERDUE
    assert overdue.text == "Overdue"

    done = classify_deadline(make_task("t2", deadline=_deadline(-10), completed=True), NOW)
    assert done is not None and done.kind == DeadlineKind.COMPLETED
    assert done.text == "Completed"


def test_deadline_missing_or_unparseable() -> None:
    assert classify_deadline(make_task("t1"), NOW) is None
    assert classify_deadline(make_task("t2", deadline="next tuesday"), NOW) is None
