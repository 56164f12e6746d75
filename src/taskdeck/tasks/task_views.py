# src/taskdeck/tasks/task_views.py

"""
Derived views over the task snapshot.

Everything here is a pure function of its arguments: no I/O, no caching.
Deadline status depends on `now`, so callers recompute it on every render/tick.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from .task_models import PRIORITY_RANK, Priority, Task


class StatusFilter(StrEnum):
    ALL = "All"
    COMPLETED = "Completed"
    PENDING = "Pending"


class PriorityFilter(StrEnum):
    ALL = "All"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class SortKey(StrEnum):
    NEWEST = "Newest"
    OLDEST = "Oldest"
    PRIORITY = "Priority"


class DeadlineKind(StrEnum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    SCHEDULED = "scheduled"


DUE_SOON_MINUTES = 60


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int
    high: int
    medium: int
    low: int

    @property
    def completion_rate(self) -> float:
        return self.completed / self.total if self.total else 0.0


@dataclass(slots=True, frozen=True)
class DeadlineStatus:
    kind: DeadlineKind
    text: str
    tone: str
    minutes_left: int | None = None


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    """Counts over the full, unfiltered snapshot."""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        high=sum(1 for t in tasks if t.priority == Priority.HIGH.value),
        medium=sum(1 for t in tasks if t.priority == Priority.MEDIUM.value),
        low=sum(1 for t in tasks if t.priority == Priority.LOW.value),
    )


def filter_tasks(
    tasks: Iterable[Task],
    search: str = "",
    status: StatusFilter = StatusFilter.ALL,
    priority: PriorityFilter = PriorityFilter.ALL,
) -> list[Task]:
    out = list(tasks)

    if search.strip():
        needle = search.lower()
        out = [t for t in out if needle in (t.title or "").lower()]

    if status == StatusFilter.COMPLETED:
        out = [t for t in out if t.completed]
    elif status == StatusFilter.PENDING:
        out = [t for t in out if not t.completed]

    if priority != PriorityFilter.ALL:
        out = [t for t in out if t.priority == priority.value]

    return out


def sort_tasks(tasks: Iterable[Task], key: SortKey = SortKey.NEWEST) -> list[Task]:
    """Stable sort; ties keep their input order."""
    items = list(tasks)
    if key == SortKey.NEWEST:
        return sorted(items, key=lambda t: t.created_at or "", reverse=True)
    if key == SortKey.OLDEST:
        return sorted(items, key=lambda t: t.created_at or "")
    if key == SortKey.PRIORITY:
        return sorted(items, key=lambda t: PRIORITY_RANK.get(t.priority or "", 0), reverse=True)
    return items


def project_tasks(
    tasks: Iterable[Task],
    search: str = "",
    status: StatusFilter = StatusFilter.ALL,
    priority: PriorityFilter = PriorityFilter.ALL,
    sort_key: SortKey = SortKey.NEWEST,
) -> list[Task]:
    return sort_tasks(filter_tasks(tasks, search, status, priority), sort_key)


def minutes_until(deadline: datetime, now: datetime) -> int:
    """Whole minutes until the deadline, floored (so any past instant is negative)."""
    if now.tzinfo is None:
        now = now.astimezone()
    return math.floor((deadline - now).total_seconds() / 60)


def format_deadline(deadline: datetime) -> str:
    return deadline.astimezone().strftime("%Y-%m-%d %H:%M")


def classify_deadline(task: Task, now: datetime) -> DeadlineStatus | None:
    deadline = task.deadline_at()
    if deadline is None:
        return None

    if task.completed:
        return DeadlineStatus(DeadlineKind.COMPLETED, "Completed", "green")

    minutes = minutes_until(deadline, now)
    if minutes < 0:
        return DeadlineStatus(DeadlineKind.OVERDUE, "Overdue", "red")
    if minutes <= DUE_SOON_MINUTES:
        return DeadlineStatus(
            DeadlineKind.DUE_SOON, f"Due Soon ({minutes} min)", "orange", minutes_left=minutes
        )
    return DeadlineStatus(DeadlineKind.SCHEDULED, format_deadline(deadline), "blue")


def display_priority(task: Task) -> str:
    return task.priority or Priority.MEDIUM.value


def priority_tone(priority: str | None) -> str:
    if priority == Priority.HIGH.value:
        return "red"
    if priority == Priority.MEDIUM.value:
        return "orange"
    return "green"
