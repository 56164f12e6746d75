# src/taskdeck/core/state.py

"""
Application state.

AppState is an immutable value. Every user action is expressed as an action
object and folded into a new state by `update`; nothing mutates state in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

from ..tasks.task_models import Priority, Task
from ..tasks.task_views import PriorityFilter, SortKey, StatusFilter


class ActiveView(StrEnum):
    TASKS = "Tasks"
    ANALYTICS = "Analytics"
    ABOUT = "About"


@dataclass(slots=True, frozen=True)
class DraftForm:
    """The "new task" inputs."""

    title: str = ""
    priority: Priority = Priority.MEDIUM
    deadline: str = ""
    attachment_path: str | None = None


@dataclass(slots=True, frozen=True)
class AppState:
    tasks: tuple[Task, ...] = ()
    search: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    priority_filter: PriorityFilter = PriorityFilter.ALL
    sort_key: SortKey = SortKey.NEWEST
    compact_view: bool = False
    active_view: ActiveView = ActiveView.TASKS
    draft: DraftForm = field(default_factory=DraftForm)


# ---- actions ----


@dataclass(slots=True, frozen=True)
class TasksLoaded:
    tasks: tuple[Task, ...]


@dataclass(slots=True, frozen=True)
class SearchChanged:
    text: str


@dataclass(slots=True, frozen=True)
class StatusFilterChanged:
    value: StatusFilter


@dataclass(slots=True, frozen=True)
class PriorityFilterChanged:
    value: PriorityFilter


@dataclass(slots=True, frozen=True)
class SortChanged:
    value: SortKey


@dataclass(slots=True, frozen=True)
class CompactViewToggled:
    pass


@dataclass(slots=True, frozen=True)
class ViewChanged:
    value: ActiveView


@dataclass(slots=True, frozen=True)
class DraftChanged:
    draft: DraftForm


@dataclass(slots=True, frozen=True)
class DraftReset:
    pass


Action = (
    TasksLoaded
    | SearchChanged
    | StatusFilterChanged
    | PriorityFilterChanged
    | SortChanged
    | CompactViewToggled
    | ViewChanged
    | DraftChanged
    | DraftReset
)


def update(state: AppState, action: Action) -> AppState:
    match action:
        case TasksLoaded(tasks=tasks):
            return replace(state, tasks=tuple(tasks))
        case SearchChanged(text=text):
            return replace(state, search=text)
        case StatusFilterChanged(value=value):
            return replace(state, status_filter=value)
        case PriorityFilterChanged(value=value):
            return replace(state, priority_filter=value)
        case SortChanged(value=value):
            return replace(state, sort_key=value)
        case CompactViewToggled():
            return replace(state, compact_view=not state.compact_view)
        case ViewChanged(value=value):
            return replace(state, active_view=value)
        case DraftChanged(draft=draft):
            return replace(state, draft=draft)
        case DraftReset():
            return replace(state, draft=DraftForm())
    raise TypeError(f"Unknown action: {action!r}")
