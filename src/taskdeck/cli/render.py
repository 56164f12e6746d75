# src/taskdeck/cli/render.py

"""Plain-text rendering of the task views for the console."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from ..core.state import AppState
from ..tasks.task_models import Task
from ..tasks.task_views import (
    TaskStats,
    classify_deadline,
    display_priority,
    priority_tone,
)

TONE_MARKS = {
    "red": "!!",
    "orange": "! ",
    "green": "  ",
    "blue": "  ",
    "gray": "  ",
}


def render_task(index: int, task: Task, now: datetime, *, compact: bool = False) -> str:
    check = "[x]" if task.completed else "[ ]"
    priority = display_priority(task)
    mark = TONE_MARKS.get(priority_tone(task.priority), "  ")

    parts = [f"{index:>3}. {check} {mark}{task.title}", f"({priority})"]
    parts.append("Completed" if task.completed else "Pending")

    status = classify_deadline(task, now)
    if status is not None:
        parts.append(f"⏰ {status.text}")

    line = "  ".join(parts)
    if compact:
        return line

    details: list[str] = []
    if task.created_at:
        details.append(f"created {task.created_at}")
    if task.attachment is not None and task.attachment.data:
        details.append(f"📎 {task.attachment.name}")
    if details:
        line += "\n" + " " * 9 + " · ".join(details)
    return line


def render_task_list(tasks: Sequence[Task], now: datetime, *, compact: bool = False) -> str:
    if not tasks:
        return "No tasks found. Try adding one ✨"
    return "\n".join(render_task(i, t, now, compact=compact) for i, t in enumerate(tasks, start=1))


def render_summary(state: AppState, stats: TaskStats) -> str:
    filters = (
        f"search={state.search!r} status={state.status_filter.value} "
        f"priority={state.priority_filter.value} sort={state.sort_key.value}"
    )
    return f"Total: {stats.total}  Done: {stats.completed}  Pending: {stats.pending}  [{filters}]"


def render_stats(stats: TaskStats) -> str:
    return (
        "📊 Analytics\n"
        f"  Total tasks:     {stats.total}\n"
        f"  Completed:       {stats.completed}\n"
        f"  Pending:         {stats.pending}\n"
        f"  Completion rate: {stats.completion_rate:.0%}\n"
        f"  High priority:   {stats.high}\n"
        f"  Medium priority: {stats.medium}\n"
        f"  Low priority:    {stats.low}"
    )


def render_about(base_url: str) -> str:
    return (
        "ℹ️ About\n"
        "  Terminal client for a REST task collection.\n"
        f"  Backend: {base_url}\n"
        "  Supports CRUD, search, filters, sorting, attachments, export and deadline reminders."
    )
