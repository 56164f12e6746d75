# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task services.

Services depend on Protocols instead of concrete implementations, so the
console, the HTTP backend and the clock can be swapped for fakes in tests.
"""

from typing import Protocol

from ..tasks.task_models import Task, TaskDraft, TaskId


class TaskRemote(Protocol):
    """The remote task collection (see tasks.task_api.RemoteTaskClient)."""

    async def list_tasks(self) -> list[Task]: ...
    async def create(self, draft: TaskDraft) -> Task: ...
    async def replace(self, task_id: TaskId, task: Task) -> Task: ...
    async def remove(self, task_id: TaskId) -> None: ...


class Notifier(Protocol):
    """One-way user-visible message (reminders, validation messages)."""

    async def notify(self, text: str) -> None: ...


class Prompter(Notifier, Protocol):
    """
    Interactive user channel used by the mutation services.

    - confirm: blocks a destructive action until the user answers
    - prompt: asks for a value; None means the user cancelled
    """

    async def confirm(self, message: str) -> bool: ...
    async def prompt(self, message: str, default: str = "") -> str | None: ...
