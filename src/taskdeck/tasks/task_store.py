# src/taskdeck/tasks/task_store.py

from __future__ import annotations

import logging

from ..core.ports import TaskRemote
from ..core.state import Action, AppState, TasksLoaded, update
from ..errors import TaskDeckError
from .task_models import Task, TaskId
from .task_views import TaskStats, compute_stats, project_tasks

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory snapshot of the remote collection plus the current view state.

    The task list is only ever replaced wholesale from a fresh list call
    (`refresh`); it is never patched locally. The state object itself is
    immutable and swapped on every `dispatch`.
    """

    def __init__(self, remote: TaskRemote, state: AppState | None = None) -> None:
        self._remote = remote
        self._state = state or AppState()

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    def dispatch(self, action: Action) -> AppState:
        self._state = update(self._state, action)
        return self._state

    async def refresh(self) -> bool:
        """
        Replace the snapshot from a fresh list call.

        On failure the previous snapshot is kept and False is returned.
        """
        try:
            tasks = await self._remote.list_tasks()
        except TaskDeckError:
            logger.exception("Error fetching tasks")
            return False
        self.dispatch(TasksLoaded(tuple(tasks)))
        logger.debug("TaskStore refreshed total=%d", len(tasks))
        return True

    # ---- derived views ----

    def find(self, task_id: TaskId) -> Task | None:
        for t in self._state.tasks:
            if t.id == task_id:
                return t
        return None

    def visible_tasks(self) -> list[Task]:
        s = self._state
        return project_tasks(s.tasks, s.search, s.status_filter, s.priority_filter, s.sort_key)

    def stats(self) -> TaskStats:
        return compute_stats(self._state.tasks)
