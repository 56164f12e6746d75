# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio

from taskdeck.config import Settings
from taskdeck.tasks.task_actions import TaskActions
from taskdeck.tasks.task_store import TaskStore

from .fakes import FakePrompter, FakeRemote, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings with everything local to the test's tmp dir; no env or .env reads."""
    return Settings(
        app_name="taskdeck-test",
        log_level="DEBUG",
        api_base_url="http://backend.test/api/tasks",
        http_timeout_seconds=0.0,
        reminders_enabled=False,
        reminder_interval_seconds=60.0,
        reminder_dedupe=False,
        console_enabled=False,
        data_dir=tmp_path / "data",
        export_path=tmp_path / "tasks-export.json",
    )


@pytest.fixture()
def remote() -> FakeRemote:
    return FakeRemote(
        [
            make_task("t1", "Write report", priority="High"),
            make_task("t2", "Buy milk", priority="Low", completed=True),
            make_task("t3", "Call bank", priority="Medium", completed=True),
        ]
    )


@pytest.fixture()
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest_asyncio.fixture()
async def store(remote: FakeRemote) -> TaskStore:
    """Store loaded once from the fake backend; the load call is cleared from the log."""
    s = TaskStore(remote)
    await s.refresh()
    remote.calls.clear()
    return s


@pytest.fixture()
def actions(remote: FakeRemote, store: TaskStore, prompter: FakePrompter) -> TaskActions:
    return TaskActions(remote, store, prompter)
