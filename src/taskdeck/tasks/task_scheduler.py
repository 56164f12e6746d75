# src/taskdeck/tasks/task_scheduler.py

from __future__ import annotations

"""
Deadline reminder scheduler.

A small polling loop that, once per interval:
- reads the current task snapshot (read-only),
- computes whole minutes until each pending task's deadline,
- notifies when that value is exactly 30 or exactly 5.

The check is a point sample per tick. If a tick lands past the exact minute
(timer drift, a slow notifier) that threshold is never reported for that task;
if two ticks land on the same minute, the reminder fires twice. Pass
`dedupe=True` to suppress repeats within the process lifetime.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from ..core.ports import Notifier
from .task_models import Task, TaskId
from .task_store import TaskStore
from .task_views import minutes_until

logger = logging.getLogger(__name__)


class ReminderThreshold(IntEnum):
    THIRTY_MINUTES = 30
    FIVE_MINUTES = 5


@dataclass(slots=True, frozen=True)
class Reminder:
    task: Task
    threshold: ReminderThreshold
    text: str


def reminder_text(task: Task, threshold: ReminderThreshold) -> str:
    if threshold == ReminderThreshold.THIRTY_MINUTES:
        return f'⏰ Reminder: "{task.title}" deadline in 30 minutes!'
    return f'⚠️ Hurry! "{task.title}" deadline in 5 minutes!'


def scan_reminders(tasks: Iterable[Task], now: datetime) -> list[Reminder]:
    out: list[Reminder] = []
    for task in tasks:
        if task.completed:
            continue
        deadline = task.deadline_at()
        if deadline is None:
            continue
        minutes = minutes_until(deadline, now)
        for threshold in ReminderThreshold:
            if minutes == threshold:
                out.append(Reminder(task=task, threshold=threshold, text=reminder_text(task, threshold)))
    return out


@dataclass(slots=True)
class ReminderLog:
    """Process-lifetime memory of (task id, threshold) pairs already notified."""

    seen: set[tuple[TaskId, int]] = field(default_factory=set)

    def first_time(self, reminder: Reminder) -> bool:
        key = (reminder.task.id, int(reminder.threshold))
        if key in self.seen:
            return False
        self.seen.add(key)
        return True


async def run_reminder_tick(
    store: TaskStore,
    notifier: Notifier,
    *,
    now: datetime | None = None,
    log: ReminderLog | None = None,
) -> list[Reminder]:
    """Scan once and notify. Returns the reminders that were sent."""
    if now is None:
        now = datetime.now().astimezone()

    sent: list[Reminder] = []
    for reminder in scan_reminders(store.tasks, now):
        if log is not None and not log.first_time(reminder):
            continue
        try:
            await notifier.notify(reminder.text)
        except Exception:
            logger.exception(
                "Reminder notify failed task_id=%s threshold=%s",
                reminder.task.id,
                int(reminder.threshold),
            )
            continue
        logger.info("Reminder sent task_id=%s threshold=%s", reminder.task.id, int(reminder.threshold))
        sent.append(reminder)
    return sent


async def run_reminder_scheduler(
    store: TaskStore,
    notifier: Notifier,
    *,
    interval_seconds: float = 60.0,
    dedupe: bool = False,
    clock: Callable[[], datetime] | None = None,
) -> None:
    """
    Polling loop; runs until cancelled.

    The store is only read, never mutated. A failing tick is logged and the
    loop keeps going.
    """
    sleep_s = max(0.01, float(interval_seconds))
    log = ReminderLog() if dedupe else None
    now_fn = clock or (lambda: datetime.now().astimezone())

    logger.info("Reminder scheduler started interval=%.1fs dedupe=%s", sleep_s, dedupe)
    while True:
        await asyncio.sleep(sleep_s)
        try:
            await run_reminder_tick(store, notifier, now=now_fn(), log=log)
        except Exception:
            logger.exception("Reminder tick failed")
