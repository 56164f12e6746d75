# src/taskdeck/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskApp, loads the task list, then runs:
- the deadline reminder scheduler as a background asyncio task (optional),
- the console REPL in the foreground (optional; otherwise wait for a signal).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_app
from ..config import Settings, get_settings
from ..connectors.console_connector import ConsolePrompter, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_api import RemoteTaskClient
from ..tasks.task_scheduler import run_reminder_scheduler

logger = logging.getLogger(__name__)


async def _wait_for_signal() -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, stop.set)
    await stop.wait()


async def run(settings: Settings) -> None:
    async with RemoteTaskClient(
        settings.api_base_url,
        timeout_seconds=settings.http_timeout_seconds,
    ) as remote:
        prompter = ConsolePrompter()
        app = create_app(prompter=prompter, settings=settings, remote=remote)

        if not await app.store.refresh():
            await prompter.notify(f"Could not load tasks from {settings.api_base_url} (see log).")

        reminders: asyncio.Task[None] | None = None
        if settings.reminders_enabled:
            reminders = asyncio.create_task(
                run_reminder_scheduler(
                    app.store,
                    prompter,
                    interval_seconds=settings.reminder_interval_seconds,
                    dedupe=settings.reminder_dedupe,
                ),
                name="reminder-scheduler",
            )

        try:
            if settings.console_enabled:
                await run_console_loop(app)
            else:
                logger.info("Console disabled. Running reminders only. Press Ctrl+C to stop.")
                await _wait_for_signal()
        finally:
            if reminders is not None:
                reminders.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await reminders


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, exiting.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
