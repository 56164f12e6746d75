# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ..cli.commands import add_from_form
from ..cli.commands import registry as command_registry
from ..core.state import DraftForm

if TYPE_CHECKING:
    from ..cli.bootstrap import TaskApp

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
LineWriter = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


async def read_line(prompt: str) -> str:
    """
    input() on a daemon thread, so a pending read never keeps the process alive
    and the event loop (reminders, HTTP) keeps running meanwhile.

    Raises EOFError at end of input.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(result: str | None, error: Exception | None) -> None:
        if fut.done():
            return
        if error is not None:
            fut.set_exception(error)
        else:
            fut.set_result(result or "")

    def _worker() -> None:
        try:
            line = input(prompt)
        except Exception as e:
            loop.call_soon_threadsafe(_deliver, None, e)
        else:
            loop.call_soon_threadsafe(_deliver, line, None)

    threading.Thread(target=_worker, name="console-input", daemon=True).start()
    return await fut


def _print_line(text: str) -> None:
    print(text, flush=True)


class ConsolePrompter:
    """Prompter/Notifier port backed by the terminal."""

    def __init__(self, reader: LineReader = read_line, writer: LineWriter = _print_line) -> None:
        self._read = reader
        self._write = writer

    async def notify(self, text: str) -> None:
        self._write(f"[{_ts_local()}] {text}")

    async def confirm(self, message: str) -> bool:
        try:
            answer = await self._read(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    async def prompt(self, message: str, default: str = "") -> str | None:
        """Returns the input as typed (blank means "no change"); EOF cancels (None)."""
        try:
            answer = await self._read(f"{message} (current: {default}) ")
        except EOFError:
            return None
        return answer


async def run_console_loop(app: TaskApp, *, reader: LineReader = read_line) -> None:
    logger.info("Console connector started.")
    await app.prompter.notify(
        "[CONSOLE] Type a title to add a task, /help for commands, /exit to quit."
    )
    await app.prompter.notify(await command_registry.handle(app, "/list") or "")

    while True:
        try:
            user_input = (await reader(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            if user_input.startswith("/"):
                response = await command_registry.handle(app, user_input)
            else:
                # Plain text is a title, taken verbatim.
                response = await add_from_form(app, DraftForm(title=user_input))
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            await app.prompter.notify(response)

    logger.info("Console connector finished.")
