# src/taskdeck/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Awaitable, Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.state import (
    ActiveView,
    CompactViewToggled,
    DraftChanged,
    DraftForm,
    PriorityFilterChanged,
    SearchChanged,
    SortChanged,
    StatusFilterChanged,
    ViewChanged,
)
from ..tasks.task_actions import BatchResult
from ..tasks.task_models import Priority, Task, parse_deadline
from ..tasks.task_views import PriorityFilter, SortKey, StatusFilter
from .render import render_about, render_stats, render_summary, render_task_list

if TYPE_CHECKING:
    from .bootstrap import TaskApp

CommandHandler = Callable[["TaskApp", list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, app: TaskApp, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            # Unbalanced quotes (e.g. an apostrophe in a title): plain whitespace split.
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return await handler(app, parts[1:])

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _now() -> datetime:
    return datetime.now().astimezone()


def _choice(raw: str, enum_cls):
    """Case-insensitive enum lookup by value; None when not a member."""
    for member in enum_cls:
        if member.value.lower() == raw.lower():
            return member
    return None


def _resolve(app: TaskApp, args: list[str]) -> Task | str:
    """Map a 1-based row number in the visible list to a task, or return an error message."""
    if not args:
        return "Missing task number. Use /list to see numbers."
    try:
        n = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}"
    visible = app.store.visible_tasks()
    if n < 1 or n > len(visible):
        return f"No task #{n} in the current list."
    return visible[n - 1]


def _listing(app: TaskApp) -> str:
    state = app.store.state
    return (
        render_summary(state, app.store.stats())
        + "\n"
        + render_task_list(app.store.visible_tasks(), _now(), compact=state.compact_view)
    )


def _batch_summary(verb: str, result: BatchResult) -> str:
    msg = f"{verb} {len(result.succeeded)} task(s)."
    if result.aborted:
        msg += f" Stopped at a failure; {len(result.skipped)} not attempted."
    return msg


async def cmd_help(app: TaskApp, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(app: TaskApp, args: list[str]) -> str:
    app.store.dispatch(ViewChanged(ActiveView.TASKS))
    return _listing(app)


async def cmd_refresh(app: TaskApp, args: list[str]) -> str:
    if not await app.actions.refresh():
        return "Refresh failed (see log)."
    return _listing(app)


_ADD_OPTIONS = ("-p", "--priority", "-d", "--deadline", "-f", "--file")


def _option_pairs(tokens: list[str]) -> list[tuple[str, str]] | None:
    """`tokens` as (flag, value) pairs, or None if they are not exactly that."""
    if len(tokens) % 2:
        return None
    pairs = list(zip(tokens[::2], tokens[1::2]))
    if any(flag not in _ADD_OPTIONS for flag, _ in pairs):
        return None
    return pairs


def _split_add_args(args: list[str]) -> tuple[list[str], list[tuple[str, str]]] | str:
    """
    Separate the title from the options.

    Options are only read after a `--` separator, or from a trailing run of
    flag/value pairs; anything else is title text ("Review -d flag handling").
    """
    if "--" in args:
        cut = args.index("--")
        pairs = _option_pairs(args[cut + 1 :])
        if pairs is None:
            return "Options after -- must be: -p <priority> | -d <deadline> | -f <file>."
        return args[:cut], pairs

    for start in range(len(args) + 1):
        pairs = _option_pairs(args[start:])
        if pairs is not None:
            return args[:start], pairs
    return args, []


def _parse_add_args(args: list[str]) -> DraftForm | str:
    split = _split_add_args(args)
    if isinstance(split, str):
        return split
    title_parts, pairs = split

    priority = Priority.MEDIUM
    deadline = ""
    attachment_path: str | None = None

    for flag, value in pairs:
        if flag in ("-p", "--priority"):
            chosen = _choice(value, Priority)
            if chosen is None:
                return "Priority must be one of: High, Medium, Low."
            priority = chosen
        elif flag in ("-d", "--deadline"):
            if parse_deadline(value) is None:
                return "Deadline must be an ISO date-time, e.g. 2025-05-01T14:30."
            deadline = value
        else:
            attachment_path = value

    return DraftForm(
        title=" ".join(title_parts),
        priority=priority,
        deadline=deadline,
        attachment_path=attachment_path,
    )


async def add_from_form(app: TaskApp, form: DraftForm) -> str:
    """Put `form` into the draft and run Add. Shared by /add and plain-text input."""
    app.store.dispatch(DraftChanged(form))
    created = await app.actions.add()
    if created is None:
        return "Task not added."
    return f"Added: {created.title}\n" + _listing(app)


async def cmd_add(app: TaskApp, args: list[str]) -> str:
    """
    /add <title> [-p High|Medium|Low] [-d 2025-05-01T14:30] [-f path]
    /add <title> -- [options]
    """
    form = _parse_add_args(args)
    if isinstance(form, str):
        return form
    return await add_from_form(app, form)


async def cmd_done(app: TaskApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if isinstance(task, str):
        return task
    if not await app.actions.toggle(task):
        return "Update failed (see log)."
    return _listing(app)


async def cmd_edit(app: TaskApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if isinstance(task, str):
        return task
    if not await app.actions.edit_title(task):
        return "Title unchanged."
    return _listing(app)


async def cmd_rm(app: TaskApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if isinstance(task, str):
        return task
    if not await app.actions.delete(task):
        return "Task not deleted."
    return f"Deleted: {task.title}\n" + _listing(app)


async def cmd_search(app: TaskApp, args: list[str]) -> str:
    app.store.dispatch(SearchChanged(" ".join(args)))
    return _listing(app)


async def cmd_status(app: TaskApp, args: list[str]) -> str:
    value = _choice(args[0], StatusFilter) if args else None
    if value is None:
        return "Usage: /status All|Completed|Pending"
    app.store.dispatch(StatusFilterChanged(value))
    return _listing(app)


async def cmd_priority(app: TaskApp, args: list[str]) -> str:
    value = _choice(args[0], PriorityFilter) if args else None
    if value is None:
        return "Usage: /priority All|High|Medium|Low"
    app.store.dispatch(PriorityFilterChanged(value))
    return _listing(app)


async def cmd_sort(app: TaskApp, args: list[str]) -> str:
    value = _choice(args[0], SortKey) if args else None
    if value is None:
        return "Usage: /sort Newest|Oldest|Priority"
    app.store.dispatch(SortChanged(value))
    return _listing(app)


async def cmd_compact(app: TaskApp, args: list[str]) -> str:
    state = app.store.dispatch(CompactViewToggled())
    return f"Compact view {'ON' if state.compact_view else 'OFF'}.\n" + _listing(app)


async def cmd_stats(app: TaskApp, args: list[str]) -> str:
    app.store.dispatch(ViewChanged(ActiveView.ANALYTICS))
    return render_stats(app.store.stats())


async def cmd_about(app: TaskApp, args: list[str]) -> str:
    app.store.dispatch(ViewChanged(ActiveView.ABOUT))
    return render_about(app.settings.api_base_url)


async def cmd_markall(app: TaskApp, args: list[str]) -> str:
    sub = args[0].lower() if args else ""
    if sub in ("done", "completed"):
        value = True
    elif sub in ("pending", "undone"):
        value = False
    else:
        return "Usage: /markall done|pending"

    result = await app.actions.mark_all(value)
    if result is None:
        return "Nothing changed."
    return _batch_summary("Marked", result) + "\n" + _listing(app)


async def cmd_clear(app: TaskApp, args: list[str]) -> str:
    result = await app.actions.clear_completed()
    if result is None:
        return "Nothing cleared."
    return _batch_summary("Cleared", result) + "\n" + _listing(app)


async def cmd_export(app: TaskApp, args: list[str]) -> str:
    target = Path(args[0]) if args else app.settings.export_path
    try:
        path = app.actions.export(target)
    except OSError as e:
        logger.exception("Export failed path=%s", target)
        return f"Export failed: {e}"
    return f"Exported {len(app.store.tasks)} tasks to {path}"


async def cmd_save(app: TaskApp, args: list[str]) -> str:
    task = _resolve(app, args)
    if isinstance(task, str):
        return task
    directory = args[1] if len(args) > 1 else "."
    try:
        path = app.actions.save_attachment(task, directory)
    except (OSError, ValueError) as e:
        logger.exception("Saving attachment failed task_id=%s", task.id)
        return f"Could not save attachment: {e}"
    if path is None:
        return "This task has no attachment."
    return f"Saved attachment to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the filtered, sorted task list.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [-p High|Medium|Low] [-d <deadline>] [-f <file>] (or <title> -- <options>).",
    aliases=["a"],
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Edit a title: /edit <n>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["delete", "del"])
registry.register("search", cmd_search, help_text="Filter by title text: /search [text].")
registry.register("status", cmd_status, help_text="Status filter: /status All|Completed|Pending.")
registry.register("priority", cmd_priority, help_text="Priority filter: /priority All|High|Medium|Low.")
registry.register("sort", cmd_sort, help_text="Sort order: /sort Newest|Oldest|Priority.")
registry.register("compact", cmd_compact, help_text="Toggle compact view.")
registry.register("stats", cmd_stats, help_text="Show analytics.", aliases=["analytics"])
registry.register("about", cmd_about, help_text="About this client.")
registry.register("markall", cmd_markall, help_text="Bulk update: /markall done|pending.")
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register("export", cmd_export, help_text="Export tasks as JSON: /export [path].")
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the backend.")
registry.register("save", cmd_save, help_text="Save a task's attachment: /save <n> [dir].")
