# src/taskdeck/tasks/task_actions.py

"""
User-initiated mutations.

Every network-calling path:
- calls the remote collection,
- on success refreshes the store from a fresh list call,
- on failure logs the error and aborts (no retry, no rollback, no re-raise).

State is never changed optimistically; the only consistency mechanism is
"refetch the whole collection after a successful mutation".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..core.ports import Prompter, TaskRemote
from ..core.state import DraftReset
from ..errors import TaskDeckError, ValidationError
from .attachments import AttachmentEncoder, decode_data_url, encode_data_url, load_attachment
from .task_models import Attachment, Task, TaskDraft, TaskId
from .task_store import TaskStore

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "tasks-export.json"


@dataclass(slots=True, frozen=True)
class BatchItemResult:
    task_id: TaskId
    ok: bool
    error: str | None = None


@dataclass(slots=True)
class BatchResult:
    """
    Outcome of a sequential bulk operation.

    A failure on one item stops the loop: later items are listed in `skipped`
    and effects already committed on the backend are kept.
    """

    items: list[BatchItemResult] = field(default_factory=list)
    skipped: list[TaskId] = field(default_factory=list)

    @property
    def succeeded(self) -> list[TaskId]:
        return [i.task_id for i in self.items if i.ok]

    @property
    def failed(self) -> list[TaskId]:
        return [i.task_id for i in self.items if not i.ok]

    @property
    def aborted(self) -> bool:
        return bool(self.failed)


class TaskActions:
    def __init__(
        self,
        remote: TaskRemote,
        store: TaskStore,
        prompter: Prompter,
        *,
        encoder: AttachmentEncoder = encode_data_url,
    ) -> None:
        self._remote = remote
        self._store = store
        self._prompter = prompter
        self._encoder = encoder

    async def refresh(self) -> bool:
        return await self._store.refresh()

    # ---- single-task operations ----

    async def add(self) -> Task | None:
        """Create a task from the draft form in the current state."""
        form = self._store.state.draft

        try:
            draft = TaskDraft.build(form.title, priority=form.priority, deadline=form.deadline)
        except ValidationError as e:
            await self._prompter.notify(str(e))
            return None

        if form.attachment_path:
            try:
                attachment = load_attachment(form.attachment_path, self._encoder)
            except OSError as e:
                logger.exception("Error reading attachment %s", form.attachment_path)
                await self._prompter.notify(f"Could not read attachment: {e}")
                return None
            draft = TaskDraft(
                title=draft.title,
                priority=draft.priority,
                deadline=draft.deadline,
                attachment=attachment,
            )

        try:
            created = await self._remote.create(draft)
        except TaskDeckError:
            logger.exception("Error adding task")
            return None

        self._store.dispatch(DraftReset())
        await self._store.refresh()
        return created

    async def toggle(self, task: Task) -> bool:
        return await self._replace(task, task.with_changes(completed=not task.completed), "toggling")

    async def edit_title(self, task: Task) -> bool:
        new_title = await self._prompter.prompt("Edit task title:", task.title)
        if not new_title or not new_title.strip():
            return False
        return await self._replace(task, task.with_changes(title=new_title.strip()), "editing")

    async def delete(self, task: Task) -> bool:
        if not await self._prompter.confirm("Delete this task?"):
            return False
        try:
            await self._remote.remove(task.id)
        except TaskDeckError:
            logger.exception("Error deleting task id=%s", task.id)
            return False
        await self._store.refresh()
        return True

    async def _replace(self, original: Task, updated: Task, verb: str) -> bool:
        try:
            await self._remote.replace(original.id, updated)
        except TaskDeckError:
            logger.exception("Error %s task id=%s", verb, original.id)
            return False
        await self._store.refresh()
        return True

    # ---- bulk operations ----

    async def mark_all(self, value: bool) -> BatchResult | None:
        """Set `completed=value` on every task that differs. None if nothing to do or declined."""
        targets = [t for t in self._store.tasks if t.completed != value]
        if not targets:
            return None

        label = "completed" if value else "pending"
        if not await self._prompter.confirm(f"Mark {len(targets)} tasks as {label}?"):
            return None

        result = BatchResult()
        for i, t in enumerate(targets):
            try:
                await self._remote.replace(t.id, t.with_changes(completed=value))
            except TaskDeckError as e:
                logger.exception("Error marking task id=%s as %s", t.id, label)
                result.items.append(BatchItemResult(t.id, ok=False, error=str(e)))
                result.skipped.extend(x.id for x in targets[i + 1 :])
                break
            result.items.append(BatchItemResult(t.id, ok=True))

        await self._store.refresh()
        return result

    async def clear_completed(self) -> BatchResult | None:
        targets = [t for t in self._store.tasks if t.completed]
        if not targets:
            await self._prompter.notify("No completed tasks to clear.")
            return None

        if not await self._prompter.confirm(f"Clear {len(targets)} completed tasks?"):
            return None

        result = BatchResult()
        for i, t in enumerate(targets):
            try:
                await self._remote.remove(t.id)
            except TaskDeckError as e:
                logger.exception("Error clearing completed task id=%s", t.id)
                result.items.append(BatchItemResult(t.id, ok=False, error=str(e)))
                result.skipped.extend(x.id for x in targets[i + 1 :])
                break
            result.items.append(BatchItemResult(t.id, ok=True))

        await self._store.refresh()
        return result

    # ---- local-only operations ----

    def export(self, path: str | Path = EXPORT_FILENAME) -> Path:
        """Write the in-memory snapshot (not a fresh fetch) as pretty-printed JSON."""
        out = Path(path).expanduser()
        if out.is_dir():
            out = out / EXPORT_FILENAME
        out.parent.mkdir(parents=True, exist_ok=True)
        payload = [t.to_dict() for t in self._store.tasks]
        out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
        logger.info("Exported %d tasks to %s", len(payload), out)
        return out

    def save_attachment(self, task: Task, directory: str | Path = ".") -> Path | None:
        """Decode a task's attachment into `directory`. None when the task has none."""
        attachment: Attachment | None = task.attachment
        if attachment is None or not attachment.data:
            return None
        data = decode_data_url(attachment.data)
        target_dir = Path(directory).expanduser()
        target_dir.mkdir(parents=True, exist_ok=True)
        out = target_dir / (Path(attachment.name).name or f"attachment-{task.id}")
        out.write_bytes(data)
        logger.info("Saved attachment of task id=%s to %s", task.id, out)
        return out
