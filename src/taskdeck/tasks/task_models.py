# src/taskdeck/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from ..errors import ValidationError

logger = logging.getLogger(__name__)

TaskId = str | int

# Wire fields owned by Task; anything else the backend sends is kept in `extra`.
_KNOWN_FIELDS = ("id", "title", "priority", "completed", "deadline", "created_at", "attachment")


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def from_raw(cls, raw: str | None) -> Priority | None:
        """Strict lookup: None for missing or unknown values."""
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


PRIORITY_RANK: dict[str, int] = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}


def parse_deadline(raw: str | None) -> datetime | None:
    """
    Parse an ISO-8601 deadline into an aware datetime.

    Naive values (the usual `2025-05-01T14:30` shape) are taken as local time.
    """
    if not raw:
        return None
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable deadline %r", raw)
        return None
    return dt.astimezone() if dt.tzinfo is None else dt


@dataclass(slots=True, frozen=True)
class Attachment:
    name: str
    type: str
    data: str

    @classmethod
    def from_dict(cls, raw: Any) -> Attachment | None:
        if not isinstance(raw, dict):
            return None
        return cls(
            name=str(raw.get("name") or ""),
            type=str(raw.get("type") or ""),
            data=str(raw.get("data") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type, "data": self.data}


@dataclass(slots=True, frozen=True)
class Task:
    id: TaskId
    title: str
    priority: str | None = Priority.MEDIUM.value
    completed: bool = False
    deadline: str | None = None
    created_at: str | None = None
    attachment: Attachment | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        if "id" not in raw:
            raise ValueError("task record has no id")
        priority = raw.get("priority")
        return cls(
            id=raw["id"],
            title=str(raw.get("title") or ""),
            priority=str(priority) if priority is not None else None,
            completed=raw.get("completed") is True,
            deadline=raw.get("deadline") or None,
            created_at=raw.get("created_at"),
            attachment=Attachment.from_dict(raw.get("attachment")),
            extra={k: v for k, v in raw.items() if k not in _KNOWN_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Full record, as sent back on replace and written on export."""
        out: dict[str, Any] = dict(self.extra)
        out.update(
            {
                "id": self.id,
                "title": self.title,
                "priority": self.priority,
                "completed": self.completed,
                "deadline": self.deadline,
            }
        )
        if self.created_at is not None:
            out["created_at"] = self.created_at
        if self.attachment is not None:
            out["attachment"] = self.attachment.to_dict()
        return out

    def with_changes(self, **changes: Any) -> Task:
        return replace(self, **changes)

    def deadline_at(self) -> datetime | None:
        return parse_deadline(self.deadline)


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Create payload. The backend assigns id and created_at."""

    title: str
    priority: Priority = Priority.MEDIUM
    deadline: str | None = None
    attachment: Attachment | None = None

    @classmethod
    def build(
        cls,
        title: str | None,
        *,
        priority: Priority = Priority.MEDIUM,
        deadline: str | None = None,
        attachment: Attachment | None = None,
    ) -> TaskDraft:
        clean = (title or "").strip()
        if not clean:
            raise ValidationError("Please enter a task title!")
        return cls(
            title=clean,
            priority=priority,
            deadline=(deadline or "").strip() or None,
            attachment=attachment,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "priority": self.priority.value,
            "completed": False,
            "deadline": self.deadline,
        }
        if self.attachment is not None:
            out["attachment"] = self.attachment.to_dict()
        return out
