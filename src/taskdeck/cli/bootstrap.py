# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures local (gitignored) directories exist,
- wires the remote client, store, prompter and mutation services together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings, get_settings
from ..core.ports import Prompter, TaskRemote
from ..tasks.attachments import AttachmentEncoder, encode_data_url
from ..tasks.task_actions import TaskActions
from ..tasks.task_api import RemoteTaskClient
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TaskApp:
    settings: Settings
    remote: TaskRemote
    store: TaskStore
    actions: TaskActions
    prompter: Prompter


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_app(
    *,
    prompter: Prompter,
    settings: Settings | None = None,
    remote: TaskRemote | None = None,
    encoder: AttachmentEncoder = encode_data_url,
) -> TaskApp:
    """
    Build a TaskApp.

    settings/remote are injectable so tests can wire fakes; when omitted,
    get_settings() and a RemoteTaskClient for settings.api_base_url are used.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if remote is None:
        remote = RemoteTaskClient(
            settings.api_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )

    store = TaskStore(remote)
    actions = TaskActions(remote, store, prompter, encoder=encoder)
    logger.info("TaskApp ready backend=%s", settings.api_base_url)
    return TaskApp(settings=settings, remote=remote, store=store, actions=actions, prompter=prompter)
