# src/taskdeck/tasks/task_api.py

"""
Remote task collection client.

Four calls over one REST collection:
- GET    <base>       -> list
- POST   <base>       -> create (backend assigns id, created_at)
- PUT    <base>/<id>  -> full-record replace
- DELETE <base>/<id>  -> remove

No retries: every failure is raised to the caller as a TaskDeckError subclass.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import ApiError, TransportError, ValidationError
from .task_models import Task, TaskDraft, TaskId

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4125/api/tasks"


def _make_timeout(seconds: float | None) -> httpx.Timeout:
    if seconds is None or seconds <= 0:
        return httpx.Timeout(None)
    return httpx.Timeout(seconds, connect=min(seconds, 5.0))


class RemoteTaskClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=_make_timeout(timeout_seconds),
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> RemoteTaskClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    def _item_url(self, task_id: TaskId) -> str:
        return f"{self._base_url}/{task_id}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        json_data: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, json=json_data)
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {url} timed out: {e}", original_error=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}", original_error=e) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, method: str, url: str) -> None:
        if response.is_success:
            return
        raise ApiError(
            f"{method} {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
            method=method,
            url=url,
            body=response.text[:500],
        )

    @staticmethod
    def _json(response: httpx.Response, method: str, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
                method=method,
                url=url,
                body=response.text[:500],
            ) from e

    def _task_from_response(self, response: httpx.Response, method: str, url: str) -> Task:
        data = self._json(response, method, url)
        if not isinstance(data, dict):
            raise ApiError(
                f"{method} {url} returned {type(data).__name__}, expected an object",
                status_code=response.status_code,
                method=method,
                url=url,
            )
        try:
            return Task.from_dict(data)
        except ValueError as e:
            raise ApiError(
                f"{method} {url} returned a malformed task: {e}",
                status_code=response.status_code,
                method=method,
                url=url,
            ) from e

    # ---- public API ----

    async def list_tasks(self) -> list[Task]:
        url = self._base_url
        response = await self._send("GET", url)
        self._raise_for_status(response, "GET", url)

        data = self._json(response, "GET", url)
        if not isinstance(data, list):
            raise ApiError(
                f"GET {url} returned {type(data).__name__}, expected an array",
                status_code=response.status_code,
                method="GET",
                url=url,
            )

        tasks: list[Task] = []
        for raw in data:
            if not isinstance(raw, dict) or "id" not in raw:
                logger.warning("Skipping malformed task record: %r", raw)
                continue
            tasks.append(Task.from_dict(raw))
        return tasks

    async def create(self, draft: TaskDraft) -> Task:
        url = self._base_url
        response = await self._send("POST", url, json_data=draft.to_dict())
        if response.status_code in (400, 422):
            raise ValidationError(
                f"Backend rejected the task: {response.text[:200]}",
                status_code=response.status_code,
            )
        self._raise_for_status(response, "POST", url)
        task = self._task_from_response(response, "POST", url)
        logger.info("Task created id=%s title=%r", task.id, task.title)
        return task

    async def replace(self, task_id: TaskId, task: Task) -> Task:
        """Overwrite the whole record. Partial updates are not supported."""
        url = self._item_url(task_id)
        response = await self._send("PUT", url, json_data=task.to_dict())
        self._raise_for_status(response, "PUT", url)
        if not response.content:
            return task
        return self._task_from_response(response, "PUT", url)

    async def remove(self, task_id: TaskId) -> None:
        url = self._item_url(task_id)
        response = await self._send("DELETE", url)
        if response.status_code == 404:
            logger.debug("DELETE %s: already gone", url)
            return
        self._raise_for_status(response, "DELETE", url)
        logger.info("Task removed id=%s", task_id)
