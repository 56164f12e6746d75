# tests/test_task_api.py

from __future__ import annotations

import json

import httpx
import pytest

from taskdeck.errors import ApiError, TransportError, ValidationError
from taskdeck.tasks.task_api import RemoteTaskClient
from taskdeck.tasks.task_models import Priority, Task, TaskDraft

from .fakes import make_task

BASE = "http://backend.test/api/tasks"


def _client(handler) -> RemoteTaskClient:
    return RemoteTaskClient(BASE, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_list_parses_tasks_and_keeps_unknown_fields() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert str(request.url) == BASE
        return httpx.Response(
            200,
            json=[
                {"id": 1, "title": "a", "priority": "High", "completed": True, "owner": "x"},
                {"id": 2, "title": "b", "created_at": "2025-01-01T00:00:00"},
                {"title": "no id"},
            ],
        )

    client = _client(handler)
    tasks = await client.list_tasks()

    assert [t.id for t in tasks] == [1, 2]
    assert tasks[0].completed is True
    assert tasks[0].to_dict()["owner"] == "x"
    assert tasks[1].priority is None
    assert tasks[1].completed is False


@pytest.mark.asyncio
async def test_create_posts_draft_without_id() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append(body)
        return httpx.Response(201, json={**body, "id": "abc", "created_at": "2025-01-01T00:00:00"})

    task = await _client(handler).create(TaskDraft.build(" New ", priority=Priority.LOW))

    assert seen == [{"title": "New", "priority": "Low", "completed": False, "deadline": None}]
    assert task.id == "abc"
    assert task.created_at == "2025-01-01T00:00:00"


@pytest.mark.asyncio
async def test_create_rejected_by_backend_is_validation_error() -> None:
    client = _client(lambda request: httpx.Response(422, json={"error": "bad"}))
    with pytest.raises(ValidationError) as exc:
        await client.create(TaskDraft.build("x"))
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_replace_puts_full_record_to_item_url() -> None:
    task = make_task("t1", "Write", priority="High", completed=True)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=json.loads(request.content))

    updated = await _client(handler).replace("t1", task)

    assert seen[0].method == "PUT"
    assert str(seen[0].url) == f"{BASE}/t1"
    assert json.loads(seen[0].content) == task.to_dict()
    assert updated == task


@pytest.mark.asyncio
async def test_remove_treats_404_as_done_and_500_as_api_error() -> None:
    statuses = iter([204, 404, 500])
    client = _client(lambda request: httpx.Response(next(statuses)))

    await client.remove("t1")
    await client.remove("t1")
    with pytest.raises(ApiError) as exc:
        await client.remove("t1")
    assert exc.value.status_code == 500
    assert exc.value.method == "DELETE"


@pytest.mark.asyncio
async def test_non_2xx_list_is_api_error_and_transport_error() -> None:
    client = _client(lambda request: httpx.Response(503, text="down"))
    with pytest.raises(TransportError) as exc:
        await client.list_tasks()
    assert isinstance(exc.value, ApiError)
    assert exc.value.body == "down"


@pytest.mark.asyncio
async def test_list_with_non_array_body_is_api_error() -> None:
    client = _client(lambda request: httpx.Response(200, json={"data": []}))
    with pytest.raises(ApiError):
        await client.list_tasks()


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportError) as exc:
        await _client(handler).list_tasks()
    assert not isinstance(exc.value, ApiError)
    assert isinstance(exc.value.original_error, httpx.ConnectError)


def test_completed_flag_accepts_only_real_booleans() -> None:
    assert Task.from_dict({"id": 1, "title": "a", "completed": "false"}).completed is False
    assert Task.from_dict({"id": 1, "title": "a", "completed": 1}).completed is False
    assert Task.from_dict({"id": 1, "title": "a", "completed": True}).completed is True
