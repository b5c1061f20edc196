"""
Integration fixtures - In-memory subtasks API served over ASGI.

The fake API mirrors the wire contract of the real service:
- GET    /subtasks?list_id=|task_id=&completed_tasks=
- GET    /subtasks/{id}
- POST   /subtasks                 (201, revision starts at 1)
- PATCH  /subtasks/{id}            (body carries revision, 409 when stale)
- DELETE /subtasks/{id}?revision=  (204, 409 when stale)

Errors are returned as {"errors": [...]}; request validation errors keep
FastAPI's 422 shape.
"""

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from src.adapters.auth.static_token import StaticTokenSession
from src.adapters.http.httpx_transport import HttpxTransport
from src.domain.subtasks import SubtasksService

BASE_URL = "http://testserver/api/v1"
CLIENT_ID = "test-client"
ACCESS_TOKEN = "test-token"  # noqa: S105


class SubtaskCreate(BaseModel):
    task_id: int
    title: str = Field(..., max_length=255)
    completed: bool = False


class SubtaskUpdate(BaseModel):
    revision: int
    title: str | None = Field(default=None, max_length=255)
    completed: bool | None = None


@dataclass
class SubtaskStore:
    """In-memory subtasks keyed by id; task_lists maps task id -> list id."""

    task_lists: dict[int, int] = field(default_factory=dict)
    subtasks: dict[int, dict[str, Any]] = field(default_factory=dict)
    request_ids: list[str | None] = field(default_factory=list)
    headers: list[dict[str, str]] = field(default_factory=list)
    queries: list[dict[str, str]] = field(default_factory=list)
    next_id: int = 1

    def add(self, task_id: int, title: str, completed: bool = False) -> dict[str, Any]:
        subtask = {
            "id": self.next_id,
            "task_id": task_id,
            "title": title,
            "completed": completed,
            "revision": 1,
            "type": "subtask",
        }
        self.subtasks[self.next_id] = subtask
        self.next_id += 1
        return subtask


def _errors(status_code: int, *messages: str) -> JSONResponse:
    return JSONResponse({"errors": list(messages)}, status_code=status_code)


def create_fake_api(store: SubtaskStore) -> FastAPI:
    """Build the fake API application over store."""

    def record(request: Request) -> None:
        store.request_ids.append(request.headers.get("X-Request-ID"))
        store.headers.append(dict(request.headers))
        store.queries.append(dict(request.query_params))

    router = APIRouter(dependencies=[Depends(record)])

    def authorized(request: Request) -> bool:
        return (
            request.headers.get("X-Client-ID") == CLIENT_ID
            and request.headers.get("X-Access-Token") == ACCESS_TOKEN
        )

    @router.get("/subtasks")
    async def list_subtasks(
        request: Request,
        list_id: int | None = None,
        task_id: int | None = None,
        completed_tasks: bool = False,
    ) -> Response:
        if not authorized(request):
            return _errors(status.HTTP_401_UNAUTHORIZED, "unauthorized")
        if list_id is None and task_id is None:
            return _errors(status.HTTP_400_BAD_REQUEST, "list_id or task_id required")
        found = [
            s
            for s in store.subtasks.values()
            if s["completed"] == completed_tasks
            and (task_id is None or s["task_id"] == task_id)
            and (list_id is None or store.task_lists.get(s["task_id"]) == list_id)
        ]
        return JSONResponse(found)

    @router.get("/subtasks/{subtask_id}")
    async def get_subtask(request: Request, subtask_id: int) -> Response:
        if not authorized(request):
            return _errors(status.HTTP_401_UNAUTHORIZED, "unauthorized")
        subtask = store.subtasks.get(subtask_id)
        if subtask is None:
            return _errors(status.HTTP_404_NOT_FOUND, "subtask not found")
        return JSONResponse(subtask)

    @router.post("/subtasks", status_code=status.HTTP_201_CREATED)
    async def create_subtask(request: Request, data: SubtaskCreate) -> Response:
        if not authorized(request):
            return _errors(status.HTTP_401_UNAUTHORIZED, "unauthorized")
        subtask = store.add(data.task_id, data.title, data.completed)
        return JSONResponse(subtask, status_code=status.HTTP_201_CREATED)

    @router.patch("/subtasks/{subtask_id}")
    async def update_subtask(request: Request, subtask_id: int, data: SubtaskUpdate) -> Response:
        if not authorized(request):
            return _errors(status.HTTP_401_UNAUTHORIZED, "unauthorized")
        subtask = store.subtasks.get(subtask_id)
        if subtask is None:
            return _errors(status.HTTP_404_NOT_FOUND, "subtask not found")
        if data.revision != subtask["revision"]:
            return _errors(status.HTTP_409_CONFLICT, "revision conflict")
        changes = data.model_dump(exclude_unset=True, exclude={"revision"})
        subtask.update(changes)
        subtask["revision"] += 1
        return JSONResponse(subtask)

    @router.delete("/subtasks/{subtask_id}")
    async def delete_subtask(request: Request, subtask_id: int, revision: int) -> Response:
        if not authorized(request):
            return _errors(status.HTTP_401_UNAUTHORIZED, "unauthorized")
        subtask = store.subtasks.get(subtask_id)
        if subtask is None:
            return _errors(status.HTTP_404_NOT_FOUND, "subtask not found")
        if revision != subtask["revision"]:
            return _errors(status.HTTP_409_CONFLICT, "revision conflict")
        del store.subtasks[subtask_id]
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/broken")
    async def broken() -> Response:
        return PlainTextResponse("upstream exploded", status_code=status.HTTP_502_BAD_GATEWAY)

    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    return app


@pytest.fixture
def store() -> SubtaskStore:
    """Store with tasks 10 and 11 in list 1, task 20 in list 2."""
    return SubtaskStore(task_lists={10: 1, 11: 1, 20: 2})


@pytest.fixture
def api(store: SubtaskStore) -> FastAPI:
    return create_fake_api(store)


@pytest_asyncio.fixture
async def http_client(api: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """httpx client routed to the fake API in-process."""
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=api))
    yield client
    await client.aclose()


@pytest.fixture
def http_transport(http_client: httpx.AsyncClient) -> HttpxTransport:
    return HttpxTransport(
        BASE_URL,
        StaticTokenSession(CLIENT_ID, ACCESS_TOKEN),
        client=http_client,
    )


@pytest.fixture
def subtasks(http_transport: HttpxTransport) -> SubtasksService:
    return SubtasksService.over(http_transport)
