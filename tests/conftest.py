"""Pytest fixtures for student-hub tests."""

import itertools
import json
import math
import time
from typing import Any, Callable, Iterator, Optional

import httpx
import pytest

from student_hub.client.base import ApiClient
from student_hub.client.registry import ResourceRegistry
from student_hub.config import PortalSettings
from student_hub.session import Session

API_PREFIX = "/api"
PAGING_PARAMS = ("page", "limit", "month")


class FakeBackend:
    """
    In-memory portal backend for httpx.MockTransport.

    Collections are keyed by full path (e.g. /api/deadlines). GET filters on any
    query param that matches a record key; page/limit slice the result and add
    top-level pagination keys. One-shot failures can be queued per (method, path).
    """

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            API_PREFIX + ResourceRegistry.get(name).path: []
            for name in ResourceRegistry.available_resources()
        }
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], list[httpx.Response]] = {}
        self.on_request: Optional[Any] = None
        self._ids = itertools.count(1)

    def seed(self, path: str, *records: dict[str, Any]) -> list[dict[str, Any]]:
        """Insert records into a collection, assigning ids where missing."""
        stored = []
        for record in records:
            record = {"_id": str(next(self._ids)), **record}
            self.collections[API_PREFIX + path].append(record)
            stored.append(record)
        return stored

    def fail(self, method: str, path: str, status: int, body: Any = None) -> None:
        """Queue one failed response for the next matching request."""
        response = httpx.Response(status, json=body) if body is not None else httpx.Response(status)
        self.failures.setdefault((method, API_PREFIX + path), []).append(response)

    def calls(self, method: Optional[str] = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def _route(self, path: str) -> tuple[str, Optional[str]]:
        if path in self.collections:
            return path, None
        parent, _, record_id = path.rpartition("/")
        if parent in self.collections:
            return parent, record_id
        raise KeyError(path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)

        queued = self.failures.get((request.method, request.url.path))
        if queued:
            return queued.pop(0)

        try:
            collection_path, record_id = self._route(request.url.path)
        except KeyError:
            return httpx.Response(404, json={"success": False, "message": "Route not found"})
        records = self.collections[collection_path]

        if request.method == "GET" and record_id is None:
            return self._list(records, dict(request.url.params))
        if request.method == "POST":
            record = {"_id": str(next(self._ids)), **_json(request)}
            records.append(record)
            return httpx.Response(201, json={"success": True, "data": record})

        existing = next((r for r in records if r["_id"] == record_id), None)
        if existing is None:
            return httpx.Response(404, json={"success": False, "message": "Record not found"})
        if request.method == "GET":
            return httpx.Response(200, json={"success": True, "data": existing})
        if request.method == "PUT":
            existing.update(_json(request))
            return httpx.Response(200, json={"success": True, "data": existing})
        if request.method == "DELETE":
            records.remove(existing)
            return httpx.Response(200, json={"success": True, "message": "Deleted"})
        return httpx.Response(405, json={"success": False, "message": "Method not allowed"})

    def _list(self, records: list[dict[str, Any]], params: dict[str, str]) -> httpx.Response:
        matches = [
            r
            for r in records
            if all(str(r.get(k)) == v for k, v in params.items() if k not in PAGING_PARAMS)
        ]
        if "page" not in params:
            return httpx.Response(200, json={"success": True, "data": matches})
        page = int(params["page"])
        limit = int(params.get("limit", 12))
        total_pages = max(1, math.ceil(len(matches) / limit))
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": matches[(page - 1) * limit : page * limit],
                "currentPage": page,
                "totalPages": total_pages,
                "total": len(matches),
            },
        )


def _json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content or b"{}")


@pytest.fixture
def backend() -> FakeBackend:
    """Empty in-memory backend."""
    return FakeBackend()


@pytest.fixture
def settings() -> PortalSettings:
    return PortalSettings(base_url="http://portal.test")


@pytest.fixture
def session() -> Session:
    """Signed-in student."""
    return Session(
        user_id="u-100",
        email="student@g.bracu.ac.bd",
        name="Test Student",
        cookies={"connect.sid": "abc123"},
    )


@pytest.fixture
def api(backend: FakeBackend, settings: PortalSettings, session: Session) -> Iterator[ApiClient]:
    """ApiClient wired to the fake backend through httpx.MockTransport."""
    client = httpx.Client(
        base_url=settings.base_url,
        transport=httpx.MockTransport(backend.handler),
    )
    with ApiClient(settings=settings, session=session, client=client) as api_client:
        yield api_client


@pytest.fixture
def make_api(settings: PortalSettings, session: Session) -> Callable[..., ApiClient]:
    """Factory for an ApiClient over an arbitrary MockTransport handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ApiClient:
        client = httpx.Client(base_url=settings.base_url, transport=httpx.MockTransport(handler))
        return ApiClient(settings=settings, session=session, client=client)

    return _make


def _set_tz(monkeypatch: pytest.MonkeyPatch, tz: str) -> None:
    monkeypatch.setenv("TZ", tz)
    time.tzset()


@pytest.fixture(autouse=True)
def utc_local_zone(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin the process time zone so calendar-day tests don't depend on the host."""
    if not hasattr(time, "tzset"):
        yield
        return
    _set_tz(monkeypatch, "UTC0")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def dhaka_zone(monkeypatch: pytest.MonkeyPatch, utc_local_zone: None) -> None:
    """Local zone UTC+6 (Asia/Dhaka, no DST)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    _set_tz(monkeypatch, "BDT-6")
