"""A scripted Craftly API for client SDK tests, served through httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx

from craftly.client.api_client import ApiClient
from craftly.client.config import ClientSettings
from craftly.client.models import SessionUser
from craftly.client.session import SessionStore

BASE_URL = "http://test/api"

Handler = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any = None, status: int = 200, message: str | None = None) -> httpx.Response:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return httpx.Response(status, json=body)


def failure(status: int, error: str, code: str = "ERROR") -> httpx.Response:
    return httpx.Response(status, json={"success": False, "error": error, "code": code})


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


class FakeBackend:
    """Routes requests by (method, path below /api) to canned responses or handlers."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, response: httpx.Response | Handler) -> None:
        if isinstance(response, httpx.Response):
            canned = response
            self.routes[(method, path)] = lambda request: canned
        else:
            self.routes[(method, path)] = response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == f"/api{path}"
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        handler = self.routes.get((request.method, path))
        if handler is None:
            return failure(404, f"Route not found: {request.method} {request.url.path}", "NOT_FOUND")
        return handler(request)


def make_api(
    backend: FakeBackend,
    tmp_path: Path,
    user: SessionUser | None = None,
) -> ApiClient:
    session = SessionStore(tmp_path / "session.json")
    if user is not None:
        session.save_user(user)
    return ApiClient(
        BASE_URL,
        session=session,
        settings=ClientSettings(),
        transport=httpx.MockTransport(backend),
    )


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
