"""Shared fixtures: a fake wall clock and a canned GitHub API."""

from __future__ import annotations

import httpx
import pytest

from commitclock.services.github import GitHubClient

OWNER = "octo"
REPO = "widget"

CONTRIBUTORS = f"/repos/{OWNER}/{REPO}/contributors"
COMMITS = f"/repos/{OWNER}/{REPO}/commits"
REPOSITORY = f"/repos/{OWNER}/{REPO}"


class FakeClock:
    """Callable returning a controllable epoch-ms value."""

    def __init__(self, start_ms: int = 0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class FakeGitHub:
    """Canned responses keyed by URL path.

    A route is either ``(status, json_body)``, ``(status, b"raw body")``
    or an exception instance to raise. Unknown paths answer 404.
    """

    def __init__(self, routes: dict | None = None) -> None:
        self.routes = routes or {}
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        status, body = route
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def client(self) -> GitHubClient:
        return GitHubClient(
            api_url="https://api.github.test",
            transport=httpx.MockTransport(self.handler),
        )

    def count(self, path: str) -> int:
        return self.calls.count(path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def github():
    return FakeGitHub()
