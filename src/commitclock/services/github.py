"""Read-only GitHub REST client used by the resolvers.

Every call returns a ``Reply`` instead of raising, so callers can decide how
to degrade without wrapping each request in ``try``/``except``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
ACCEPT_HEADER = "application/vnd.github+json"

HTTP_NOT_FOUND = 404


@dataclass(frozen=True)
class Reply:
    """Outcome of one GET request.

    ``status`` is None when the request never produced a response
    (DNS failure, refused connection, ...). ``data`` is the decoded JSON body,
    or None when there is no usable body.
    """

    status: int | None
    data: Any = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not None and 200 <= self.status < 300 and not self.error

    @property
    def not_found(self) -> bool:
        return self.status == HTTP_NOT_FOUND


class GitHubClient:
    """Thin async wrapper around ``httpx.AsyncClient`` for the repo endpoints."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=api_url,
            headers={"Accept": ACCEPT_HEADER},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Reply:
        """GET ``path`` and decode the JSON body."""
        try:
            response = await self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.warning("GET %s failed: %s", path, exc)
            return Reply(status=None, error=str(exc) or type(exc).__name__)

        logger.debug("GET %s -> %s", path, response.status_code)
        if not response.is_success:
            return Reply(status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("GET %s returned an undecodable body: %s", path, exc)
            return Reply(status=response.status_code, error="invalid JSON body")

        return Reply(status=response.status_code, data=data)

    # -- Endpoints --

    async def contributors(self, owner: str, repo: str) -> Reply:
        """Single page of contributors, anonymous ones included."""
        return await self.get_json(
            f"/repos/{owner}/{repo}/contributors",
            params={"anon": 1, "per_page": 100},
        )

    async def latest_commits(self, owner: str, repo: str) -> Reply:
        """The most recent commit on the default branch, as a one-item list."""
        return await self.get_json(f"/repos/{owner}/{repo}/commits", params={"per_page": 1})

    async def repository(self, owner: str, repo: str) -> Reply:
        return await self.get_json(f"/repos/{owner}/{repo}")
