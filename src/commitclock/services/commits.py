"""Commit count and last-commit time for a GitHub repository.

Both resolvers are best-effort: GitHub has no "total commits" endpoint, so
the count is an estimate, and every failure degrades to a default (0 commits,
no timestamp) instead of reaching the caller.
"""

from __future__ import annotations

import logging

from commitclock.services.fallback import Outcome, first_success, hit, miss
from commitclock.services.github import GitHubClient
from commitclock.timefmt import parse_timestamp

logger = logging.getLogger(__name__)


def _contribution(entry: object) -> int:
    """Numeric ``contributions`` of one contributor entry, else 0."""
    if not isinstance(entry, dict):
        return 0
    value = entry.get("contributions")
    # bool is an int subclass but never a real count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _first_commit_date(entry: object) -> object:
    """``commit.author.date``, falling back to ``commit.committer.date``."""
    if not isinstance(entry, dict):
        return None
    commit = entry.get("commit")
    if not isinstance(commit, dict):
        return None
    for role in ("author", "committer"):
        person = commit.get(role)
        if isinstance(person, dict) and person.get("date"):
            return person["date"]
    return None


async def resolve_commit_count(client: GitHubClient, owner: str, repo: str) -> int:
    """Estimate the total number of commits in ``owner/repo``.

    Sums contributor counts; if the contributors listing errors, falls back
    to the commit listing, which can only tell whether at least one commit
    exists (returns 1 as a lower bound). A missing repository is 0.
    """

    async def from_contributors() -> Outcome:
        reply = await client.contributors(owner, repo)
        if reply.not_found:
            return hit(0)
        if not reply.ok:
            logger.warning(
                "Contributors listing for %s/%s unavailable (%s); trying commit listing",
                owner, repo, reply.error or reply.status,
            )
            return miss()
        if not isinstance(reply.data, list) or not reply.data:
            return hit(0)
        total = sum(_contribution(entry) for entry in reply.data)
        return hit(total if total > 0 else 0)

    async def from_commit_listing() -> Outcome:
        reply = await client.latest_commits(owner, repo)
        if not reply.ok:
            return hit(0)
        has_commits = isinstance(reply.data, list) and len(reply.data) > 0
        return hit(1 if has_commits else 0)

    count = await first_success([from_contributors, from_commit_listing], default=0)
    logger.info("Commit count for %s/%s: %d", owner, repo, count)
    return count


async def resolve_last_commit_ms(client: GitHubClient, owner: str, repo: str) -> int | None:
    """Epoch ms of the latest push/commit to ``owner/repo``, or None.

    Tries the repository's ``pushed_at`` first. A 404 there is final: the
    commit listing is not consulted for a repository that doesn't exist.
    """

    async def from_pushed_at() -> Outcome:
        reply = await client.repository(owner, repo)
        if reply.not_found:
            return hit(None)
        if reply.ok and isinstance(reply.data, dict):
            ms = parse_timestamp(reply.data.get("pushed_at"))
            if ms is not None:
                return hit(ms)
        logger.warning(
            "No usable pushed_at for %s/%s; trying commit listing", owner, repo
        )
        return miss()

    async def from_latest_commit() -> Outcome:
        reply = await client.latest_commits(owner, repo)
        if not reply.ok or not isinstance(reply.data, list) or not reply.data:
            return hit(None)
        return hit(parse_timestamp(_first_commit_date(reply.data[0])))

    last_ms = await first_success([from_pushed_at, from_latest_commit], default=None)
    if last_ms is None:
        logger.warning("No commit time found for %s/%s", owner, repo)
    else:
        logger.info("Last commit for %s/%s at %d", owner, repo, last_ms)
    return last_ms
