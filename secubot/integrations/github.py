"""Minimal async GitHub REST client (issues and releases)."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
_TIMEOUT = aiohttp.ClientTimeout(total=15)


class GitHubError(Exception):
    """Raised when a GitHub API call fails or its input is invalid."""


def split_repo(repo: str) -> tuple[str, str]:
    """Split ``"owner/name"`` into its parts."""
    owner, sep, name = repo.partition("/")
    if not sep or not owner or not name or "/" in name:
        raise GitHubError(f"Invalid repo '{repo}', expected owner/repo")
    return owner, name


class GitHubClient:
    """Thin wrapper over the GitHub REST API.

    A token is optional for read-only calls (releases of public repos) and
    required for creating issues.
    """

    def __init__(self, token: str = "", *, base_url: str = GITHUB_API_URL) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "secubot",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, path: str, payload: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(headers=self._headers(), timeout=_TIMEOUT) as session:
                async with session.request(method, url, json=payload) as resp:
                    if resp.status >= 400:
                        detail = await resp.text()
                        raise GitHubError(
                            f"{method} {path} failed: HTTP {resp.status} {detail[:200]}"
                        )
                    return await resp.json()
        except aiohttp.ClientError as exc:
            raise GitHubError(f"{method} {path} failed: {exc}") from exc

    async def create_issue(
        self,
        repo: str,
        title: str,
        body: str,
        labels: Sequence[str] = (),
    ) -> str:
        """Create an issue and return its HTML URL."""
        owner, name = split_repo(repo)
        data = await self._request(
            "POST",
            f"/repos/{owner}/{name}/issues",
            {"title": title, "body": body, "labels": list(labels)},
        )
        return data["html_url"]

    async def latest_release(self, repo: str) -> str:
        """Return the body of the latest release (empty string if it has none)."""
        owner, name = split_repo(repo)
        data = await self._request("GET", f"/repos/{owner}/{name}/releases/latest")
        return data.get("body") or ""
