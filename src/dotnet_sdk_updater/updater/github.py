"""Minimal GitHub REST client for opening pull requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from dotnet_sdk_updater import __version__
from dotnet_sdk_updater.constants import HTTP_TIMEOUT_SECONDS, USER_AGENT
from dotnet_sdk_updater.errors import LabelAttachmentFailedError, PullRequestFailedError
from dotnet_sdk_updater.logging import get_logger

log = get_logger("dotnet_sdk_updater.updater.github")


@dataclass
class PullRequest:
    """A pull request opened on GitHub."""

    number: int
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "url": self.url}


class GitHubClient:
    """Opens pull requests and applies labels in one repository."""

    def __init__(
        self,
        api_url: str,
        token: str,
        repository: str,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        owner, _, repo = repository.partition("/")
        self._repo_url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}"
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"{USER_AGENT}/{__version__}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def create_pull_request(self, title: str, head: str, base: str, body: str) -> PullRequest:
        """Open a pull request from *head* into *base*.

        Raises:
            PullRequestFailedError: GitHub could not be reached or did not
                create the pull request.
        """
        payload = {
            "title": title,
            "head": head,
            "base": base,
            "body": body,
            "maintainer_can_modify": True,
            "draft": False,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{self._repo_url}/pulls",
                    json=payload,
                    headers=self._headers(),
                )
        except httpx.RequestError as exc:
            raise PullRequestFailedError(f"Failed to create pull request for {head}: {exc}") from exc

        if resp.status_code != 201:
            raise PullRequestFailedError(
                f"Failed to create pull request for {head} - HTTP status {resp.status_code}: "
                f"{resp.text[:200]}"
            )

        data = resp.json()
        log.debug("pull_request_response", response=data)
        log.info("pull_request_created", number=data["number"], title=data.get("title", title))
        log.info("pull_request_url", url=data["html_url"])
        return PullRequest(number=data["number"], url=data["html_url"])

    async def add_labels(self, number: int, labels: list[str]) -> None:
        """Apply *labels* to pull request *number*.

        Raises:
            LabelAttachmentFailedError: The labels were not applied.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{self._repo_url}/issues/{number}/labels",
                    json={"labels": labels},
                    headers=self._headers(),
                )
        except httpx.RequestError as exc:
            raise LabelAttachmentFailedError(
                f"Failed to apply label(s) to Pull Request #{number}: {exc}"
            ) from exc

        if resp.status_code != 200:
            raise LabelAttachmentFailedError(
                f"Failed to apply label(s) to Pull Request #{number} - "
                f"HTTP status {resp.status_code}"
            )
