"""Update manager for the .NET SDK.

Checks the release feed for the channel a global.json is pinned to and, when
a newer SDK is available, rewrites the file, commits it on a new branch and
opens a pull request.  Git, the release feed and the GitHub API are injected
so the decision logic can be exercised without processes or network access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from dotnet_sdk_updater.config import Settings
from dotnet_sdk_updater.constants import BRANCH_PREFIX, SHORT_SHA_LENGTH
from dotnet_sdk_updater.errors import LabelAttachmentFailedError
from dotnet_sdk_updater.logging import get_logger
from dotnet_sdk_updater.releases.delta import get_latest_release
from dotnet_sdk_updater.releases.feed import ReleaseFeedClient
from dotnet_sdk_updater.releases.models import ReleaseChannel, ReleaseDelta
from dotnet_sdk_updater.releases.version import channel_for_sdk
from dotnet_sdk_updater.updater.classifier import (
    generate_commit_message,
    generate_pull_request_body,
    generate_title,
)
from dotnet_sdk_updater.updater.git import GitClient
from dotnet_sdk_updater.updater.github import GitHubClient, PullRequest
from dotnet_sdk_updater.updater.manifest import GlobalJson

log = get_logger("dotnet_sdk_updater.updater.manager")


class ReleaseFeed(Protocol):
    """Source of release channel documents."""

    async def get_channel(self, channel: str) -> ReleaseChannel: ...


class VersionControl(Protocol):
    """Runs version control commands in the repository."""

    async def run(self, args: list[str], ignore_errors: bool = False) -> str: ...


class PullRequestService(Protocol):
    """Opens and labels pull requests on the hosting remote."""

    async def create_pull_request(
        self, title: str, head: str, base: str, body: str
    ) -> PullRequest: ...

    async def add_labels(self, number: int, labels: list[str]) -> None: ...


class UpdateStatus(Enum):
    """Outcome of an update run."""

    UP_TO_DATE = "up_to_date"
    BRANCH_EXISTS = "branch_exists"
    UPDATED = "updated"


@dataclass
class UpdateResult:
    """Result of an update run, reported as step outputs."""

    status: UpdateStatus
    version: str
    branch_name: str = ""
    pull_request_number: int = 0
    pull_request_url: str = ""
    security: bool = False
    delta: ReleaseDelta | None = field(default=None, repr=False)

    @property
    def updated(self) -> bool:
        return self.status == UpdateStatus.UPDATED

    def to_outputs(self) -> dict[str, str]:
        """Step outputs keyed by their published names."""
        return {
            "branch-name": self.branch_name,
            "pull-request-number": str(self.pull_request_number),
            "pull-request-html-url": self.pull_request_url,
            "sdk-updated": str(self.updated).lower(),
            "sdk-version": self.version,
            "security": str(self.security).lower(),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "version": self.version,
            "branch_name": self.branch_name,
            "pull_request_number": self.pull_request_number,
            "pull_request_url": self.pull_request_url,
            "updated": self.updated,
            "security": self.security,
        }


class SdkUpdater:
    """Drives one update run.

    Typical flow:
    1. ``try_update()`` loads global.json and resolves the release channel
    2. the feed is fetched and the current/latest delta computed
    3. if newer, global.json is rewritten, committed, pushed, and a pull
       request opened against the branch that was checked out
    """

    def __init__(
        self,
        settings: Settings,
        feed: ReleaseFeed | None = None,
        git: VersionControl | None = None,
        github: PullRequestService | None = None,
    ) -> None:
        self._settings = settings
        self._manifest_path = settings.global_json_path
        self._feed = feed or ReleaseFeedClient(
            base_url=settings.releases_base_url,
            retries=settings.http_retries,
        )
        self._git = git or GitClient(cwd=os.path.dirname(self._manifest_path))
        self._github = github or GitHubClient(
            api_url=settings.api_url,
            token=settings.repo_token.get_secret_value(),
            repository=settings.repository,
        )

    @property
    def run_url(self) -> str | None:
        s = self._settings
        if not (s.repository and s.run_id):
            return None
        return f"{s.server_url}/{s.repository}/actions/runs/{s.run_id}"

    # ------------------------------------------------------------------
    # Check for updates
    # ------------------------------------------------------------------

    async def try_update(self) -> UpdateResult:
        """Check for a newer SDK and apply it if there is one."""
        manifest = GlobalJson.load(self._manifest_path)
        sdk_version = manifest.sdk_version

        channel = self._settings.channel or channel_for_sdk(sdk_version)
        quality = self._settings.quality.strip().lower()
        if quality and quality != "ga":
            log.warning("sdk_quality_ignored", quality=self._settings.quality)

        release_channel = await self._feed.get_channel(channel)
        delta = get_latest_release(sdk_version, release_channel)

        log.info(
            "sdk_current_version",
            sdk_version=delta.current.sdk_version,
            runtime_version=delta.current.runtime_version,
        )
        log.info(
            "sdk_latest_version",
            channel=channel,
            sdk_version=delta.latest.sdk_version,
            runtime_version=delta.latest.runtime_version,
        )

        if not delta.is_update:
            log.info("sdk_up_to_date", sdk_version=delta.current.sdk_version)
            return UpdateResult(
                status=UpdateStatus.UP_TO_DATE,
                version=delta.current.sdk_version,
                delta=delta,
            )

        return await self.apply_update(manifest, delta)

    # ------------------------------------------------------------------
    # Apply update
    # ------------------------------------------------------------------

    async def apply_update(self, manifest: GlobalJson, delta: ReleaseDelta) -> UpdateResult:
        """Rewrite global.json, commit it on a new branch and open a pull request."""
        s = self._settings
        latest_version = delta.latest.sdk_version
        branch = s.branch_name or f"{BRANCH_PREFIX}{latest_version}".lower()
        commit_message = s.commit_message or generate_commit_message(
            delta.current.sdk_version, latest_version, prefix=s.commit_message_prefix
        )

        result = UpdateResult(
            status=UpdateStatus.BRANCH_EXISTS,
            version=delta.current.sdk_version,
            branch_name=branch,
            delta=delta,
        )

        log.info("sdk_updating", path=self._manifest_path, sdk_version=latest_version)

        base = await self._git.run(["rev-parse", "--abbrev-ref", "HEAD"])

        manifest.sdk_version = latest_version
        manifest.save()
        log.info("sdk_version_written", path=self._manifest_path, sdk_version=latest_version)

        await self._configure_git()

        log.debug(
            "git_settings",
            branch=branch,
            commit_message=commit_message,
            user_name=s.user_name,
            user_email=s.user_email,
        )

        exists = await self._git.run(
            ["rev-parse", "--verify", "--quiet", f"remotes/origin/{branch}"],
            ignore_errors=True,
        )
        if exists:
            log.info("git_branch_exists", branch=branch)
            return result

        await self._git.run(["checkout", "-b", branch], ignore_errors=True)
        log.info("git_branch_created", branch=branch)

        await self._git.run(["add", self._manifest_path])
        log.info("git_commit_staged", path=self._manifest_path)

        await self._git.run(["commit", "-m", commit_message, "-s"])

        sha = await self._git.run(["log", "--format='%H'", "-n", "1"])
        log.info("git_committed", sha=sha.replace("'", "")[:SHORT_SHA_LENGTH])

        if not s.dry_run and s.repository:
            await self._git.run(["push", "-u", "origin", branch], ignore_errors=True)
            log.info("git_pushed", repository=s.repository, branch=branch)

        pull_request = await self._create_pull_request(branch, base, delta)

        result.status = UpdateStatus.UPDATED
        result.version = latest_version
        result.security = delta.security
        result.pull_request_number = pull_request.number
        result.pull_request_url = pull_request.url
        return result

    async def _configure_git(self) -> None:
        s = self._settings
        if s.user_name:
            await self._git.run(["config", "user.name", s.user_name])
            log.info("git_user_name_set", user_name=s.user_name)

        if s.user_email:
            await self._git.run(["config", "user.email", s.user_email])
            log.info("git_user_email_set", user_email=s.user_email)

        if s.repository:
            await self._git.run(
                ["remote", "set-url", "origin", f"{s.server_url}/{s.repository}.git"]
            )
            await self._git.run(["fetch", "origin"], ignore_errors=True)

    # ------------------------------------------------------------------
    # Pull request
    # ------------------------------------------------------------------

    async def _create_pull_request(self, branch: str, base: str, delta: ReleaseDelta) -> PullRequest:
        s = self._settings
        title = generate_title(delta.latest.sdk_version, prefix=s.commit_message_prefix)
        body = generate_pull_request_body(delta, run_url=self.run_url)

        if s.dry_run:
            log.info("pull_request_skipped", branch=branch, base=base)
            return PullRequest(number=0, url="")

        pull_request = await self._github.create_pull_request(
            title=title, head=branch, base=base, body=body
        )

        labels = s.label_list
        if labels:
            try:
                await self._github.add_labels(pull_request.number, labels)
            except LabelAttachmentFailedError as exc:
                log.error(
                    "pull_request_labels_failed",
                    number=pull_request.number,
                    labels=labels,
                    error=str(exc),
                )

        return pull_request
