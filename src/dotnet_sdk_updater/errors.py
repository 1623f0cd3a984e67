"""Exceptions raised while checking for and applying .NET SDK updates."""

from __future__ import annotations


class SdkUpdateError(Exception):
    """Base class for all updater failures."""


class ManifestInvalidError(SdkUpdateError):
    """Raised when the global.json file is missing or has no SDK version."""


class VersionInvalidError(SdkUpdateError):
    """Raised when a version string cannot be parsed."""


class ReleaseNotFoundError(SdkUpdateError):
    """Raised when no release in a channel carries the requested SDK version."""

    def __init__(self, sdk_version: str) -> None:
        super().__init__(f"Failed to find release for .NET SDK version {sdk_version}")
        self.sdk_version = sdk_version


class FeedUnavailableError(SdkUpdateError):
    """Raised when the release notes feed for a channel cannot be obtained."""

    def __init__(self, channel: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.channel = channel
        self.status_code = status_code


class GitCommandFailedError(SdkUpdateError):
    """Raised when a git invocation fails or writes to stderr."""

    def __init__(self, args: list[str], stderr: str, returncode: int | None = None) -> None:
        super().__init__(f"The command 'git {' '.join(args)}' failed: {stderr.strip()}")
        self.command = args
        self.stderr = stderr
        self.returncode = returncode


class PullRequestFailedError(SdkUpdateError):
    """Raised when the GitHub API refuses to open a pull request."""


class LabelAttachmentFailedError(SdkUpdateError):
    """Raised when labels cannot be applied to a pull request.

    Never fatal: the pull request already exists when this is raised.
    """
