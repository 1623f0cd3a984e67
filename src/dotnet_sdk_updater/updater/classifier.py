"""Commit message and pull request text for SDK updates."""

from __future__ import annotations

from enum import StrEnum

from dotnet_sdk_updater.constants import DEPENDENCY_NAME, DEPENDENCY_TYPE
from dotnet_sdk_updater.releases.models import ReleaseDelta
from dotnet_sdk_updater.releases.version import version_segment


class UpdateKind(StrEnum):
    """Semantic version magnitude of an update."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def classify_update(current_version: str, latest_version: str) -> UpdateKind:
    """Classify the move from *current_version* to *latest_version*."""
    if version_segment(latest_version, 0) > version_segment(current_version, 0):
        return UpdateKind.MAJOR
    if version_segment(latest_version, 1) > version_segment(current_version, 1):
        return UpdateKind.MINOR
    return UpdateKind.PATCH


def generate_title(latest_sdk_version: str, prefix: str = "") -> str:
    return f"{prefix}Update .NET SDK to {latest_sdk_version}"


def generate_commit_message(
    current_sdk_version: str, latest_sdk_version: str, prefix: str = ""
) -> str:
    """Build a commit message carrying Dependabot-style dependency metadata.

    The YAML block between ``---`` and ``...`` lets tooling that understands
    Dependabot commits group and filter SDK updates by semver magnitude.
    """
    update_kind = classify_update(current_sdk_version, latest_sdk_version)
    lines = [
        f"{prefix}Update .NET SDK",
        "",
        f"Update .NET SDK to version {latest_sdk_version}.",
        "",
        "---",
        "updated-dependencies:",
        f"- dependency-name: {DEPENDENCY_NAME}",
        f"  dependency-type: {DEPENDENCY_TYPE}",
        f"  update-type: version-update:semver-{update_kind}",
        "...",
        "",
        "",
    ]
    return "\n".join(lines)


def generate_pull_request_body(delta: ReleaseDelta, run_url: str | None = None) -> str:
    """Describe *delta* in Markdown for the pull request body."""
    current, latest = delta.current, delta.latest
    body = f"Updates the .NET SDK to version `{latest.sdk_version}`, "

    if delta.runtime_changed:
        body += (
            "which also updates the .NET runtime from version "
            f"[``{current.runtime_version}``]({current.release_notes}) to version "
            f"[``{latest.runtime_version}``]({latest.release_notes})."
        )
    else:
        body += (
            f"which includes version [``{latest.runtime_version}``]({latest.release_notes}) "
            "of the .NET runtime."
        )

    if delta.security and delta.security_issues:
        body += "\n\nThis release includes fixes for the following security issue(s):"
        for issue in delta.security_issues:
            body += f"\n  * [{issue.id}]({issue.url})"

    if run_url:
        body += f"\n\nThis pull request was auto-generated by [GitHub Actions]({run_url})."

    return body
