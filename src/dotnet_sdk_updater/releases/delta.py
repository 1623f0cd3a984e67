"""Computation of the delta between the pinned SDK and a channel's latest SDK.

The channel feed only names SDK versions, so a single lookup of the latest
SDK misses security fixes shipped in runtime patches that were skipped over.
Those are recovered by looking up each intermediate runtime version directly.
"""

from __future__ import annotations

from dotnet_sdk_updater.errors import VersionInvalidError
from dotnet_sdk_updater.logging import get_logger
from dotnet_sdk_updater.releases.advisories import map_advisories
from dotnet_sdk_updater.releases.matcher import get_release_for_sdk
from dotnet_sdk_updater.releases.models import (
    AdvisoryEntry,
    Release,
    ReleaseChannel,
    ReleaseDelta,
)
from dotnet_sdk_updater.releases.version import DotNetVersion

log = get_logger("dotnet_sdk_updater.releases.delta")


def find_by_runtime(runtime_version: str, channel: ReleaseChannel) -> Release | None:
    """Return the first release shipping exactly *runtime_version*."""
    for release in channel.releases:
        if release.runtime_version == runtime_version:
            return release
    return None


def skipped_runtime_versions(current: str, latest: str) -> list[str]:
    """List the stable runtime versions strictly between *current* and *latest*.

    Empty when either version is a pre-release, when they belong to different
    ``major.minor`` lines, or when no patch release lies between them.
    """
    try:
        current_version = DotNetVersion.parse(current)
        latest_version = DotNetVersion.parse(latest)
    except VersionInvalidError:
        log.debug("runtime_version_unparsed", current=current, latest=latest)
        return []

    if current_version.is_prerelease or latest_version.is_prerelease:
        return []

    if (current_version.major, current_version.minor) != (
        latest_version.major,
        latest_version.minor,
    ):
        return []

    if latest_version.patch - current_version.patch <= 1:
        return []

    return [
        current_version.with_patch(patch)
        for patch in range(current_version.patch + 1, latest_version.patch)
    ]


def _dedupe(issues: list[AdvisoryEntry]) -> list[AdvisoryEntry]:
    seen: set[str] = set()
    unique: list[AdvisoryEntry] = []
    for issue in issues:
        if issue.id not in seen:
            seen.add(issue.id)
            unique.append(issue)
    return unique


def get_latest_release(current_sdk_version: str, channel: ReleaseChannel) -> ReleaseDelta:
    """Compare *current_sdk_version* with the latest SDK of *channel*."""
    current = get_release_for_sdk(current_sdk_version, channel)
    latest = get_release_for_sdk(channel.latest_sdk, channel)

    security = latest.security
    issues = list(latest.security_issues)

    for runtime_version in skipped_runtime_versions(
        current.runtime_version, latest.runtime_version
    ):
        release = find_by_runtime(runtime_version, channel)
        if release is None:
            continue
        security = security or release.security
        issues.extend(map_advisories(release.cve_list))
        log.debug(
            "skipped_release_included",
            runtime_version=runtime_version,
            security=release.security,
        )

    return ReleaseDelta(
        current=current,
        latest=latest,
        security=security,
        security_issues=sorted(_dedupe(issues), key=lambda issue: issue.id),
    )
