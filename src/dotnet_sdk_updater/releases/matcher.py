"""Resolution of an SDK version to the release that ships it.

A release names its primary SDK in ``sdk``.  Releases that ship more than one
SDK feature band also list the bands in ``sdks``.  Lookups try the primary
SDK of every release first and only fall back to the alternate lists when no
primary SDK matches.
"""

from __future__ import annotations

from dotnet_sdk_updater.errors import ReleaseNotFoundError
from dotnet_sdk_updater.logging import get_logger
from dotnet_sdk_updater.releases.advisories import map_advisories
from dotnet_sdk_updater.releases.models import Release, ReleaseChannel, ReleaseInfo, SdkDescriptor

log = get_logger("dotnet_sdk_updater.releases.matcher")


def find_by_primary_sdk(sdk_version: str, channel: ReleaseChannel) -> list[Release]:
    """Return every release whose primary SDK is *sdk_version*."""
    return [release for release in channel.releases if release.sdk.version == sdk_version]


def find_by_alternate_sdk(
    sdk_version: str, channel: ReleaseChannel
) -> tuple[Release, SdkDescriptor] | None:
    """Return the first release listing *sdk_version* in ``sdks``, with that SDK."""
    for release in channel.releases:
        for sdk in release.sdks or []:
            if sdk.version == sdk_version:
                return release, sdk
    return None


def get_release_for_sdk(sdk_version: str, channel: ReleaseChannel) -> ReleaseInfo:
    """Resolve *sdk_version* to its ``ReleaseInfo`` within *channel*.

    Raises:
        ReleaseNotFoundError: No release ships the SDK, or more than one
            release claims it as their primary SDK.
    """
    resolved: tuple[Release, SdkDescriptor] | None = None

    primary = find_by_primary_sdk(sdk_version, channel)
    if len(primary) == 1:
        resolved = primary[0], primary[0].sdk
    elif not primary:
        resolved = find_by_alternate_sdk(sdk_version, channel)
    else:
        log.warning(
            "sdk_version_ambiguous",
            sdk_version=sdk_version,
            releases=[release.release_version for release in primary],
        )

    if resolved is None:
        raise ReleaseNotFoundError(sdk_version)

    release, sdk = resolved
    return ReleaseInfo(
        release_notes=release.release_notes,
        runtime_version=release.runtime_version,
        sdk_version=sdk.version,
        security=release.security,
        security_issues=map_advisories(release.cve_list) if release.security else [],
    )
