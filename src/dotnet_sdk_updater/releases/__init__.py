"""Release feed handling for .NET SDK channels.

Parses the ``releases.json`` document published for each channel, resolves
SDK versions to their release points, and computes the security-relevant
delta between the pinned SDK and the latest one.
"""

from dotnet_sdk_updater.releases.delta import get_latest_release
from dotnet_sdk_updater.releases.matcher import get_release_for_sdk
from dotnet_sdk_updater.releases.models import (
    AdvisoryEntry,
    Release,
    ReleaseChannel,
    ReleaseDelta,
    ReleaseInfo,
    SdkDescriptor,
)

__all__ = [
    "AdvisoryEntry",
    "Release",
    "ReleaseChannel",
    "ReleaseDelta",
    "ReleaseInfo",
    "SdkDescriptor",
    "get_latest_release",
    "get_release_for_sdk",
]
