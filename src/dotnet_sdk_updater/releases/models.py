"""Data models for .NET release notes feeds.

The feed types are pydantic models that mirror the hyphenated keys of the
upstream ``releases.json`` documents.  Only the fields the updater reads are
declared; anything else in the document is ignored.  The derived views
(``ReleaseInfo`` and ``ReleaseDelta``) are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Feed documents
# ---------------------------------------------------------------------------


class _FeedModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Cve(_FeedModel):
    """A security advisory as it appears in a release's ``cve-list``."""

    cve_id: str = Field(alias="cve-id")
    cve_url: str = Field(default="", alias="cve-url")


class RuntimeDescriptor(_FeedModel):
    """The .NET runtime shipped with a release."""

    version: str
    version_display: str | None = Field(default=None, alias="version-display")


class SdkDescriptor(_FeedModel):
    """An SDK build and the runtime version it carries."""

    version: str
    version_display: str | None = Field(default=None, alias="version-display")
    runtime_version: str | None = Field(default=None, alias="runtime-version")


class Release(_FeedModel):
    """One published runtime + SDK release point in a channel.

    ``sdk`` is the primary SDK for the release.  Releases that ship several
    SDK feature bands also list every band (the primary one included) in
    ``sdks``.
    """

    release_date: str = Field(default="", alias="release-date")
    release_version: str = Field(default="", alias="release-version")
    security: bool = False
    cve_list: list[Cve] | None = Field(default=None, alias="cve-list")
    release_notes: str = Field(default="", alias="release-notes")
    runtime: RuntimeDescriptor | None = None
    sdk: SdkDescriptor
    sdks: list[SdkDescriptor] | None = None

    @property
    def runtime_version(self) -> str:
        return self.runtime.version if self.runtime else ""


class ReleaseChannel(_FeedModel):
    """The ``releases.json`` document for one channel, e.g. ``8.0``."""

    channel_version: str = Field(default="", alias="channel-version")
    latest_release: str = Field(default="", alias="latest-release")
    latest_release_date: str = Field(default="", alias="latest-release-date")
    latest_runtime: str = Field(default="", alias="latest-runtime")
    latest_sdk: str = Field(alias="latest-sdk", min_length=1)
    release_type: str = Field(default="", alias="release-type")
    support_phase: str = Field(default="", alias="support-phase")
    releases: list[Release] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdvisoryEntry:
    """A security advisory identifier and its reference URL.

    Two entries are equal when their identifiers are equal.
    """

    id: str
    url: str = field(default="", compare=False)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "url": self.url}


@dataclass
class ReleaseInfo:
    """The resolved view of a single SDK version within a channel."""

    release_notes: str
    runtime_version: str
    sdk_version: str
    security: bool = False
    security_issues: list[AdvisoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "release_notes": self.release_notes,
            "runtime_version": self.runtime_version,
            "sdk_version": self.sdk_version,
            "security": self.security,
            "security_issues": [issue.to_dict() for issue in self.security_issues],
        }


@dataclass
class ReleaseDelta:
    """Comparison between the pinned SDK and the latest SDK of a channel.

    ``security`` and ``security_issues`` aggregate the latest release and any
    runtime patch releases skipped over between the two.
    """

    current: ReleaseInfo
    latest: ReleaseInfo
    security: bool = False
    security_issues: list[AdvisoryEntry] = field(default_factory=list)

    @property
    def is_update(self) -> bool:
        return self.current.sdk_version != self.latest.sdk_version

    @property
    def runtime_changed(self) -> bool:
        return self.current.runtime_version != self.latest.runtime_version

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current.to_dict(),
            "latest": self.latest.to_dict(),
            "security": self.security,
            "security_issues": [issue.to_dict() for issue in self.security_issues],
        }
