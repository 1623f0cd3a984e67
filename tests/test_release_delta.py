"""Tests for computing the delta between the pinned and the latest SDK."""

from __future__ import annotations

import pytest

from dotnet_sdk_updater.errors import ReleaseNotFoundError
from dotnet_sdk_updater.releases.delta import (
    find_by_runtime,
    get_latest_release,
    skipped_runtime_versions,
)
from dotnet_sdk_updater.releases.models import ReleaseChannel

# ---------------------------------------------------------------------------
# skipped_runtime_versions
# ---------------------------------------------------------------------------


class TestSkippedRuntimeVersions:
    """Tests for enumerating skipped runtime patches."""

    def test_strictly_between(self) -> None:
        assert skipped_runtime_versions("8.0.1", "8.0.4") == ["8.0.2", "8.0.3"]

    def test_adjacent_patches(self) -> None:
        assert skipped_runtime_versions("8.0.3", "8.0.4") == []

    def test_same_version(self) -> None:
        assert skipped_runtime_versions("8.0.4", "8.0.4") == []

    @pytest.mark.parametrize(
        ("current", "latest"),
        [
            ("8.0.0-rc.2.23479.6", "8.0.4"),
            ("9.0.0", "9.0.5-preview.1"),
        ],
    )
    def test_prerelease_skips_scan(self, current: str, latest: str) -> None:
        assert skipped_runtime_versions(current, latest) == []

    def test_unparseable_runtime(self) -> None:
        assert skipped_runtime_versions("", "8.0.4") == []


class TestFindByRuntime:
    """Tests for runtime version lookups."""

    def test_found(self, channel: ReleaseChannel) -> None:
        release = find_by_runtime("8.0.2", channel)
        assert release is not None
        assert release.sdk.version == "8.0.200"

    def test_missing(self, channel: ReleaseChannel) -> None:
        assert find_by_runtime("8.0.9", channel) is None


# ---------------------------------------------------------------------------
# get_latest_release
# ---------------------------------------------------------------------------


class TestGetLatestRelease:
    """Tests for the release delta resolver."""

    def test_up_to_date(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.204", channel)
        assert delta.is_update is False
        assert delta.current.sdk_version == delta.latest.sdk_version == "8.0.204"
        assert delta.security is True
        assert [i.id for i in delta.security_issues] == ["CVE-2024-21409"]

    def test_aggregates_skipped_patch_releases(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.101", channel)

        assert delta.is_update is True
        assert delta.runtime_changed is True
        assert delta.current.runtime_version == "8.0.1"
        assert delta.latest.runtime_version == "8.0.4"
        assert delta.security is True
        # 8.0.2 advisories are recovered; the current release's own are not.
        assert [i.id for i in delta.security_issues] == [
            "CVE-2024-21386",
            "CVE-2024-21404",
            "CVE-2024-21409",
        ]

    def test_security_inherited_from_skipped_release(
        self, channel_factory, release_factory
    ) -> None:
        ch = channel_factory(
            "8.0.204",
            [
                release_factory("8.0.4", "8.0.204"),
                release_factory("8.0.3", "8.0.203"),
                release_factory("8.0.2", "8.0.200", security=True, cves=["CVE-B"]),
                release_factory("8.0.1", "8.0.101"),
            ],
        )
        delta = get_latest_release("8.0.101", ch)
        assert delta.latest.security is False
        assert delta.security is True
        assert [i.id for i in delta.security_issues] == ["CVE-B"]

    def test_sorted_by_identifier(self, channel_factory, release_factory) -> None:
        ch = channel_factory(
            "8.0.204",
            [
                release_factory("8.0.4", "8.0.204", security=True, cves=["CVE-C", "CVE-A"]),
                release_factory("8.0.3", "8.0.203", security=True, cves=["CVE-B"]),
                release_factory("8.0.1", "8.0.101"),
            ],
        )
        delta = get_latest_release("8.0.101", ch)
        assert [i.id for i in delta.security_issues] == ["CVE-A", "CVE-B", "CVE-C"]

    def test_advisory_repeated_across_releases_listed_once(
        self, channel_factory, release_factory
    ) -> None:
        ch = channel_factory(
            "8.0.204",
            [
                release_factory("8.0.4", "8.0.204", security=True, cves=["CVE-A"]),
                release_factory("8.0.3", "8.0.203", security=True, cves=["CVE-A", "CVE-B"]),
                release_factory("8.0.1", "8.0.101"),
            ],
        )
        delta = get_latest_release("8.0.101", ch)
        assert [i.id for i in delta.security_issues] == ["CVE-A", "CVE-B"]

    def test_missing_intermediate_releases_are_skipped(
        self, channel_factory, release_factory
    ) -> None:
        ch = channel_factory(
            "8.0.206",
            [
                release_factory("8.0.6", "8.0.206"),
                release_factory("8.0.1", "8.0.101"),
            ],
        )
        delta = get_latest_release("8.0.101", ch)
        assert delta.security is False
        assert delta.security_issues == []

    def test_prerelease_current_skips_gap_scan(self, channel_factory, release_factory) -> None:
        ch = channel_factory(
            "8.0.204",
            [
                release_factory("8.0.4", "8.0.204"),
                release_factory("8.0.2", "8.0.200", security=True, cves=["CVE-B"]),
                release_factory("8.0.0-rc.2.23479.6", "8.0.100-rc.2.23502.2"),
            ],
        )
        delta = get_latest_release("8.0.100-rc.2.23502.2", ch)
        assert delta.is_update is True
        assert delta.security is False
        assert delta.security_issues == []

    def test_alternate_sdk_current(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.102", channel)
        assert delta.current.sdk_version == "8.0.102"
        assert delta.current.runtime_version == "8.0.2"
        # Only 8.0.3 lies between 8.0.2 and 8.0.4 and it is not a security release.
        assert [i.id for i in delta.security_issues] == ["CVE-2024-21409"]

    def test_unknown_current_version(self, channel: ReleaseChannel) -> None:
        with pytest.raises(ReleaseNotFoundError):
            get_latest_release("8.0.999", channel)

    def test_unknown_latest_version(self, channel_factory, release_factory) -> None:
        ch = channel_factory("8.0.300", [release_factory("8.0.1", "8.0.101")])
        with pytest.raises(ReleaseNotFoundError, match="8.0.300"):
            get_latest_release("8.0.101", ch)
