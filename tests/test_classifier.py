"""Tests for commit message and pull request text generation."""

from __future__ import annotations

import pytest

from dotnet_sdk_updater.releases.delta import get_latest_release
from dotnet_sdk_updater.releases.models import ReleaseChannel
from dotnet_sdk_updater.updater.classifier import (
    UpdateKind,
    classify_update,
    generate_commit_message,
    generate_pull_request_body,
    generate_title,
)


class TestClassifyUpdate:
    """Tests for classify_update()."""

    @pytest.mark.parametrize(
        ("current", "latest", "expected"),
        [
            ("1.0.0", "2.0.0", UpdateKind.MAJOR),
            ("1.2.0", "1.3.0", UpdateKind.MINOR),
            ("1.2.3", "1.2.4", UpdateKind.PATCH),
            ("8.0.100", "8.0.204", UpdateKind.PATCH),
            ("7.0.400", "8.0.100", UpdateKind.MAJOR),
            ("8.0.100-rc.2.23502.2", "8.0.100", UpdateKind.PATCH),
        ],
    )
    def test_classification(self, current: str, latest: str, expected: UpdateKind) -> None:
        assert classify_update(current, latest) == expected


class TestGenerateCommitMessage:
    """Tests for generate_commit_message()."""

    def test_structure(self) -> None:
        message = generate_commit_message("8.0.101", "8.0.204")
        assert message == (
            "Update .NET SDK\n"
            "\n"
            "Update .NET SDK to version 8.0.204.\n"
            "\n"
            "---\n"
            "updated-dependencies:\n"
            "- dependency-name: Microsoft.NET.Sdk\n"
            "  dependency-type: direct:production\n"
            "  update-type: version-update:semver-patch\n"
            "...\n"
            "\n"
        )

    def test_major_update_type(self) -> None:
        message = generate_commit_message("7.0.400", "8.0.100")
        assert "  update-type: version-update:semver-major\n" in message

    def test_prefix(self) -> None:
        message = generate_commit_message("8.0.101", "8.0.204", prefix="chore: ")
        assert message.startswith("chore: Update .NET SDK\n")


class TestGenerateTitle:
    """Tests for generate_title()."""

    def test_title(self) -> None:
        assert generate_title("8.0.204") == "Update .NET SDK to 8.0.204"
        assert generate_title("8.0.204", prefix="build: ") == "build: Update .NET SDK to 8.0.204"


class TestGeneratePullRequestBody:
    """Tests for generate_pull_request_body()."""

    def test_runtime_changed_with_advisories(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.101", channel)
        body = generate_pull_request_body(delta)

        assert body.startswith("Updates the .NET SDK to version `8.0.204`, ")
        assert "updates the .NET runtime from version [``8.0.1``](" in body
        assert "to version [``8.0.4``](" in body
        assert "/8.0.1/8.0.1.md" in body
        assert "/8.0.4/8.0.4.md" in body
        assert "fixes for the following security issue(s):" in body
        assert (
            "\n  * [CVE-2024-21386](https://www.cve.org/CVERecord?id=CVE-2024-21386)" in body
        )
        assert body.index("CVE-2024-21386") < body.index("CVE-2024-21409")
        assert "GitHub Actions" not in body

    def test_same_runtime(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.104", channel)
        body = generate_pull_request_body(delta)

        assert "which includes version [``8.0.4``](" in body
        assert "also updates" not in body

    def test_no_security_section_without_advisories(
        self, channel_factory, release_factory
    ) -> None:
        ch = channel_factory(
            "8.0.203",
            [
                release_factory("8.0.3", "8.0.203", security=True),
                release_factory("8.0.2", "8.0.200"),
            ],
        )
        body = generate_pull_request_body(get_latest_release("8.0.200", ch))
        assert "security issue" not in body

    def test_run_url_footer(self, channel: ReleaseChannel) -> None:
        delta = get_latest_release("8.0.101", channel)
        run_url = "https://github.com/owner/repo/actions/runs/42"
        body = generate_pull_request_body(delta, run_url=run_url)
        assert body.endswith(
            f"\n\nThis pull request was auto-generated by [GitHub Actions]({run_url})."
        )
