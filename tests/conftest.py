"""Shared fixtures for the .NET SDK updater tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from dotnet_sdk_updater.releases.models import ReleaseChannel

NOTES_URL = "https://github.com/dotnet/core/blob/main/release-notes/8.0"


def _cve(cve_id: str) -> dict[str, str]:
    return {"cve-id": cve_id, "cve-url": f"https://www.cve.org/CVERecord?id={cve_id}"}


def _release(
    runtime: str,
    sdk: str,
    *,
    sdks: list[str] | None = None,
    security: bool = False,
    cves: list[str] | None = None,
) -> dict[str, Any]:
    """Build one release entry in the shape of ``releases.json``."""
    entry: dict[str, Any] = {
        "release-date": "2024-01-09",
        "release-version": runtime,
        "security": security,
        "cve-list": [_cve(cve_id) for cve_id in cves or []],
        "release-notes": f"{NOTES_URL}/{runtime}/{runtime}.md",
        "runtime": {"version": runtime, "version-display": runtime},
        "sdk": {"version": sdk, "version-display": sdk, "runtime-version": runtime},
    }
    if sdks is not None:
        entry["sdks"] = [
            {"version": version, "version-display": version, "runtime-version": runtime}
            for version in sdks
        ]
    return entry


@pytest.fixture()
def release_factory() -> Callable[..., dict[str, Any]]:
    """Factory for raw release entries."""
    return _release


@pytest.fixture()
def channel_factory() -> Callable[..., ReleaseChannel]:
    """Factory for ``ReleaseChannel`` documents built from raw releases."""

    def _create(latest_sdk: str, releases: list[dict[str, Any]]) -> ReleaseChannel:
        return ReleaseChannel.model_validate(
            {
                "channel-version": "8.0",
                "latest-release": releases[0]["release-version"] if releases else "",
                "latest-sdk": latest_sdk,
                "release-type": "lts",
                "support-phase": "active",
                "releases": releases,
            }
        )

    return _create


@pytest.fixture()
def channel_document() -> dict[str, Any]:
    """A raw 8.0 channel document, newest release first."""
    return {
        "channel-version": "8.0",
        "latest-release": "8.0.4",
        "latest-release-date": "2024-04-09",
        "latest-runtime": "8.0.4",
        "latest-sdk": "8.0.204",
        "release-type": "lts",
        "support-phase": "active",
        "eol-date": "2026-11-10",
        "lifecycle-policy": "https://aka.ms/dotnetcoresupport",
        "releases": [
            _release(
                "8.0.4",
                "8.0.204",
                sdks=["8.0.204", "8.0.104"],
                security=True,
                cves=["CVE-2024-21409"],
            ),
            _release("8.0.3", "8.0.203", sdks=["8.0.203", "8.0.103"]),
            _release(
                "8.0.2",
                "8.0.200",
                sdks=["8.0.200", "8.0.102"],
                security=True,
                cves=["CVE-2024-21386", "CVE-2024-21404"],
            ),
            _release("8.0.1", "8.0.101", sdks=["8.0.101"], security=True, cves=["CVE-2024-0057"]),
            _release("8.0.0", "8.0.100", sdks=["8.0.100"]),
        ],
    }


@pytest.fixture()
def channel(channel_document: dict[str, Any]) -> ReleaseChannel:
    """The 8.0 channel as a parsed ``ReleaseChannel``."""
    return ReleaseChannel.model_validate(channel_document)
