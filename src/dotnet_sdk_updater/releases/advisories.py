"""Normalization of security advisories listed in release feeds."""

from __future__ import annotations

from collections.abc import Iterable

from dotnet_sdk_updater.releases.models import AdvisoryEntry, Cve


def map_advisories(cves: Iterable[Cve] | None) -> list[AdvisoryEntry]:
    """Map feed CVE entries to ``AdvisoryEntry`` values, keeping their order."""
    if not cves:
        return []
    return [AdvisoryEntry(id=cve.cve_id, url=cve.cve_url) for cve in cves]
