"""Version string parsing for SDK, runtime and channel identifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass

from dotnet_sdk_updater.errors import VersionInvalidError

# 8.0.100, 8.0.1, 9.0.100-preview.7.24407.12, 8.0.0-rc.2.23479.6
_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<pre>[0-9A-Za-z.\-]+))?(?:\+[0-9A-Za-z.\-]+)?$"
)


@dataclass(frozen=True)
class DotNetVersion:
    """A parsed ``major.minor.patch[-prerelease]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: str = ""

    @classmethod
    def parse(cls, text: str) -> DotNetVersion:
        """Parse *text*, raising ``VersionInvalidError`` when it is not a version."""
        m = _VERSION_RE.match(text.strip())
        if m is None:
            raise VersionInvalidError(f".NET version '{text}' is not valid.")
        return cls(
            major=int(m.group("major")),
            minor=int(m.group("minor")),
            patch=int(m.group("patch")),
            prerelease=m.group("pre") or "",
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def with_patch(self, patch: int) -> str:
        """Return the stable ``major.minor.patch`` string for another patch."""
        return f"{self.major}.{self.minor}.{patch}"

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.prerelease}" if self.prerelease else base


def channel_for_sdk(sdk_version: str) -> str:
    """Derive the ``<major>.<minor>`` channel an SDK version belongs to."""
    parts = sdk_version.split(".")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise VersionInvalidError(f".NET SDK version '{sdk_version}' is not valid.")
    return f"{parts[0]}.{parts[1]}"


def version_segment(version: str, index: int) -> int:
    """Return the numeric leading part of the *index*-th dotted segment.

    Missing or non-numeric segments count as zero.
    """
    parts = version.split(".")
    if index >= len(parts):
        return 0
    m = re.match(r"\d+", parts[index])
    return int(m.group(0)) if m else 0
