"""Reading and rewriting the global.json manifest."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from dotnet_sdk_updater.errors import ManifestInvalidError


class GlobalJson:
    """An in-memory global.json document.

    Only ``sdk.version`` is interpreted; every other key is carried through
    a rewrite untouched and in its original order.
    """

    def __init__(self, path: str | Path, data: dict[str, Any]) -> None:
        self.path = Path(path)
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> GlobalJson:
        """Load a global.json file.

        Raises:
            ManifestInvalidError: The file is missing, is not a JSON object,
                or does not declare an SDK version.
        """
        try:
            with open(path, encoding="utf-8-sig") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise ManifestInvalidError(f"The global.json file '{path}' cannot be found.") from exc
        except json.JSONDecodeError as exc:
            raise ManifestInvalidError(f"The global.json file '{path}' is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ManifestInvalidError(f"The global.json file '{path}' is not a JSON object.")

        manifest = cls(path, data)
        if not manifest.sdk_version:
            raise ManifestInvalidError(f".NET SDK version cannot be found in '{path}'.")
        return manifest

    @property
    def sdk_version(self) -> str:
        sdk = self._data.get("sdk")
        if not isinstance(sdk, dict):
            return ""
        version = sdk.get("version")
        return version if isinstance(version, str) else ""

    @sdk_version.setter
    def sdk_version(self, version: str) -> None:
        sdk = self._data.get("sdk")
        if not isinstance(sdk, dict):
            sdk = {}
            self._data["sdk"] = sdk
        sdk["version"] = version

    def dumps(self) -> str:
        """Serialize as two-space indented JSON with a trailing newline."""
        return json.dumps(self._data, indent=2, ensure_ascii=False) + os.linesep

    def save(self) -> None:
        # newline="" keeps os.linesep from being translated a second time
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(self.dumps())
