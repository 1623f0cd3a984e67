"""Main entry point for the .NET SDK updater."""

import asyncio
import os
import sys

from pydantic import ValidationError

from dotnet_sdk_updater.config import get_settings
from dotnet_sdk_updater.errors import ManifestInvalidError, SdkUpdateError
from dotnet_sdk_updater.logging import get_logger, setup_logging
from dotnet_sdk_updater.updater.manager import SdkUpdater
from dotnet_sdk_updater.updater.outputs import write_outputs, write_step_summary


async def main() -> int:
    """Check for and apply a .NET SDK update; returns the process exit code."""
    log = get_logger("dotnet_sdk_updater.main")

    try:
        settings = get_settings()
    except ValidationError as exc:
        log.error("invalid_configuration", error=str(exc))
        return 1

    setup_logging(settings)

    try:
        if not os.path.isfile(settings.global_json_path):
            raise ManifestInvalidError(
                f"The global.json file '{settings.global_json_path}' cannot be found."
            )

        updater = SdkUpdater(settings)
        result = await updater.try_update()

        write_outputs(result, settings.output_file)
        if settings.generate_step_summary:
            write_step_summary(result, settings.step_summary_file)
    except SdkUpdateError as exc:
        log.exception("sdk_update_failed", error=str(exc))
        return 1
    except Exception as exc:
        log.exception("sdk_update_unexpected_error", error=str(exc))
        return 1

    log.info("sdk_update_finished", **result.to_dict())
    return 0


def run() -> None:
    """Run the application."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
