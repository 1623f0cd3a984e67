"""Entry point for ``python -m dotnet_sdk_updater``."""

from dotnet_sdk_updater.main import run

if __name__ == "__main__":
    run()
