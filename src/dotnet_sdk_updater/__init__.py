"""Dotnet SDK Updater - keeps a global.json pinned to the latest .NET SDK."""

__version__ = "0.1.0"
