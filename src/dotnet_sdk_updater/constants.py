"""Centralized constants for the .NET SDK updater."""

# Release feed
DEFAULT_RELEASES_BASE_URL = "https://raw.githubusercontent.com/dotnet/core/main/release-notes"
RELEASES_FILE_NAME = "releases.json"
USER_AGENT = "dotnet-sdk-updater"

# HTTP
HTTP_TIMEOUT_SECONDS = 30
HTTP_RETRY_DELAY_SECONDS = 1.0
DEFAULT_HTTP_RETRIES = 3

# Git
GIT_TIMEOUT_SECONDS = 120
BRANCH_PREFIX = "update-dotnet-sdk-"
SHORT_SHA_LENGTH = 7

# Commit metadata
DEPENDENCY_NAME = "Microsoft.NET.Sdk"
DEPENDENCY_TYPE = "direct:production"
