"""Configuration management for the .NET SDK updater.

Values come from the environment.  When running as a GitHub Action the
inputs arrive as ``INPUT_<NAME>`` variables with hyphens preserved.  Shells
cannot export such names, so every input also accepts ``INPUT_<NAME>`` with
underscores for local runs.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dotnet_sdk_updater.constants import DEFAULT_HTTP_RETRIES, DEFAULT_RELEASES_BASE_URL


def _input(name: str) -> AliasChoices:
    """Accept the Actions input variable and its underscore spelling."""
    env_name = f"INPUT_{name.upper()}"
    return AliasChoices(env_name, env_name.replace("-", "_"))


class Settings(BaseSettings):
    """Run configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Action inputs
    repo_token: SecretStr = Field(
        validation_alias=_input("repo-token"), description="GitHub access token"
    )
    global_json_file: str = Field(
        validation_alias=_input("global-json-file"), description="Path to global.json"
    )
    branch_name: str = Field(default="", validation_alias=_input("branch-name"))
    channel: str = Field(default="", validation_alias=_input("channel"))
    commit_message: str = Field(default="", validation_alias=_input("commit-message"))
    commit_message_prefix: str = Field(
        default="", validation_alias=_input("commit-message-prefix")
    )
    dry_run: bool = Field(default=False, validation_alias=_input("dry-run"))
    generate_step_summary: bool = Field(
        default=True, validation_alias=_input("generate-step-summary")
    )
    labels: str = Field(default="", validation_alias=_input("labels"))
    quality: str = Field(default="", validation_alias=_input("quality"))
    user_name: str = Field(default="", validation_alias=_input("user-name"))
    user_email: str = Field(default="", validation_alias=_input("user-email"))

    # Workflow context
    repository: str = Field(default="", validation_alias="GITHUB_REPOSITORY")
    server_url: str = Field(default="https://github.com", validation_alias="GITHUB_SERVER_URL")
    api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    run_id: str = Field(default="", validation_alias="GITHUB_RUN_ID")
    github_actions: bool = Field(default=False, validation_alias="GITHUB_ACTIONS")
    output_file: str = Field(default="", validation_alias="GITHUB_OUTPUT")
    step_summary_file: str = Field(default="", validation_alias="GITHUB_STEP_SUMMARY")

    # Release feed
    releases_base_url: str = Field(
        default=DEFAULT_RELEASES_BASE_URL, validation_alias="RELEASES_BASE_URL"
    )
    http_retries: int = Field(default=DEFAULT_HTTP_RETRIES, ge=0, le=10)

    # Application
    environment: str = Field(default="production", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("dry_run", "generate_step_summary", mode="before")
    @classmethod
    def parse_flag(cls, v: object) -> object:
        """Treat empty Actions inputs as unset flags."""
        if isinstance(v, str) and not v.strip():
            return False
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def global_json_path(self) -> str:
        """Absolute, normalized path of the global.json file."""
        return os.path.abspath(os.path.normpath(self.global_json_file))

    @property
    def label_list(self) -> list[str]:
        """Labels to apply to the pull request, in configured order."""
        return [label.strip() for label in self.labels.split(",") if label.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
