"""Step outputs and job summary for GitHub Actions runs."""

from __future__ import annotations

import uuid
from pathlib import Path

from dotnet_sdk_updater.logging import get_logger
from dotnet_sdk_updater.updater.manager import UpdateResult

log = get_logger("dotnet_sdk_updater.updater.outputs")


def write_outputs(result: UpdateResult, output_file: str = "") -> None:
    """Publish *result* as step outputs.

    Values are appended to the ``GITHUB_OUTPUT`` file when one is configured.
    Multi-line values use the heredoc delimiter syntax Actions expects.
    """
    outputs = result.to_outputs()
    log.info("step_outputs", **{name.replace("-", "_"): value for name, value in outputs.items()})

    if not output_file:
        return

    lines: list[str] = []
    for name, value in outputs.items():
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            lines.extend([f"{name}<<{delimiter}", value, delimiter])
        else:
            lines.append(f"{name}={value}")

    with open(output_file, "a", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")


def render_step_summary(result: UpdateResult) -> str:
    """Render a Markdown job summary for an applied update."""
    delta = result.delta
    lines = ["## .NET SDK Update", ""]

    if delta is not None:
        lines.append(
            f"The .NET SDK was updated from `{delta.current.sdk_version}` "
            f"to `{delta.latest.sdk_version}`."
        )
        if delta.runtime_changed:
            lines.append(
                f"The .NET runtime was updated from `{delta.current.runtime_version}` "
                f"to `{delta.latest.runtime_version}`."
            )
    else:
        lines.append(f"The .NET SDK was updated to `{result.version}`.")

    if result.pull_request_url:
        lines.extend(
            [
                "",
                f"Pull request [#{result.pull_request_number}]({result.pull_request_url}) "
                f"was opened from `{result.branch_name}`.",
            ]
        )

    if delta is not None and delta.security and delta.security_issues:
        lines.extend(["", "### Security Issues", ""])
        lines.extend(f"- [{issue.id}]({issue.url})" for issue in delta.security_issues)

    return "\n".join(lines) + "\n"


def write_step_summary(result: UpdateResult, summary_file: str) -> bool:
    """Append the job summary for *result*; returns True if anything was written."""
    if not summary_file or not result.updated:
        return False
    path = Path(summary_file)
    with path.open("a", encoding="utf-8") as f:
        f.write(render_step_summary(result))
    log.debug("step_summary_written", path=str(path))
    return True
