"""Thin async wrapper around the git CLI.

Output is captured rather than streamed.  A call fails when git exits
non-zero or writes anything to stderr, unless the caller tolerates errors,
in which case stderr is only logged at debug level.
"""

from __future__ import annotations

import asyncio

from dotnet_sdk_updater.constants import GIT_TIMEOUT_SECONDS
from dotnet_sdk_updater.errors import GitCommandFailedError
from dotnet_sdk_updater.logging import get_logger

log = get_logger("dotnet_sdk_updater.updater.git")


class GitClient:
    """Runs git commands in a working directory."""

    def __init__(self, cwd: str, timeout: int = GIT_TIMEOUT_SECONDS) -> None:
        self._cwd = cwd
        self._timeout = timeout

    async def run(self, args: list[str], ignore_errors: bool = False) -> str:
        """Run ``git <args>`` and return stdout with trailing whitespace removed.

        Raises:
            GitCommandFailedError: git could not be started, timed out, or
                failed while ``ignore_errors`` is False.
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                "git",
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
            )
        except OSError as exc:
            raise GitCommandFailedError(args, str(exc)) from exc

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout
            )
        except TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise GitCommandFailedError(args, f"timed out after {self._timeout}s") from exc

        stdout = stdout_bytes.decode(errors="replace")
        stderr = stderr_bytes.decode(errors="replace")

        if not ignore_errors and (proc.returncode != 0 or stderr):
            log.warning(
                "git_command_failed",
                args=args,
                returncode=proc.returncode,
                stderr=stderr[:500],
            )
            raise GitCommandFailedError(args, stderr, returncode=proc.returncode)

        log.debug("git_stdout", args=args, stdout=stdout)
        if stderr:
            log.debug("git_stderr", args=args, stderr=stderr, returncode=proc.returncode)

        return stdout.rstrip()
