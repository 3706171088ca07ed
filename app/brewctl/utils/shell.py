"""Blocking subprocess helpers for short brew queries.

Scanners use these to read brew's JSON output. Long running, cancelable
operations go through :class:`brewctl.core.runner.OperationRunner`
instead.
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output of a finished query.

    Attributes:
        stdout: Standard output, decoded as text.
        stderr: Standard error, decoded as text.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the query exited with status 0."""
        return self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Return stderr, or stdout when stderr is empty, stripped."""
        return self.stderr.strip() or self.stdout.strip()


def run_command(
    args: Sequence[str],
    *,
    timeout: float | None = 60.0,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds to wait before giving up.
        env: Variables added on top of the inherited environment.

    Returns:
        CommandResult; a non-zero exit is not an error here.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds ``timeout``.
        OSError: If the executable cannot be started.
    """
    logger.debug("Running %s", " ".join(args))
    completed = subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        env={**os.environ, **env} if env else None,
    )
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


def command_exists(command: str) -> bool:
    """Check if ``command`` is an executable on PATH or an executable path."""
    return shutil.which(command) is not None
