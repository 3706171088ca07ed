"""Cancelable execution of external commands.

The runner starts a process without blocking the event loop, races its
exit against a CancellationToken, and always resolves to exactly one
Outcome. A cancelled process is terminated and reaped before the
runner returns.
"""

import asyncio
import contextlib
import logging
import os
import signal

from brewctl.core.cancellation import CancellationToken
from brewctl.core.commands import CommandSpec
from brewctl.core.config import DEFAULT_TERMINATE_GRACE_SECONDS
from brewctl.core.errors import LaunchFailure, ProcessFailure
from brewctl.models.operation import Outcome, cancelled, failed, succeeded

logger = logging.getLogger(__name__)


class OperationRunner:
    """Runs one CommandSpec per call under a cancellation token.

    Each process is started in its own session so that cancelling also
    reaches the helpers brew spawns (curl, git, ruby).

    Attributes:
        terminate_grace: Seconds to wait after SIGTERM before SIGKILL.

    Example:
        >>> runner = OperationRunner()
        >>> outcome = await runner.run(spec, CancellationToken())
        >>> outcome.success
        True
    """

    def __init__(self, terminate_grace: float = DEFAULT_TERMINATE_GRACE_SECONDS) -> None:
        """Initialize the runner.

        Args:
            terminate_grace: Seconds between SIGTERM and SIGKILL on cancel.
        """
        self._terminate_grace = terminate_grace

    @property
    def terminate_grace(self) -> float:
        """Return the SIGTERM grace period in seconds."""
        return self._terminate_grace

    async def run(self, spec: CommandSpec, token: CancellationToken) -> Outcome:
        """Run a command until it exits or the token is cancelled.

        Args:
            spec: Command to execute.
            token: Cancellation token; may be cancelled at any time.

        Returns:
            SUCCESS on exit status 0, FAILURE with brew's diagnostic text on
            a non-zero exit or launch error, CANCELLED if the token fired
            before the process exited.

        Raises:
            asyncio.CancelledError: If the awaiting task itself is cancelled.
                The process is terminated and reaped first.
        """
        if token.cancelled:
            logger.info("Skipping %s: cancelled before launch", spec)
            return cancelled()

        try:
            process = await self._spawn(spec)
            return await self._supervise(spec, process, token)
        except LaunchFailure as e:
            logger.warning("%s", e)
            return failed(str(e))
        except ProcessFailure as e:
            logger.info("%s exited with status %d", spec, e.returncode)
            return failed(str(e), e.returncode)

    async def _spawn(self, spec: CommandSpec) -> asyncio.subprocess.Process:
        """Start the process with captured output.

        Raises:
            LaunchFailure: If the executable cannot be started.
        """
        logger.info("Executing %s", spec)
        env = {**os.environ, **spec.env}
        try:
            return await asyncio.create_subprocess_exec(
                *spec.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            # ValueError: an argument contains a NUL byte
            msg = f"Could not start {spec.executable}: {getattr(e, 'strerror', None) or e}"
            raise LaunchFailure(msg) from e

    async def _supervise(
        self,
        spec: CommandSpec,
        process: asyncio.subprocess.Process,
        token: CancellationToken,
    ) -> Outcome:
        """Wait for exit or cancellation, whichever comes first.

        Raises:
            ProcessFailure: If the process exits with a non-zero status.
        """
        communicate = asyncio.ensure_future(process.communicate())
        cancel_wait = asyncio.ensure_future(token.wait())
        try:
            done, _ = await asyncio.wait(
                {communicate, cancel_wait},
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            await self._terminate(process, communicate)
            raise
        finally:
            cancel_wait.cancel()

        # An exit observed together with a cancel counts as an exit
        if communicate not in done:
            await self._terminate(process, communicate)
            logger.info("Cancelled %s (pid %d, status %s)", spec, process.pid, process.returncode)
            return cancelled(process.returncode)

        stdout, stderr = communicate.result()
        returncode = process.returncode
        assert returncode is not None

        if returncode != 0:
            raise ProcessFailure(_diagnostic(spec, returncode, stdout, stderr), returncode)

        logger.debug("Completed %s", spec)
        return succeeded(returncode)

    async def _terminate(
        self,
        process: asyncio.subprocess.Process,
        communicate: "asyncio.Future[tuple[bytes, bytes]]",
    ) -> None:
        """Terminate the process group and wait until the process is reaped."""
        if process.returncode is None:
            logger.info("Terminating pid %d", process.pid)
            _signal_group(process, signal.SIGTERM)
            try:
                await asyncio.wait_for(asyncio.shield(communicate), self._terminate_grace)
            except TimeoutError:
                logger.warning(
                    "pid %d still running %.1fs after SIGTERM, killing",
                    process.pid,
                    self._terminate_grace,
                )
                _signal_group(process, signal.SIGKILL)
        await communicate


def _signal_group(process: asyncio.subprocess.Process, sig: signal.Signals) -> None:
    """Send a signal to the process group led by ``process``."""
    try:
        os.killpg(process.pid, sig)
    except ProcessLookupError:
        pass
    except PermissionError:
        with contextlib.suppress(ProcessLookupError):
            process.send_signal(sig)


def _diagnostic(spec: CommandSpec, returncode: int, stdout: bytes, stderr: bytes) -> str:
    """Pick the text to show for a failed command.

    brew writes its errors to stderr; some sub-commands only print to
    stdout, so that is the fallback.
    """
    for stream in (stderr, stdout):
        text = stream.decode(errors="replace").strip()
        if text:
            return text
    return f"{spec.executable} exited with status {returncode}"
