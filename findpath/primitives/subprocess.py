"""Subprocess execution primitive.

Probe and check commands are shell strings taken from trusted configuration.
Expected failures (nonzero exit, timeout, spawn error) come back as a
SubprocessResult with success=False instead of raising.
"""

import logging
import os
import signal
import subprocess
import time
from dataclasses import dataclass
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass
class SubprocessResult:
    """Result of subprocess execution.

    Attributes:
        success: True if return code is 0.
        stdout: Standard output from process.
        stderr: Standard error from process.
        return_code: Exit code from process, -1 if it never finished.
        duration_ms: Time taken for execution in milliseconds.
        timed_out: True if the process was killed after the timeout.
    """

    success: bool
    stdout: str
    stderr: str
    return_code: int
    duration_ms: float
    timed_out: bool = False


class CommandRunner(Protocol):
    """Anything that can run a shell command and report how it went."""

    def run(self, command: str, timeout: Optional[float] = None) -> SubprocessResult:
        ...


class ShellCommandRunner:
    """Runs commands through the system shell, capturing output."""

    def run(self, command: str, timeout: Optional[float] = None) -> SubprocessResult:
        """Execute *command* synchronously.

        Args:
            command: Shell command line.
            timeout: Seconds to wait before killing the process. None waits
                forever.

        Returns:
            SubprocessResult with execution details.
        """
        start_time = time.time()
        logger.debug("Running %r (timeout=%s)", command, timeout)

        try:
            # Own process group, so a timeout also reaches pipeline children
            proc = subprocess.Popen(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.debug("Command failed to start: %s (%s)", command, e)
            return SubprocessResult(
                success=False,
                stdout="",
                stderr=str(e),
                return_code=-1,
                duration_ms=duration_ms,
            )

        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_group(proc)
            proc.communicate()
            duration_ms = (time.time() - start_time) * 1000
            logger.warning("Command timed out after %s seconds: %s", timeout, command)
            return SubprocessResult(
                success=False,
                stdout="",
                stderr=f"timed out after {timeout} seconds",
                return_code=-1,
                duration_ms=duration_ms,
                timed_out=True,
            )

        duration_ms = (time.time() - start_time) * 1000
        if proc.returncode != 0:
            logger.debug(
                "Command exited %d: %s\n%s", proc.returncode, command, (stderr or "").strip()
            )

        return SubprocessResult(
            success=proc.returncode == 0,
            stdout=stdout or "",
            stderr=stderr or "",
            return_code=proc.returncode,
            duration_ms=duration_ms,
        )


def _kill_group(proc: "subprocess.Popen[str]") -> None:
    """Kill *proc* and everything the shell started under it."""
    if os.name == "nt":
        proc.kill()
        return
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        logger.debug("Process group %d already exited", proc.pid)
