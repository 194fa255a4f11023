"""Asynchronous external-process runner with a hard deadline."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import ProcessTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Exit status and decoded output of a finished process."""
    returncode: int
    stdout: str
    stderr: str


async def run_process(*cmd: str, timeout: Optional[float] = None) -> ProcessResult:
    """Run a command and collect its output.

    The child is killed and reaped on every exit path: normal completion,
    deadline expiry, and cancellation of the awaiting task.

    Args:
        cmd: Executable followed by its arguments
        timeout: Seconds to wait before killing the process, or None for no deadline

    Returns:
        ProcessResult with the exit code and decoded stdout/stderr

    Raises:
        ProcessTimeoutError: If the deadline expires
        FileNotFoundError: If the executable does not exist
    """
    logger.debug(f"Spawning: {cmd[0]} ({len(cmd) - 1} args, timeout={timeout})")
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE
    )

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except asyncio.TimeoutError:
        raise ProcessTimeoutError(cmd, timeout)
    finally:
        if process.returncode is None:
            logger.debug(f"Killing {cmd[0]} (pid={process.pid})")
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()

    return ProcessResult(
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
