"""Shell command runner for Android project builds."""

from dataclasses import dataclass
from typing import Optional
import asyncio
import os
import signal
import time

import structlog

from core.errors import CommandFailed, CommandTimeout

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 1500.0


@dataclass
class CommandResult:
    """Outcome of a finished command."""
    command: str
    cwd: Optional[str]
    returncode: int
    stdout: str
    stderr: str
    duration: float

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """
    Runs shell commands with a wall-clock limit.

    Commands are started in their own process group so that a timeout kills
    the whole tree (gradle daemons, yarn children), not just the shell.
    """

    def __init__(self, default_timeout: float = DEFAULT_TIMEOUT):
        self.default_timeout = default_timeout

    async def run(
        self,
        command: str,
        cwd: Optional[str] = None,
        timeout: Optional[float] = None,
        check: bool = True,
    ) -> CommandResult:
        timeout = timeout or self.default_timeout
        if cwd is not None and not os.path.isdir(cwd):
            raise FileNotFoundError(f"Project directory not found: {cwd}")

        logger.info("command_started", command=command, cwd=cwd, timeout=timeout)
        started = time.monotonic()

        process = await asyncio.create_subprocess_shell(
            command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=os.name == "posix",
        )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            self._kill(process)
            await process.wait()
            logger.error("command_timed_out", command=command, timeout=timeout)
            raise CommandTimeout(command, timeout)

        result = CommandResult(
            command=command,
            cwd=cwd,
            returncode=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            duration=time.monotonic() - started,
        )

        logger.info(
            "command_finished",
            command=command,
            returncode=result.returncode,
            duration=round(result.duration, 2),
        )

        if check and not result.success:
            raise CommandFailed(command, result.returncode, result.stdout, result.stderr)

        return result

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        try:
            if os.name == "posix":
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass
