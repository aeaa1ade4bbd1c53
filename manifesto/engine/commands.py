"""
Command Runner — Runs workspace tooling (tests, coverage, lint, git) as subprocesses.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger("manifesto.enforcement.commands")


@dataclass
class CommandResult:
    """Outcome of one shell command."""

    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


async def run_command(command: str, cwd: str = ".", timeout: float = 30.0) -> CommandResult:
    """
    Run a shell command and capture its output.

    A timeout kills the process and returns a result with timed_out=True.
    Raises OSError if the process cannot be started at all.
    """
    proc = await asyncio.create_subprocess_shell(
        command,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        logger.warning(f"Command timed out after {timeout}s: {command}")
        return CommandResult(command=command, returncode=-1, timed_out=True)

    return CommandResult(
        command=command,
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
