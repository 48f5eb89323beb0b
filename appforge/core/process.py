"""
Asynchronous subprocess execution shared by the local agent provider and the
validation gate.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Captured outcome of a finished command."""

    returncode: int
    stdout: str
    stderr: str


async def run_command(
    cmd: list[str],
    input_text: str | None = None,
    cwd: Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run a command without a shell and capture both output streams.

    When ``input_text`` is given it is written to the child's stdin, which is
    then closed; otherwise stdin is ``/dev/null``.

    Args:
        cmd: Program and arguments
        input_text: Text fed to stdin
        cwd: Working directory
        timeout: Seconds before the process is killed

    Returns:
        CommandResult with decoded output

    Raises:
        OSError: If the executable cannot be started (e.g. FileNotFoundError).
        TimeoutError: If the command runs longer than ``timeout``.
    """
    logger.info("Running command", command=" ".join(cmd), cwd=str(cwd) if cwd else None)

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )

    stdin_bytes = input_text.encode("utf-8") if input_text is not None else None
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(stdin_bytes), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning("Command timed out", command=cmd[0], timeout=timeout)
        raise TimeoutError(f"{cmd[0]} did not finish within {timeout}s") from None

    result = CommandResult(
        returncode=process.returncode or 0,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    logger.info(
        "Command completed",
        returncode=result.returncode,
        stdout_chars=len(result.stdout),
        stderr_chars=len(result.stderr),
    )
    return result
