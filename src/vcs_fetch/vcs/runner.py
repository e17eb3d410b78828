"""Synchronous execution of VCS client processes."""

import logging
import subprocess
from collections.abc import Callable
from typing import NamedTuple

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    """Result of an external command.

    ``output`` holds stdout when the command succeeded and stderr otherwise.
    """

    exit_code: int
    output: str

    @property
    def success(self) -> bool:
        """Check if the command exited with code 0.

        Returns:
            True if the command succeeded
        """
        return self.exit_code == 0


CommandRunner = Callable[[list[str]], CommandResult]


def run_command(cmd: list[str]) -> CommandResult:
    """Run an external command and capture its output.

    Failing to spawn the process (for example because the executable is not
    on the search path) is reported as exit code -1 with the error text.

    Args:
        cmd: The command to execute, as a list of strings.

    Returns:
        A CommandResult with the outcome.
    """
    logger.debug(f"Executing: {' '.join(cmd)}")
    try:
        process = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.debug(f"Could not start {cmd[0]}: {e}")
        return CommandResult(exit_code=-1, output=str(e))

    if process.stdout:
        logger.debug(process.stdout.rstrip())
    if process.stderr:
        logger.debug(process.stderr.rstrip())

    output = process.stdout if process.returncode == 0 else process.stderr
    return CommandResult(exit_code=process.returncode, output=output)
