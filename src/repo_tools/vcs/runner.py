"""Execution of git commands against a working copy."""

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from repo_tools.config.models import DEFAULT_GIT_BINARY, DEFAULT_LOCALE
from repo_tools.vcs.exceptions import CommandFailureError

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    """Result of an external command."""

    success: bool
    stdout: str
    stderr: str
    exit_code: int | None = None


def execute(
    repo_path: str | Path,
    executable: str,
    args: Sequence[str],
    locale: str = DEFAULT_LOCALE,
) -> CommandResult:
    """Run an external command inside a working copy and capture its output.

    The command runs without a shell, with ``repo_path`` as its working
    directory and ``LC_ALL`` forced to ``locale`` so that dates and status
    messages come back in a stable, parseable form.

    Args:
        repo_path: Directory the command runs in
        executable: Name or path of the program to run
        args: Arguments passed to the program, one token per element
        locale: Value for LC_ALL

    Returns:
        A CommandResult with the outcome

    Raises:
        CommandFailureError: If the executable cannot be found
    """
    cmd = [executable, *args]
    env = {**os.environ, "LC_ALL": locale}

    logger.debug("Running %s in %s", cmd, repo_path)
    try:
        process = subprocess.run(
            cmd,
            cwd=str(repo_path),
            env=env,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as e:
        msg = f"Executable not found: {executable}"
        raise CommandFailureError(msg, args=cmd) from e

    logger.debug("%s exited with %s", executable, process.returncode)

    # Decoded from bytes so "\r" and "\r\n" reach the caller untranslated
    stdout = process.stdout.decode("utf-8", errors="replace") if process.stdout else ""
    stderr = process.stderr.decode("utf-8", errors="replace") if process.stderr else ""

    return CommandResult(
        success=process.returncode == 0,
        stdout=stdout,
        stderr=stderr,
        exit_code=process.returncode,
    )


class CommandRunner:
    """Runs one executable against a working copy and surfaces failures.

    Output is returned untouched; trimming is left to the caller. A failed
    command is never retried.
    """

    def __init__(self, executable: str = DEFAULT_GIT_BINARY, locale: str = DEFAULT_LOCALE) -> None:
        """Initialize the runner.

        Args:
            executable: Name or path of the program to run
            locale: Value forced into LC_ALL for every invocation
        """
        self.executable = executable
        self.locale = locale

    def run(self, repo_path: str | Path, args: Sequence[str]) -> str:
        """Run a command and return its standard output.

        Args:
            repo_path: Directory the command runs in
            args: Arguments passed to the executable

        Returns:
            Captured standard output, unmodified

        Raises:
            CommandFailureError: If the command exits non-zero; the message is
                the captured standard error
        """
        result = execute(repo_path, self.executable, args, locale=self.locale)

        if not result.success:
            raise CommandFailureError(
                result.stderr,
                args=[self.executable, *args],
                exit_code=result.exit_code,
            )

        return result.stdout
