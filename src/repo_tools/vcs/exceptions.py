"""VCS exceptions for repo-tools.

Every failure raised by the git wrapper derives from VCSError so callers
can catch the whole family at their own boundary.
"""

from collections.abc import Sequence


class VCSError(Exception):
    """Base exception for all VCS-related errors."""


class InvalidRepositoryError(VCSError):
    """Raised when a path does not contain version control metadata."""


class CommandFailureError(VCSError):
    """Raised when a git command fails or is rejected before it runs.

    The message is the captured standard error of the command, verbatim.
    """

    def __init__(
        self,
        message: str,
        args: Sequence[str] | None = None,
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stderr = message
        self.command_args = list(args) if args is not None else []
        self.exit_code = exit_code


class LogParseError(VCSError):
    """Raised when log output cannot be parsed into commit records."""
