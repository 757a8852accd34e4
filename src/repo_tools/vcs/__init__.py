"""Git command execution and output parsing for repo-tools.

This module runs the git executable against a working copy and turns its
text output into structured values.
"""

from repo_tools.vcs.exceptions import (
    CommandFailureError,
    InvalidRepositoryError,
    LogParseError,
    VCSError,
)
from repo_tools.vcs.log_parser import LogParser, ParserState, parse_log
from repo_tools.vcs.repository import GitRepository
from repo_tools.vcs.runner import CommandResult, CommandRunner, execute

__all__ = [
    "CommandFailureError",
    "CommandResult",
    "CommandRunner",
    "GitRepository",
    "InvalidRepositoryError",
    "LogParseError",
    "LogParser",
    "ParserState",
    "VCSError",
    "execute",
    "parse_log",
]
