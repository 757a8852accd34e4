"""Git working copy handle."""

import logging
from collections.abc import Sequence
from pathlib import Path

from repo_tools.config import RepoToolsConfig
from repo_tools.config.models import DEFAULT_GIT_BINARY, DEFAULT_LOCALE
from repo_tools.models import Commit
from repo_tools.vcs.exceptions import CommandFailureError, InvalidRepositoryError
from repo_tools.vcs.log_parser import parse_log
from repo_tools.vcs.runner import CommandRunner

logger = logging.getLogger(__name__)

GIT_METADATA = ".git"


def _as_list(target: str | Path | Sequence[str | Path]) -> list[str]:
    if isinstance(target, str | Path):
        return [str(target)]
    return [str(t) for t in target]


class GitRepository:
    """Runs git operations against a single working copy.

    Every method builds an argument list and hands it to a CommandRunner.
    Failures surface as CommandFailureError carrying git's own message.
    """

    def __init__(
        self,
        repo_path: str | Path,
        git_binary: str = DEFAULT_GIT_BINARY,
        *,
        runner: CommandRunner | None = None,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        """Initialize the handle.

        Args:
            repo_path: Path to the working copy
            git_binary: Name or path of the git executable
            runner: Runner to execute commands with (default: a CommandRunner
                for ``git_binary`` and ``locale``)
            locale: Value forced into LC_ALL for every git invocation

        Raises:
            InvalidRepositoryError: If repo_path has no .git entry
        """
        path = Path(repo_path)
        if not (path / GIT_METADATA).exists():
            msg = f"Given repository path does not exist: {path}"
            raise InvalidRepositoryError(msg)

        self._repo_path = path
        self._git_binary = git_binary
        self._runner = runner or CommandRunner(git_binary, locale=locale)

    @classmethod
    def create(cls, repo_path: str | Path, git_binary: str = DEFAULT_GIT_BINARY) -> "GitRepository":
        """Create a handle for an existing working copy.

        Args:
            repo_path: Path to the working copy
            git_binary: Name or path of the git executable

        Returns:
            Repository handle
        """
        return cls(repo_path, git_binary)

    @classmethod
    def from_config(cls, config: RepoToolsConfig, repo_path: str | Path | None = None) -> "GitRepository":
        """Create a handle from configuration.

        Args:
            config: Loaded configuration
            repo_path: Working copy overriding the configured one

        Returns:
            Repository handle
        """
        path = Path(repo_path) if repo_path is not None else config.resolve_repo_path()
        return cls(path, config.git_binary, locale=config.locale)

    @classmethod
    def initialize(
        cls,
        path: str | Path,
        git_binary: str = DEFAULT_GIT_BINARY,
        *,
        locale: str = DEFAULT_LOCALE,
    ) -> "GitRepository":
        """Run ``git init`` in an existing directory and open it.

        Args:
            path: Directory to turn into a working copy
            git_binary: Name or path of the git executable
            locale: Value forced into LC_ALL for every git invocation

        Returns:
            Repository handle for the new working copy

        Raises:
            CommandFailureError: If git init fails
        """
        runner = CommandRunner(git_binary, locale=locale)
        runner.run(path, ["init", "--quiet"])
        return cls(path, git_binary, runner=runner)

    @property
    def repo_path(self) -> Path:
        """Path to the working copy."""
        return self._repo_path

    @property
    def git_binary(self) -> str:
        """Name or path of the git executable."""
        return self._git_binary

    def _run(self, args: list[str]) -> str:
        return self._runner.run(self._repo_path, args)

    def add(self, target: str | Path | Sequence[str | Path]) -> str:
        """Stage one or more paths.

        Args:
            target: Path or paths to stage

        Returns:
            Git output
        """
        return self._run(["add", *_as_list(target)])

    def checkout(self, revision: str) -> str:
        """Force-checkout a revision, discarding local changes.

        Args:
            revision: Branch, tag or commit to check out

        Returns:
            Git output

        Raises:
            CommandFailureError: If the revision does not exist
        """
        return self._run(["checkout", "--force", "--quiet", revision])

    def commit(self, target: str | Path | Sequence[str | Path], message: str) -> Commit:
        """Commit paths and return the resulting commit.

        Args:
            target: Path or paths to commit
            message: Commit message

        Returns:
            The newest commit after committing

        Raises:
            CommandFailureError: If the message is blank or git refuses the commit
        """
        if not message.strip():
            raise CommandFailureError("Commit message can not be empty.")

        self._run(["commit", "-m", message, "--", *_as_list(target)])
        logger.debug("Committed to %s", self._repo_path)

        return self.commits(1)[0]

    def commits(self, limit: int | None = None, reverse: bool = False) -> list[Commit]:
        """List non-merge commits in date order.

        Args:
            limit: Maximum number of commits to return
            reverse: If True, list oldest first

        Returns:
            Commits in the order git lists them

        Raises:
            CommandFailureError: If git log fails (e.g. no commits yet)
            LogParseError: If the log output cannot be parsed
        """
        args = ["log", "--no-merges", "--date-order", "--format=medium", "--date=default"]
        if limit:
            args.append(f"--max-count={limit}")
        if reverse:
            args.append("--reverse")

        return parse_log(self._run(args))

    def current_branch(self) -> str:
        """Get the name of the checked-out branch.

        Returns:
            Branch name

        Raises:
            CommandFailureError: If HEAD is detached
        """
        return self._run(["symbolic-ref", "--short", "-q", "HEAD"]).strip()

    def diff(self, from_revision: str, to_revision: str) -> str:
        """Get the diff between two revisions.

        Args:
            from_revision: Base revision
            to_revision: Target revision

        Returns:
            Unified diff text
        """
        return self._run(["diff", "--no-ext-diff", from_revision, to_revision])

    def init(self) -> str:
        """Run ``git init`` in the working copy.

        Returns:
            Git output
        """
        return self._run(["init"])

    def is_clean(self) -> bool:
        """Check if the working copy has no uncommitted or untracked changes.

        Returns:
            True if ``git status`` reports nothing
        """
        return self._run(["status", "--short"]) == ""

    def pull(self, remote: str = "origin", branch: str = "master", rebase: bool = False) -> str:
        """Pull a branch from a remote.

        Args:
            remote: Remote name
            branch: Branch to pull
            rebase: If True, rebase instead of merging

        Returns:
            Git output
        """
        args = ["pull"]
        if rebase:
            args.append("--rebase")
        args.extend([remote, branch])

        return self._run(args)

    def remote(self, action: str | None = None, options: str | Sequence[str] | None = None) -> str:
        """Run a ``git remote`` subcommand.

        Args:
            action: Subcommand such as ``add`` or ``remove`` (default: list)
            options: Arguments for the subcommand

        Returns:
            Trimmed git output
        """
        args = ["remote"]
        if action:
            args.append(action)
        if options is not None:
            args.extend(_as_list(options))

        return self._run(args).strip()

    def remotes(self) -> list[str]:
        """List configured remote names.

        Returns:
            Remote names, empty if none are configured
        """
        return [line.strip() for line in self.remote().splitlines() if line.strip()]
