"""Tests for CLI commands."""

import shutil
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

import git
import pytest
from typer.testing import CliRunner

from repo_tools.cli import app
from repo_tools.config import InvalidConfigurationError
from repo_tools.models import Commit
from repo_tools.vcs import CommandFailureError, GitRepository, InvalidRepositoryError

runner = CliRunner()

requires_git = pytest.mark.skipif(
    shutil.which("git") is None,
    reason="git is not installed",
)


@pytest.fixture
def mock_repository() -> MagicMock:
    """Create a repository handle that never runs git."""
    return MagicMock(spec=GitRepository)


def sample_commits() -> list[Commit]:
    """Two commits, newest first."""
    return [
        Commit(
            hash="2222222222222222222222222222222222222222",
            author="Bob <bob@example.com>",
            timestamp=datetime(2024, 3, 5, 14, 2, tzinfo=timezone.utc),
            summary="Second [draft]",
        ),
        Commit(
            hash="1111111111111111111111111111111111111111",
            author="Alice <alice@example.com>",
            timestamp=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            summary="First",
        ),
    ]


class TestLogCommand:
    """Tests for log command."""

    @patch("repo_tools.cli.open_repository")
    def test_log_basic(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test listing commits."""
        mock_repository.commits.return_value = sample_commits()
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["log"])

        assert result.exit_code == 0
        assert "2222222" in result.output
        assert "1111111" in result.output
        assert "Second [draft]" in result.output
        mock_repository.commits.assert_called_once_with(limit=None, reverse=False)

    @patch("repo_tools.cli.open_repository")
    def test_log_with_options(self, mock_open: MagicMock, mock_repository: MagicMock, tmp_path: Path) -> None:
        """Test that limit, order and repository are passed through."""
        mock_repository.commits.return_value = []
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["log", "-n", "3", "--reverse", "--repo", str(tmp_path)])

        assert result.exit_code == 0
        assert "No commits found" in result.output
        mock_open.assert_called_once_with(tmp_path, None)
        mock_repository.commits.assert_called_once_with(limit=3, reverse=True)

    def test_log_rejects_zero_limit(self) -> None:
        """Test that a non-positive limit is a usage error."""
        result = runner.invoke(app, ["log", "--limit", "0"])

        assert result.exit_code != 0

    @patch("repo_tools.cli.open_repository")
    def test_log_invalid_repository(self, mock_open: MagicMock) -> None:
        """Test that a missing working copy exits with an error."""
        mock_open.side_effect = InvalidRepositoryError("Given repository path does not exist: /nowhere")

        result = runner.invoke(app, ["log"])

        assert result.exit_code == 1
        assert "Given repository path does not exist" in result.output

    @patch("repo_tools.cli.open_repository")
    def test_log_configuration_error(self, mock_open: MagicMock) -> None:
        """Test that configuration errors are reported as such."""
        mock_open.side_effect = InvalidConfigurationError("Environment file not found: x.env")

        result = runner.invoke(app, ["log", "--env-file", "x.env"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestStatusCommand:
    """Tests for status command."""

    @pytest.mark.parametrize(("clean", "expected"), [(True, "clean"), (False, "dirty")])
    @patch("repo_tools.cli.open_repository")
    def test_status(self, mock_open: MagicMock, clean: bool, expected: str, mock_repository: MagicMock) -> None:
        """Test clean and dirty output."""
        mock_repository.is_clean.return_value = clean
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert expected in result.output


class TestBranchCommand:
    """Tests for branch command."""

    @patch("repo_tools.cli.open_repository")
    def test_branch(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test printing the current branch."""
        mock_repository.current_branch.return_value = "feature/[wip]"
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["branch"])

        assert result.exit_code == 0
        assert "feature/[wip]" in result.output

    @patch("repo_tools.cli.open_repository")
    def test_branch_detached_head(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test that git failures exit with status 1."""
        mock_repository.current_branch.side_effect = CommandFailureError("", exit_code=1)
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["branch"])

        assert result.exit_code == 1


class TestDiffCommand:
    """Tests for diff command."""

    @patch("repo_tools.cli.open_repository")
    def test_diff(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test that diff text is printed as-is."""
        mock_repository.diff.return_value = "diff --git a/x b/x\n-[old]\n+[new]\n"
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["diff", "main", "feature"])

        assert result.exit_code == 0
        assert "-[old]" in result.output
        assert "+[new]" in result.output
        mock_repository.diff.assert_called_once_with("main", "feature")

    @patch("repo_tools.cli.open_repository")
    def test_diff_unknown_revision(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test that git's diagnostic is shown."""
        mock_repository.diff.side_effect = CommandFailureError(
            "fatal: ambiguous argument 'nope': unknown revision or path not in the working tree.\n",
            exit_code=128,
        )
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["diff", "nope", "HEAD"])

        assert result.exit_code == 1
        assert "unknown revision" in result.output


class TestRemotesCommand:
    """Tests for remotes command."""

    @patch("repo_tools.cli.open_repository")
    def test_remotes(self, mock_open: MagicMock, mock_repository: MagicMock) -> None:
        """Test one remote per line."""
        mock_repository.remotes.return_value = ["origin", "upstream"]
        mock_open.return_value = mock_repository

        result = runner.invoke(app, ["remotes"])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["origin", "upstream"]


class TestVersionCommand:
    """Tests for version command."""

    def test_version(self) -> None:
        """Test version output."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "repo-tools version" in result.output


@requires_git
class TestCliAgainstRealRepository:
    """Tests running the CLI against a real working copy."""

    def test_log(self, git_repo: Path) -> None:
        """Test listing the initial commit."""
        short_hash = git.Repo(git_repo).head.commit.hexsha[:7]

        result = runner.invoke(app, ["log", "--repo", str(git_repo)])

        assert result.exit_code == 0
        assert short_hash in result.output

    def test_status_dirty(self, git_repo: Path) -> None:
        """Test that an untracked file makes the working copy dirty."""
        (git_repo / "untracked.txt").write_text("x\n")

        result = runner.invoke(app, ["status", "--repo", str(git_repo)])

        assert result.exit_code == 0
        assert "dirty" in result.output

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """Test running against a plain directory."""
        result = runner.invoke(app, ["status", "--repo", str(tmp_path)])

        assert result.exit_code == 1
        assert "Given repository path does not exist" in result.output
