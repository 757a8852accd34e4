"""Shared fixtures for repo-tools tests."""

from pathlib import Path

import git
import pytest


@pytest.fixture
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git from the user's configuration.

    Args:
        tmp_path: Pytest temporary directory fixture
        monkeypatch: Pytest monkeypatch fixture
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def git_repo(tmp_path: Path, git_env: None) -> Path:
    """Create a temporary Git repository with one commit.

    Args:
        tmp_path: Pytest temporary directory fixture
        git_env: Isolated git environment

    Returns:
        Path to the temporary Git repository
    """
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    repo = git.Repo.init(repo_dir)

    test_file = repo_dir / "test.py"
    test_file.write_text("print('hello')\n")
    repo.index.add(["test.py"])
    repo.index.commit("Initial commit")

    return repo_dir
