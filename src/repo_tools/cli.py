"""Command-line interface for repo-tools."""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from repo_tools import __version__
from repo_tools.config import ConfigurationError, RepoToolsConfig
from repo_tools.vcs import GitRepository, VCSError

app = typer.Typer(
    name="repo-tools",
    help="Inspect git working copies from the command line",
    add_completion=False,
)
console = Console()

# Help text constants
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.repotools or .env)"
REPO_HELP = "Working copy to operate on (overrides config)"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def open_repository(repo: Path | None, env_file: str | None) -> GitRepository:
    """Load configuration and open the working copy.

    Args:
        repo: Working copy given on the command line, if any
        env_file: Custom environment file, if any

    Returns:
        Repository handle
    """
    config = RepoToolsConfig(env_file=env_file)
    return GitRepository.from_config(config, repo)


def _fail(error: Exception, verbose: bool) -> NoReturn:
    if isinstance(error, ConfigurationError):
        console.print(f"[red]Configuration error: {escape(str(error))}[/red]")
    else:
        console.print(f"[red]Error: {escape(str(error).strip())}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


@app.command()
def log(
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        min=1,
        help="Maximum number of commits to show",
    ),
    reverse: bool = typer.Option(
        False,
        "--reverse",
        help="Show oldest commits first",
    ),
    repo: Path | None = typer.Option(None, "--repo", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Show commit history."""
    setup_logging(verbose)

    try:
        repository = open_repository(repo, env_file)
        commits = repository.commits(limit=limit, reverse=reverse)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)

    if not commits:
        console.print("[yellow]No commits found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Author")
    table.add_column("Summary")

    for commit in commits:
        table.add_row(
            commit.short_hash,
            commit.timestamp.strftime("%Y-%m-%d %H:%M"),
            escape(commit.author),
            escape(commit.summary),
        )

    console.print(table)


@app.command()
def status(
    repo: Path | None = typer.Option(None, "--repo", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Report whether the working copy is clean."""
    setup_logging(verbose)

    try:
        repository = open_repository(repo, env_file)
        clean = repository.is_clean()
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)

    if clean:
        console.print("[green]clean[/green]")
    else:
        console.print("[yellow]dirty[/yellow]")


@app.command()
def branch(
    repo: Path | None = typer.Option(None, "--repo", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Print the current branch name."""
    setup_logging(verbose)

    try:
        repository = open_repository(repo, env_file)
        name = repository.current_branch()
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)

    console.print(name, markup=False, highlight=False)


@app.command()
def diff(
    from_revision: str = typer.Argument(..., help="Base revision"),
    to_revision: str = typer.Argument(..., help="Target revision"),
    repo: Path | None = typer.Option(None, "--repo", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Print the diff between two revisions."""
    setup_logging(verbose)

    try:
        repository = open_repository(repo, env_file)
        output = repository.diff(from_revision, to_revision)
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)

    # Raw diff text must not be reinterpreted as rich markup
    console.print(output, markup=False, highlight=False, end="")


@app.command()
def remotes(
    repo: Path | None = typer.Option(None, "--repo", help=REPO_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """List configured remotes."""
    setup_logging(verbose)

    try:
        repository = open_repository(repo, env_file)
        names = repository.remotes()
    except (ConfigurationError, VCSError) as e:
        _fail(e, verbose)

    for name in names:
        console.print(name, markup=False, highlight=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"repo-tools version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
