"""Parser for git's medium log format.

Each entry in ``git log --format=medium`` output looks like::

    commit <hash>
    Author: <author>
    Date:   <weekday> <month> <day> <hh:mm:ss> <year> <offset>

        <summary>

The parser walks the lines once, collecting the hash and author of the
entry in progress and emitting a Commit when the Date: line arrives.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import ValidationError

from repo_tools.models import GIT_DATE_FORMAT, Commit
from repo_tools.vcs.exceptions import LogParseError

logger = logging.getLogger(__name__)

COMMIT_TOKEN = "commit"
AUTHOR_TOKEN = "Author:"
DATE_TOKEN = "Date:"

# "Date:" is followed by three spaces of padding, so the date starts at field 4
DATE_FIELD_OFFSET = 3
SUMMARY_LINE_OFFSET = 2


class ParserState(Enum):
    """Position of the parser within a log entry."""

    AWAITING_HASH = "awaiting_hash"
    AWAITING_AUTHOR = "awaiting_author"
    AWAITING_DATE = "awaiting_date"


@dataclass
class _PendingCommit:
    """Header fields collected for the entry currently being read."""

    hash: str | None = None
    author: str | None = None

    @property
    def state(self) -> ParserState:
        if self.hash is None:
            return ParserState.AWAITING_HASH
        if self.author is None:
            return ParserState.AWAITING_AUTHOR
        return ParserState.AWAITING_DATE


def parse_date(text: str) -> datetime:
    """Parse the date text of a Date: header.

    Args:
        text: Date text, e.g. ``Mon Jan 1 12:00:00 2024 +0000``

    Returns:
        Timezone-aware datetime

    Raises:
        LogParseError: If the text does not match git's date layout
    """
    try:
        return datetime.strptime(text, GIT_DATE_FORMAT)
    except ValueError as e:
        raise LogParseError(f"Invalid commit date: {text!r}") from e


class LogParser:
    """Turns medium-format log text into Commit records.

    The parser keeps only the header fields of the entry in progress. Header
    lines are not required to be contiguous: a Date: line completes whatever
    hash and author were last seen.
    """

    def __init__(self) -> None:
        self._pending = _PendingCommit()

    @property
    def state(self) -> ParserState:
        """Get the current parser state.

        Returns:
            State derived from the pending header fields
        """
        return self._pending.state

    def reset(self) -> None:
        """Discard any partially read entry."""
        self._pending = _PendingCommit()

    def step(self, line: str, summary_line: str | None = None) -> Commit | None:
        """Consume one line of log output.

        Args:
            line: The line to consume
            summary_line: The line two positions below ``line``, if any; only
                used when ``line`` completes an entry

        Returns:
            A Commit when ``line`` completes an entry, otherwise None

        Raises:
            LogParseError: If a completed entry carries an invalid date
        """
        parts = line.split(" ")
        keyword = parts[0]

        if keyword == COMMIT_TOKEN:
            if len(parts) < 2 or not parts[1]:
                logger.debug("Ignoring commit line without a hash: %r", line)
                return None
            self._pending.hash = parts[1]
            return None

        if keyword == AUTHOR_TOKEN:
            if self._pending.hash is None:
                logger.debug("Ignoring Author: line outside of an entry: %r", line)
                return None
            self._pending.author = " ".join(parts[1:])
            return None

        if keyword == DATE_TOKEN and self.state is ParserState.AWAITING_DATE:
            timestamp = parse_date(" ".join(parts[DATE_FIELD_OFFSET:]))
            summary = summary_line.strip() if summary_line is not None else ""

            try:
                commit = Commit(
                    hash=self._pending.hash,
                    author=self._pending.author,
                    timestamp=timestamp,
                    summary=summary,
                )
            except ValidationError as e:
                raise LogParseError(f"Invalid log entry for commit {self._pending.hash}: {e}") from e

            self.reset()
            return commit

        return None

    def parse(self, raw_log: str) -> list[Commit]:
        """Parse a complete log listing.

        Args:
            raw_log: Output of ``git log --format=medium``

        Returns:
            Commits in the order they appear in the listing; empty if there are none

        Raises:
            LogParseError: If any entry carries an invalid date
        """
        self.reset()
        # Only "\n" separates lines; git indents message text after "\n" alone
        lines = raw_log.split("\n")
        commits: list[Commit] = []

        for index, line in enumerate(lines):
            summary_index = index + SUMMARY_LINE_OFFSET
            summary_line = lines[summary_index] if summary_index < len(lines) else None

            commit = self.step(line, summary_line)
            if commit is not None:
                commits.append(commit)

        self.reset()
        return commits


def parse_log(raw_log: str) -> list[Commit]:
    """Parse a medium-format log listing with a fresh parser.

    Args:
        raw_log: Output of ``git log --format=medium``

    Returns:
        Commits in listing order
    """
    return LogParser().parse(raw_log)
