"""Top-level models for repo-tools."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

# Layout of the Date: header in git's medium log format
GIT_DATE_FORMAT = "%a %b %d %H:%M:%S %Y %z"


def format_git_date(value: datetime) -> str:
    """Render a timestamp the way ``git log --format=medium`` prints it.

    Git does not zero-pad the day of month, which strftime cannot express
    portably, so the day is inserted separately.

    Args:
        value: Timezone-aware timestamp

    Returns:
        Date text such as ``Tue Mar 5 14:02:11 2024 +0100``
    """
    return f"{value:%a %b} {value.day} {value:%H:%M:%S %Y %z}"


class Commit(BaseModel):
    """A single commit parsed from a log listing."""

    model_config = ConfigDict(frozen=True)

    hash: str = Field(min_length=1, description="Full hexadecimal object id")
    author: str = Field(description="Author as printed by git, e.g. 'Jane <jane@example.com>'")
    timestamp: AwareDatetime = Field(description="Author date with its UTC offset")
    summary: str = Field(default="", description="First line of the commit message, trimmed")

    @property
    def short_hash(self) -> str:
        """Get the abbreviated object id.

        Returns:
            First seven characters of the hash
        """
        return self.hash[:7]

    def __str__(self) -> str:
        return (
            f"commit {self.hash}\n"
            f"Author: {self.author}\n"
            f"Date:   {format_git_date(self.timestamp)}\n"
            "\n"
            f"    {self.summary}\n"
        )
