"""Configuration models."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from repo_tools.config.exceptions import InvalidConfigurationError

DEFAULT_GIT_BINARY = "git"
DEFAULT_LOCALE = "en_US.UTF-8"


class RepoToolsConfig(BaseSettings):
    """Configuration for repo-tools."""

    git_binary: str = Field(
        default=DEFAULT_GIT_BINARY,
        description="Name or path of the git executable",
    )
    locale: str = Field(
        default=DEFAULT_LOCALE,
        description="Value forced into LC_ALL for every git invocation",
    )
    repo_path: Path | None = Field(
        default=None,
        description="Working copy to operate on (default: current directory)",
    )

    model_config = SettingsConfigDict(
        env_file=[".env.repotools", ".env"],
        env_file_encoding="utf-8",
        env_prefix="REPO_TOOLS_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        """Initialize configuration.

        Args:
            **kwargs: Configuration values; ``env_file`` selects a specific
                environment file instead of the default lookup

        Raises:
            InvalidConfigurationError: If env_file is specified but does not exist
        """
        env_file = kwargs.pop("env_file", None)

        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise InvalidConfigurationError(f"Environment file not found: {env_file}")
            kwargs["_custom_env_file"] = env_path

        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Swap the default dotenv source for a caller-supplied env file.

        Args:
            settings_cls: The settings class being instantiated
            init_settings: Settings from __init__ arguments
            env_settings: Settings from environment variables
            dotenv_settings: Settings from .env files
            file_secret_settings: Settings from secret files

        Returns:
            Tuple of settings sources in priority order
        """
        init_kwargs = init_settings.init_kwargs  # type: ignore[attr-defined]
        custom_env_path = init_kwargs.get("_custom_env_file")

        if custom_env_path is not None:
            custom_dotenv = DotEnvSettingsSource(
                settings_cls,
                env_file=custom_env_path,
                env_file_encoding="utf-8",
            )
            return (init_settings, env_settings, custom_dotenv, file_secret_settings)

        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @field_validator("git_binary", "locale")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank values.

        Args:
            v: Raw value

        Returns:
            Stripped value

        Raises:
            InvalidConfigurationError: If the value is empty
        """
        stripped = v.strip()
        if not stripped:
            raise InvalidConfigurationError("git_binary and locale must not be empty")
        return stripped

    def resolve_repo_path(self) -> Path:
        """Return the configured working copy, falling back to the current directory.

        Returns:
            Path to operate on
        """
        return Path(self.repo_path or Path.cwd())
