"""Configuration management for repo-tools."""

from repo_tools.config.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
)
from repo_tools.config.models import RepoToolsConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "RepoToolsConfig",
]
