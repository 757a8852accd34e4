"""Exceptions raised while loading repo-tools settings."""


class ConfigurationError(Exception):
    """Base exception for settings that cannot be loaded."""


class InvalidConfigurationError(ConfigurationError):
    """A setting or settings file is unusable (blank value, missing env file)."""
