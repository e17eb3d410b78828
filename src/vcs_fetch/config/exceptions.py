"""Errors raised while loading vcs-fetch configuration."""


class ConfigurationError(Exception):
    """Configuration could not be loaded; the CLI reports it and exits."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class MissingConfigurationError(ConfigurationError):
    """A setting that must name something (such as a client executable) is blank."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} must not be empty", setting)


class InvalidConfigurationError(ConfigurationError):
    """Settings conflict with each other, or the given env file does not exist."""
