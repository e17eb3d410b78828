"""Configuration management for vcs-fetch."""

from vcs_fetch.config.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from vcs_fetch.config.models import VcsFetchConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "VcsFetchConfig",
]
