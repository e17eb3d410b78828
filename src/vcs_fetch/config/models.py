"""Configuration models."""

from pathlib import Path
from typing import Any, Self

from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from vcs_fetch.config.exceptions import InvalidConfigurationError, MissingConfigurationError
from vcs_fetch.vcs.models import VcsSettings
from vcs_fetch.vcs.registry import VCSType


class VcsFetchConfig(BaseSettings):
    """Configuration for vcs-fetch."""

    # Clone/update behaviour
    flat: bool = Field(
        default=False,
        description="Do not fetch nested sub-repositories (Git submodules) when cloning",
    )
    quiet: bool = Field(default=False, description="Reserved for quieter client output")
    debug: bool = Field(default=False, description="Reserved for client debug output")

    # Prompt answers
    always_yes: bool = Field(
        default=False,
        description="Answer yes to every confirmation (discard local changes without asking)",
    )
    never: bool = Field(
        default=False,
        description="Answer no to every confirmation (never discard local changes)",
    )

    # Executables
    git_executable: str = Field(default="git", description="Git client executable")
    hg_executable: str = Field(default="hg", description="Mercurial client executable")

    model_config = SettingsConfigDict(
        env_file=[".env.vcsfetch", ".env"],
        env_file_encoding="utf-8",
        env_prefix="VCS_FETCH_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(
        self,
        _env_file: str | Path | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize configuration.

        Args:
            _env_file: Optional path to custom env file (use env_file for public API)
            **kwargs: Additional configuration values

        Raises:
            InvalidConfigurationError: If _env_file is specified but does not exist
        """
        env_file = kwargs.pop("env_file", _env_file)

        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise InvalidConfigurationError(f"Environment file not found: {env_file}", "env_file")
            # settings_customise_sources picks the path up from init kwargs
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
        """Customize settings sources to support a custom env file.

        Args:
            settings_cls: The settings class being instantiated
            init_settings: Settings from __init__ arguments
            env_settings: Settings from environment variables
            dotenv_settings: Settings from .env files
            file_secret_settings: Settings from secret files

        Returns:
            Tuple of settings sources in priority order
        """
        # init_kwargs exists at runtime but may not be in type stubs
        init_kwargs = init_settings.init_kwargs  # type: ignore[attr-defined]
        custom_env_path = init_kwargs.get("_custom_env_file")

        if custom_env_path is not None:
            custom_dotenv = DotEnvSettingsSource(
                settings_cls,
                env_file=custom_env_path,
                env_file_encoding="utf-8",
            )
            return (init_settings, custom_dotenv, env_settings, file_secret_settings)

        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    @field_validator("git_executable", "hg_executable")
    @classmethod
    def validate_executable(cls, v: str, info: ValidationInfo) -> str:
        """Ensure executable names are not blank.

        Args:
            v: Executable name or path
            info: Validation context naming the field

        Returns:
            Stripped executable

        Raises:
            MissingConfigurationError: If the value is empty
        """
        v = v.strip()
        if not v:
            raise MissingConfigurationError(f"VCS_FETCH_{str(info.field_name).upper()}")
        return v

    @model_validator(mode="after")
    def validate_answers(self) -> Self:
        """Ensure at most one automatic answer is configured.

        Returns:
            Self

        Raises:
            InvalidConfigurationError: If both always_yes and never are set
        """
        if self.always_yes and self.never:
            raise InvalidConfigurationError("VCS_FETCH_ALWAYS_YES and VCS_FETCH_NEVER cannot both be set")
        return self

    def to_vcs_settings(self) -> VcsSettings:
        """Build the settings handed to VCS clients.

        Returns:
            Clone/update settings
        """
        return VcsSettings(flat=self.flat, quiet=self.quiet, debug=self.debug)

    @property
    def executables(self) -> dict[VCSType, str]:
        """Get the configured executable per VCS type.

        Returns:
            Mapping of VCS type to executable
        """
        return {
            VCSType.GIT: self.git_executable,
            VCSType.MERCURIAL: self.hg_executable,
        }

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.vcsfetch and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in [".env.vcsfetch", ".env"]:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None
