"""Models for VCS operations."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class VcsSettings(BaseModel):
    """Options shared by clone and update operations."""

    flat: bool = Field(
        default=False,
        description="Do not fetch nested sub-repositories when cloning",
    )
    quiet: bool = Field(default=False, description="Reserved, currently has no effect")
    debug: bool = Field(default=False, description="Reserved, currently has no effect")


class AvailabilityState(BaseModel):
    """Cached result of probing a VCS client executable.

    Once ``checked`` is set, ``available`` is reused until an explicit re-check.
    ``searched`` guards the executable search so it runs at most once.
    """

    checked: bool = False
    available: bool = False
    searched: bool = False


class CloneRequest(BaseModel):
    """Everything needed to create a new local checkout."""

    destination: Path = Field(description="Directory the checkout is created in")
    source: str = Field(description="Remote URL or local path to clone from")
    branch: str | None = Field(default=None, description="Branch to check out")
    version: str | None = Field(default=None, description="Tag or revision to check out")
    settings: VcsSettings | None = Field(default=None, description="Per-request settings override")

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        """Ensure the source locator is not blank.

        Args:
            v: Source locator

        Returns:
            Stripped source locator

        Raises:
            ValueError: If the locator is empty
        """
        v = v.strip()
        if not v:
            raise ValueError("Source locator must not be empty")
        return v

    @field_validator("branch", "version")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty branch or version names as not given."""
        if v is None:
            return None
        v = v.strip()
        return v or None
