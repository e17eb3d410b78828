"""VCS identifiers and the registry of VCS clients.

The registry maps each identifier to one long-lived client instance and can
guess which VCS backs a library from its directory layout.
"""

import logging
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from vcs_fetch.vcs.base import ConfirmFn, Vcs
    from vcs_fetch.vcs.models import VcsSettings
    from vcs_fetch.vcs.runner import CommandRunner

logger = logging.getLogger(__name__)


class VCSType(str, Enum):
    """Supported version control systems.

    The value doubles as the name of the subdirectory holding a library's
    checkout (``<library>/git``, ``<library>/hg``).
    """

    GIT = "git"
    MERCURIAL = "hg"

    @property
    def display_name(self) -> str:
        """Get display name for the VCS type.

        Returns:
            Human-readable name
        """
        return {
            VCSType.GIT: "Git",
            VCSType.MERCURIAL: "Mercurial",
        }[self]

    @classmethod
    def parse(cls, value: "str | VCSType") -> "VCSType":
        """Parse a VCS identifier.

        Args:
            value: Identifier string or enum member

        Returns:
            Matching VCSType

        Raises:
            ValueError: If the identifier is not supported
        """
        if isinstance(value, VCSType):
            return value
        try:
            return cls(value.lower())
        except ValueError as e:
            msg = f"Unsupported VCS type: {value}"
            raise ValueError(msg) from e


class VCSRegistry:
    """Registry of VCS clients keyed by VCSType.

    Built-in clients are created on ``initialize()``, which every lookup calls
    first, so the registry can be initialized explicitly at start-up or
    lazily on first use. Initialization only fills missing entries and never
    replaces a registered override.
    """

    def __init__(
        self,
        settings: "VcsSettings | None" = None,
        runner: "CommandRunner | None" = None,
        confirm: "ConfirmFn | None" = None,
        console: Console | None = None,
        executables: "dict[VCSType, str] | None" = None,
    ) -> None:
        """Initialize the registry.

        Args:
            settings: Default settings handed to built-in clients
            runner: Process runner handed to built-in clients
            confirm: Confirmation prompt handed to built-in clients
            console: Console handed to built-in clients
            executables: Executable overrides per VCS type
        """
        self._settings = settings
        self._runner = runner
        self._confirm = confirm
        self._console = console
        self._executables = executables or {}
        self._entries: "dict[VCSType, Vcs]" = {}

    def initialize(self) -> None:
        """Create the built-in clients that are not registered yet."""
        for vcs_type in VCSType:
            if vcs_type not in self._entries:
                self._entries[vcs_type] = self._create_builtin(vcs_type)

    def _create_builtin(self, vcs_type: VCSType) -> "Vcs":
        kwargs = {
            "executable": self._executables.get(vcs_type),
            "settings": self._settings,
            "runner": self._runner,
            "confirm": self._confirm,
            "console": self._console,
        }
        if vcs_type == VCSType.GIT:
            from vcs_fetch.vcs.git.manager import GitVcs

            return GitVcs(**kwargs)
        elif vcs_type == VCSType.MERCURIAL:
            from vcs_fetch.vcs.mercurial.manager import MercurialVcs

            return MercurialVcs(**kwargs)
        else:
            msg = f"Unsupported VCS type: {vcs_type}"
            raise ValueError(msg)

    def get(self, vcs_type: VCSType | str) -> "Vcs | None":
        """Get the client registered for a VCS type.

        Args:
            vcs_type: VCS type or identifier string

        Returns:
            Registered client, or None if the identifier is unknown or nothing
            is registered for it
        """
        try:
            key = VCSType.parse(vcs_type)
        except ValueError:
            logger.debug(f"No client for unsupported VCS type {vcs_type!r}")
            return None
        self.initialize()
        return self._entries.get(key)

    def register(self, vcs_type: VCSType | str, vcs: "Vcs", overwrite: bool = False) -> bool:
        """Register a client for a VCS type.

        Args:
            vcs_type: VCS type or identifier string
            vcs: Client to register
            overwrite: Replace an existing registration

        Returns:
            True if the client was registered

        Raises:
            ValueError: If the identifier is not supported
        """
        key = VCSType.parse(vcs_type)
        if key in self._entries and not overwrite:
            logger.debug(f"Keeping existing {key.display_name} client")
            return False
        self._entries[key] = vcs
        return True

    def detect_from_directory(self, path: str | Path) -> "Vcs | None":
        """Guess the VCS of a library from its directory layout.

        Looks for a subdirectory named after each VCS identifier, in
        registration order.

        Args:
            path: Library directory

        Returns:
            Client for the first marker subdirectory found, or None
        """
        self.initialize()
        library_path = Path(path)
        for vcs_type, vcs in self._entries.items():
            if (library_path / vcs_type.value).is_dir():
                logger.debug(f"Detected {vcs_type.display_name} checkout in {library_path}")
                return vcs
        return None

    def types(self) -> list[VCSType]:
        """Get registered VCS types in registration order.

        Returns:
            Registered VCS types
        """
        self.initialize()
        return list(self._entries)

    def __iter__(self) -> Iterator["Vcs"]:
        self.initialize()
        return iter(list(self._entries.values()))
