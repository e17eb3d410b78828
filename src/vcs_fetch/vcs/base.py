"""Abstract base class for version control system clients.

This module defines the common interface that all VCS implementations
(Git, Mercurial) must implement, along with the shared machinery for
invoking the client executable and discovering it at runtime.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from rich.console import Console

from vcs_fetch.vcs.exceptions import VcsUnavailableError
from vcs_fetch.vcs.locator import append_to_search_path, derive_bin_candidates, search_path_entries
from vcs_fetch.vcs.models import AvailabilityState, VcsSettings
from vcs_fetch.vcs.runner import CommandResult, CommandRunner, run_command

if TYPE_CHECKING:
    from vcs_fetch.vcs.registry import VCSType

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


class Vcs(ABC):
    """Abstract base class for VCS clients.

    An instance describes one VCS family (display name, marker directory,
    executable) and owns the cached availability state of its executable.
    Instances are meant to be long-lived: the executable search only runs
    once per instance.
    """

    vcs_type: ClassVar["VCSType"]
    name: ClassVar[str]
    directory: ClassVar[str]
    default_executable: ClassVar[str]
    probe_args: ClassVar[tuple[str, ...]] = ()
    install_dirs: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        executable: str | None = None,
        settings: VcsSettings | None = None,
        runner: CommandRunner | None = None,
        confirm: ConfirmFn | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize VCS client.

        Args:
            executable: Client executable to invoke (default: the family's usual name)
            settings: Default settings for clone and update
            runner: Process runner (default: run_command)
            confirm: Confirmation prompt used before discarding local changes
            console: Console used for messages shown to the user
        """
        self.executable = executable or self.default_executable
        self.settings = settings if settings is not None else VcsSettings()
        self.runner = runner if runner is not None else run_command
        self.console = console if console is not None else Console()
        self.confirm = confirm if confirm is not None else self._default_confirm
        self.availability = AvailabilityState()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(executable={self.executable!r})"

    @staticmethod
    def _default_confirm(message: str) -> bool:
        from vcs_fetch.ui import ask

        return ask(message)

    # Availability

    @property
    def available(self) -> bool:
        """Check whether the client executable can be used.

        The result is cached. If the first probe fails, the executable is
        searched for once, which may extend the process search path.

        Returns:
            True if the client responds successfully
        """
        state = self.availability
        if not state.checked:
            state.available = self.check_executable()
            if not state.available and not state.searched:
                state.searched = True
                state.available = self.search_executable()
            state.checked = True
        return state.available

    def recheck(self) -> bool:
        """Probe the executable again, ignoring the cached result.

        The executable search is not repeated.

        Returns:
            True if the client responds successfully
        """
        self.availability.checked = False
        return self.available

    def require_available(self) -> None:
        """Ensure the client executable can be used.

        Raises:
            VcsUnavailableError: If the client is not available
        """
        if not self.available:
            raise VcsUnavailableError(self)

    def check_executable(self) -> bool:
        """Probe the executable once, without caching.

        Returns:
            True if the probe exits with code 0
        """
        if not self.executable:
            return False
        return self.runner([self.executable, *self.probe_args]).success

    def search_executable(self) -> bool:
        """Try to make the executable reachable by extending the search path.

        First derives ``bin`` directories from ``<vendor>/<name>/cmd`` entries
        already on the search path, then tries the conventional installation
        directories one by one, stopping at the first that works.

        Returns:
            True if the executable became available
        """
        logger.debug(f"{self.name} not found, searching for {self.executable}")
        for candidate in derive_bin_candidates(self.executable, search_path_entries()):
            append_to_search_path(candidate)
        if self.check_executable():
            return True

        for install_dir in self.install_dirs:
            if Path(install_dir).is_dir():
                append_to_search_path(install_dir)
                if self.check_executable():
                    return True

        logger.debug(f"Could not locate {self.executable}")
        return False

    # Command helpers

    def command(self, *args: str) -> CommandResult:
        """Invoke the client executable.

        Args:
            *args: Arguments passed to the executable

        Returns:
            Result of the invocation
        """
        return self.runner([self.executable, *args])

    def _sure(self, result: CommandResult, action: str) -> bool:
        """Log a failed step of an operation that does not raise.

        Args:
            result: Result of the step
            action: Short description of the step for the log

        Returns:
            True if the step succeeded
        """
        if not result.success:
            logger.error(f"{self.name}: {action} failed (exit code {result.exit_code}): {result.output.strip()}")
        return result.success

    def _print(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def _resolve_settings(self, settings: VcsSettings | None) -> VcsSettings:
        return settings if settings is not None else self.settings

    # Operations

    @abstractmethod
    def clone(
        self,
        destination: str | Path,
        source: str,
        branch: str | None = None,
        version: str | None = None,
        settings: VcsSettings | None = None,
    ) -> None:
        """Create a new local checkout.

        Args:
            destination: Directory to create the checkout in
            source: Remote URL or local path to clone from
            branch: Branch to check out (optional)
            version: Tag or revision to check out (optional)
            settings: Settings overriding the instance defaults (optional)

        Raises:
            CloneError: If the clone command fails
            BranchCheckoutError: If the requested branch cannot be checked out
            VersionCheckoutError: If the requested version cannot be checked out
        """

    @abstractmethod
    def update(self, library_name: str, settings: VcsSettings | None = None) -> bool:
        """Bring the checkout in the current working directory up to date.

        Local modifications are only discarded after confirmation. Never raises
        for failed client commands.

        Args:
            library_name: Name of the library, used in prompts
            settings: Settings overriding the instance defaults (optional)

        Returns:
            True if the checkout was (or may have been) changed
        """
