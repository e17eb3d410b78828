"""VCS exceptions for vcs-fetch.

Each exception carries the VCS implementation that raised it so callers can
format a precise message (display name, executable) without knowing which
VCS backs a dependency.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vcs_fetch.vcs.base import Vcs


class VCSError(Exception):
    """Base exception for all VCS-related errors."""

    def __init__(self, message: str, vcs: "Vcs") -> None:
        """Initialize VCS error.

        Args:
            message: Error message
            vcs: VCS implementation the error originates from
        """
        super().__init__(message)
        self.vcs = vcs


class VcsUnavailableError(VCSError):
    """Raised when the VCS client executable cannot be found or does not respond."""

    def __init__(self, vcs: "Vcs") -> None:
        super().__init__(
            f"Could not use {vcs.executable}, please make sure it is installed and available in your PATH.",
            vcs,
        )


class CloneError(VCSError):
    """Raised when cloning a repository fails."""

    def __init__(self, vcs: "Vcs", repo: str, diagnostic: str | None = None) -> None:
        """Initialize clone error.

        Args:
            vcs: VCS implementation used for the clone
            repo: Source locator (URL or local path) that could not be cloned
            diagnostic: Captured failure output of the client, if any
        """
        msg = f"Could not clone {vcs.name} repository {repo}"
        if diagnostic:
            msg = f"{msg}:\n{diagnostic.strip()}"
        super().__init__(msg, vcs)
        self.repo = repo
        self.diagnostic = diagnostic


class BranchCheckoutError(VCSError):
    """Raised when checking out the requested branch after a clone fails."""

    def __init__(self, vcs: "Vcs", branch: str, diagnostic: str) -> None:
        super().__init__(f'Could not checkout branch, tag or path "{branch}": {diagnostic.strip()}', vcs)
        self.branch = branch
        self.diagnostic = diagnostic


class VersionCheckoutError(VCSError):
    """Raised when checking out the requested tag after a clone fails."""

    def __init__(self, vcs: "Vcs", version: str, diagnostic: str) -> None:
        super().__init__(f'Could not checkout tag "{version}": {diagnostic.strip()}', vcs)
        self.version = version
        self.diagnostic = diagnostic
