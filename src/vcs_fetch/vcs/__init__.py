"""Version Control System abstraction for vcs-fetch.

This module hides Git and Mercurial behind one interface so a dependency
fetcher can clone and update library checkouts without knowing which VCS
backs a given library.
"""

from vcs_fetch.vcs.base import Vcs
from vcs_fetch.vcs.exceptions import (
    BranchCheckoutError,
    CloneError,
    VCSError,
    VcsUnavailableError,
    VersionCheckoutError,
)
from vcs_fetch.vcs.models import AvailabilityState, CloneRequest, VcsSettings
from vcs_fetch.vcs.registry import VCSRegistry, VCSType
from vcs_fetch.vcs.runner import CommandResult, run_command

__all__ = [
    "AvailabilityState",
    "BranchCheckoutError",
    "CloneError",
    "CloneRequest",
    "CommandResult",
    "VCSError",
    "VCSRegistry",
    "VCSType",
    "Vcs",
    "VcsSettings",
    "VcsUnavailableError",
    "VersionCheckoutError",
    "run_command",
]
