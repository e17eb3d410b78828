"""Git VCS implementation for vcs-fetch."""

from vcs_fetch.vcs.git.manager import GitVcs

__all__ = [
    "GitVcs",
]
